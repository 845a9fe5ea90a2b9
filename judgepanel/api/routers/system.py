"""System-level API endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ...core import BACKEND_URL, FRONTEND_ORIGIN
from ...services.scoring import RUBRIC_FIELDS, RUBRIC_MAX, RUBRIC_MIN

router = APIRouter(tags=["system"])


@router.get("/health")
def health() -> Dict[str, bool]:
    """Simple readiness check."""

    return {"ok": True}


@router.get("/healthz")
def healthz() -> JSONResponse:
    """Kubernetes-style readiness endpoint."""

    return JSONResponse({"ok": True})


@router.get("/config")
def get_config() -> Dict[str, Any]:
    """Expose frontend configuration values."""

    return {
        "backend_url": BACKEND_URL,
        "frontend_origin": FRONTEND_ORIGIN,
        "rubric": {
            "fields": list(RUBRIC_FIELDS),
            "min": RUBRIC_MIN,
            "max": RUBRIC_MAX,
        },
    }


__all__ = ["router"]
