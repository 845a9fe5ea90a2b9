"""Request-scoped dependencies shared by the routers."""

from __future__ import annotations

from fastapi import Depends, Request
from sqlmodel import Session

from ..core import AuthorizationError, get_session
from ..models import Judge
from ..services.judges import Identity, get_or_create_judge


def get_identity(request: Request) -> Identity:
    """Read the signed-in identity from the session cookie."""

    uid = request.session.get("uid")
    if not uid:
        raise AuthorizationError()
    return Identity(
        external_id=str(uid),
        name=request.session.get("name"),
        email=request.session.get("email"),
    )


def get_current_judge(
    identity: Identity = Depends(get_identity),
    session: Session = Depends(get_session),
) -> Judge:
    """Judge for the signed-in identity, registered on first use."""

    return get_or_create_judge(session, identity)


__all__ = ["get_current_judge", "get_identity"]
