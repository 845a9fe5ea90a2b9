"""Judge lookup and lazy registration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from loguru import logger
from sqlmodel import Session, select

from ..core.errors import NotFoundError
from ..core.time import isoformat
from ..models import Judge


@dataclass(frozen=True)
class Identity:
    """Authenticated caller as reported by the identity provider."""

    external_id: str
    name: Optional[str] = None
    email: Optional[str] = None


def _display_name(identity: Identity) -> str:
    return (identity.name or "").strip() or (identity.email or "").strip() or "Judge"


def find_judge(session: Session, external_id: str) -> Optional[Judge]:
    return session.exec(select(Judge).where(Judge.external_id == external_id)).first()


def get_or_create_judge(session: Session, identity: Identity) -> Judge:
    """Return the judge for ``identity``, creating it on first use."""

    judge = find_judge(session, identity.external_id)
    if judge:
        changed = False
        if identity.email and judge.email != identity.email:
            judge.email = identity.email
            changed = True
        if identity.name and judge.name != identity.name:
            judge.name = identity.name
            changed = True
        if changed:
            session.add(judge)
            session.commit()
            session.refresh(judge)
        return judge

    judge = Judge(
        external_id=identity.external_id,
        email=identity.email or "",
        name=_display_name(identity),
    )
    session.add(judge)
    session.commit()
    session.refresh(judge)
    logger.info("Registered judge {} ({})", judge.id, judge.name)
    return judge


def require_judge(session: Session, identity: Identity) -> Judge:
    """Return the existing judge for ``identity`` or raise ``NotFoundError``."""

    judge = find_judge(session, identity.external_id)
    if not judge:
        raise NotFoundError("Judge not found")
    return judge


def judge_to_dict(judge: Judge) -> Dict[str, Any]:
    return {
        "id": judge.id,
        "name": judge.name,
        "email": judge.email,
        "created_at": isoformat(judge.created_at),
    }


__all__ = [
    "Identity",
    "find_judge",
    "get_or_create_judge",
    "judge_to_dict",
    "require_judge",
]
