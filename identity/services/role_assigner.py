"""Role lookup, creation and assignment."""

import logging
from collections.abc import Iterable

from sqlalchemy.orm import Session

from identity.models import Role, User
from identity.services import credential_store
from identity.services.errors import AuthErrorCode, AuthServiceError

logger = logging.getLogger(__name__)


def _unique_names(names: Iterable[str]) -> dict[str, str]:
    """Map normalized name -> first spelling seen, dropping blanks and duplicates."""
    unique: dict[str, str] = {}
    for name in names:
        if not name or not name.strip():
            continue
        unique.setdefault(credential_store.normalize(name), name.strip())
    return unique


def resolve_roles(db: Session, names: Iterable[str]) -> list[Role]:
    """Return the Role rows for names; raise UNKNOWN_ROLE if any does not exist."""
    wanted = _unique_names(names)
    if not wanted:
        return []
    found = (
        db.query(Role)
        .filter(Role.normalized_name.in_(list(wanted)))
        .all()
    )
    by_normalized = {role.normalized_name: role for role in found}
    missing = [spelling for key, spelling in wanted.items() if key not in by_normalized]
    if missing:
        raise AuthServiceError(
            AuthErrorCode.UNKNOWN_ROLE,
            "Unknown role(s): " + ", ".join(missing),
        )
    return [by_normalized[key] for key in wanted]


def assign_roles(user: User, roles: Iterable[Role]) -> None:
    """Link roles to user, skipping ones already held. Caller commits."""
    held = {role.normalized_name for role in user.roles}
    for role in roles:
        if role.normalized_name not in held:
            user.roles.append(role)
            held.add(role.normalized_name)


def ensure_roles(db: Session, names: Iterable[str]) -> list[Role]:
    """Create any missing roles and return all requested ones."""
    wanted = _unique_names(names)
    existing = {
        role.normalized_name: role
        for role in db.query(Role).filter(Role.normalized_name.in_(list(wanted))).all()
    }
    created = []
    for key, spelling in wanted.items():
        if key not in existing:
            role = Role(name=spelling, normalized_name=key)
            db.add(role)
            existing[key] = role
            created.append(spelling)
    if created:
        db.commit()
        logger.info("Created roles", extra={"roles": ",".join(created)})
    return [existing[key] for key in wanted]


def has_role(role_names: Iterable[str], name: str) -> bool:
    target = credential_store.normalize(name)
    return any(credential_store.normalize(r) == target for r in role_names)
