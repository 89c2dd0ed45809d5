from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlalchemy import select
from sqlalchemy.orm import Session
from werkzeug.security import generate_password_hash

from .models import Role, User, UserRole
from .settings import PortalSettings

logger = logging.getLogger("it15.seed")

AREA_ROLES = ("Admin", "HumanResource", "Accounting")


@dataclass
class SeedResult:
    created_roles: list[str] = field(default_factory=list)
    created_admin: bool = False


def _normalize(value: str) -> str:
    return value.strip().upper()


def ensure_role(session: Session, name: str) -> tuple[Role, bool]:
    role = session.scalar(select(Role).where(Role.normalized_name == _normalize(name)))
    if role is not None:
        return role, False
    role = Role(name=name, normalized_name=_normalize(name))
    session.add(role)
    session.flush()
    return role, True


def ensure_user_in_role(session: Session, user: User, role: Role) -> None:
    if any(link.role_id == role.id for link in user.roles):
        return
    user.roles.append(UserRole(role=role))
    session.flush()


def initialize(session: Session, settings: PortalSettings) -> SeedResult:
    """Idempotently create the area roles and, when configured, the seeded admin account."""
    result = SeedResult()
    roles: dict[str, Role] = {}
    for name in AREA_ROLES:
        role, created = ensure_role(session, name)
        roles[name] = role
        if created:
            result.created_roles.append(name)

    email = settings.seed_admin_email
    password = settings.seed_admin_password
    if not email or not password:
        logger.info("SEED_ADMIN_PASSWORD not set; skipping admin account")
        session.commit()
        return result

    user = session.scalar(select(User).where(User.normalized_email == _normalize(email)))
    if user is None:
        user = User(
            email=email,
            normalized_email=_normalize(email),
            password_hash=generate_password_hash(password),
            email_confirmed=True,
        )
        session.add(user)
        session.flush()
        result.created_admin = True
        logger.info("Seeded admin account %s", email)
    ensure_user_in_role(session, user, roles["Admin"])

    session.commit()
    return result
