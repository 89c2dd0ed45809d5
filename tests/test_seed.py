from __future__ import annotations

from sqlalchemy import select
from werkzeug.security import check_password_hash

from core import seed
from core.models import Role, User


def test_seed_creates_area_roles_once(session, make_settings_env):
    settings = make_settings_env()
    first = seed.initialize(session, settings)
    assert first.created_roles == ["Admin", "HumanResource", "Accounting"]
    assert first.created_admin is False

    second = seed.initialize(session, settings)
    assert second.created_roles == []
    assert len(session.scalars(select(Role)).all()) == 3


def test_seed_admin_account_when_password_configured(session, make_settings_env):
    settings = make_settings_env(SEED_ADMIN_EMAIL="Boss@IT15.local", SEED_ADMIN_PASSWORD="Chang3-me!")
    result = seed.initialize(session, settings)
    assert result.created_admin is True

    user = session.scalar(select(User).where(User.normalized_email == "BOSS@IT15.LOCAL"))
    assert user is not None
    assert user.email == "Boss@IT15.local"
    assert user.email_confirmed is True
    assert check_password_hash(user.password_hash, "Chang3-me!")
    assert user.role_names == ["Admin"]

    again = seed.initialize(session, settings)
    assert again.created_admin is False
    session.refresh(user)
    assert user.role_names == ["Admin"]


def test_existing_user_gains_admin_role(session, make_settings_env):
    session.add(User(email="ops@it15.local", normalized_email="OPS@IT15.LOCAL", password_hash="x"))
    session.commit()
    settings = make_settings_env(SEED_ADMIN_EMAIL="ops@it15.local", SEED_ADMIN_PASSWORD="pw")
    result = seed.initialize(session, settings)
    assert result.created_admin is False
    user = session.scalar(select(User).where(User.normalized_email == "OPS@IT15.LOCAL"))
    assert user.role_names == ["Admin"]
    assert user.password_hash == "x"
