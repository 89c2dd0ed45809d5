from __future__ import annotations

from pathlib import Path
from typing import Optional

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy.engine import Connection, Engine

ROOT = Path(__file__).resolve().parent.parent


def alembic_config(connection: Optional[Connection] = None) -> Config:
    """Alembic config for this repo; ``connection`` is reused by ``alembic/env.py`` when given."""
    ini_path = ROOT / "alembic.ini"
    cfg = Config(str(ini_path)) if ini_path.exists() else Config()
    cfg.set_main_option("script_location", str(ROOT / "alembic"))
    if connection is not None:
        cfg.attributes["connection"] = connection
    return cfg


def upgrade_to_head(engine: Engine) -> None:
    """Apply every pending migration on ``engine``."""
    with engine.begin() as conn:
        command.upgrade(alembic_config(conn), "head")


def ensure_up_to_date(engine: Engine) -> None:
    """Raise if the database revision is behind the latest Alembic head."""
    script = ScriptDirectory.from_config(alembic_config())
    expected_heads = set(script.get_heads())

    with engine.connect() as conn:
        context = MigrationContext.configure(conn)
        current_heads = set(context.get_current_heads() or [])

    if not current_heads:
        raise RuntimeError(
            "Database has no Alembic revision. Run 'python -m scripts.manage migrate' before starting the application."
        )

    if current_heads != expected_heads:
        raise RuntimeError(
            f"Alembic migration mismatch. Database heads={current_heads}, expected={expected_heads}. "
            "Apply pending migrations with 'alembic upgrade head'."
        )
