from __future__ import annotations

import argparse
import subprocess
import sys

from sqlalchemy import text

from core.alembic_utils import ensure_up_to_date, upgrade_to_head
from core.bootstrap import AppServices, build_services
from core.connection import resolve_from_settings
from core.db import session_scope
from core.errors import ConfigurationError
from core import seed
from core.settings import get_settings


def _services() -> AppServices:
    return build_services(get_settings())


def cmd_show_connection(_: argparse.Namespace) -> int:
    settings = get_settings()
    try:
        descriptor = resolve_from_settings(settings)
    except ConfigurationError as e:
        print(f"Invalid connection configuration: {e.message}", file=sys.stderr)
        return 2
    source = "DATABASE_URL" if settings.database_url else "DEFAULT_CONNECTION"
    print(f"source: {source}")
    print(f"connection: {descriptor.redacted()}")
    return 0


def cmd_migrate(_: argparse.Namespace) -> int:
    services = _services()
    try:
        upgrade_to_head(services.engine)
    finally:
        services.close()
    print("Database upgraded to head")
    return 0


def cmd_verify(_: argparse.Namespace) -> int:
    services = _services()
    try:
        ensure_up_to_date(services.engine)
    except RuntimeError as e:
        print(f"Alembic status: FAIL ({e})", file=sys.stderr)
        return 1
    finally:
        services.close()
    print("Alembic status: OK (DB at head)")
    return 0


def cmd_seed(_: argparse.Namespace) -> int:
    services = _services()
    try:
        with session_scope(services.sessionmaker) as session:
            result = seed.initialize(session, services.settings)
    finally:
        services.close()
    print(f"Roles created: {', '.join(result.created_roles) or 'none'}")
    print(f"Admin account created: {'yes' if result.created_admin else 'no'}")
    return 0


def cmd_db_check(_: argparse.Namespace) -> int:
    services = _services()
    try:
        with services.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    finally:
        services.close()
    print("DB OK")
    return 0


def cmd_make_migration(args: argparse.Namespace) -> int:
    cmd = ["alembic", "revision", "--autogenerate", "-m", args.message]
    print("$", " ".join(cmd))
    return subprocess.call(cmd)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="manage", description="IT15 portal management CLI")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sub.add_parser("show-connection", help="Print the resolved database connection (password redacted)").set_defaults(
        func=cmd_show_connection
    )
    sub.add_parser("migrate", help="Upgrade DB to head").set_defaults(func=cmd_migrate)
    sub.add_parser("verify", help="Fail when the DB is not at the Alembic head").set_defaults(func=cmd_verify)
    sub.add_parser("seed", help="Create area roles and the seeded admin account").set_defaults(func=cmd_seed)
    sub.add_parser("db-check", help="Run a simple DB connectivity check").set_defaults(func=cmd_db_check)

    p_mig = sub.add_parser("make-migration", help="Create an Alembic autogenerate revision")
    p_mig.add_argument("-m", "--message", required=True)
    p_mig.set_defaults(func=cmd_make_migration)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return int(args.func(args))
    except ConfigurationError as e:
        print(f"Invalid connection configuration: {e.message}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
