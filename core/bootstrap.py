"""Process-start assembly of application services.

``build_services`` runs once, in order, and returns an immutable
:class:`AppServices` that the HTTP layer receives explicitly. Connection
configuration errors raised here are fatal. ``initialize_database`` applies
migrations and seed data and only logs failures.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import httpx
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from . import seed
from .alembic_utils import upgrade_to_head
from .connection import ConnectionDescriptor, resolve_from_settings
from .db import create_engine_for, make_sessionmaker, session_scope
from .errors import MigrationOrSeedError
from .services.audit import AuditService
from .services.messaging import EmailSender, SmsSender
from .settings import PortalSettings, get_settings

logger = logging.getLogger("it15.bootstrap")


@dataclass(frozen=True)
class AppServices:
    settings: PortalSettings
    connection: ConnectionDescriptor
    engine: Engine
    sessionmaker: sessionmaker
    audit: AuditService
    email_sender: EmailSender
    sms_sender: SmsSender
    holiday_http: httpx.Client
    income_http: httpx.Client

    def close(self) -> None:
        self.holiday_http.close()
        self.income_http.close()
        self.engine.dispose()


def build_services(settings: Optional[PortalSettings] = None, *, engine: Optional[Engine] = None) -> AppServices:
    settings = settings or get_settings()

    # ConfigurationError propagates: a bad connection configuration must stop the process
    connection = resolve_from_settings(settings)
    logger.info("Resolved database connection %s", connection.redacted())

    if engine is None:
        engine = create_engine_for(connection)
    session_factory = make_sessionmaker(engine)

    timeout = httpx.Timeout(settings.http_timeout)
    return AppServices(
        settings=settings,
        connection=connection,
        engine=engine,
        sessionmaker=session_factory,
        audit=AuditService(session_factory),
        email_sender=EmailSender(),
        sms_sender=SmsSender(),
        holiday_http=httpx.Client(timeout=timeout),
        income_http=httpx.Client(base_url=settings.income_api_base_url, timeout=timeout),
    )


def migrate_and_seed(services: AppServices) -> Optional[seed.SeedResult]:
    """Migrate to head and apply seed data, raising MigrationOrSeedError on any failure."""
    settings = services.settings
    try:
        if settings.migrate_on_startup:
            upgrade_to_head(services.engine)
            logger.info("Database schema is at head")
        if not settings.seed_on_startup:
            return None
        with session_scope(services.sessionmaker) as session:
            result = seed.initialize(session, settings)
    except Exception as exc:
        raise MigrationOrSeedError(f"{type(exc).__name__}: {exc}", cause=exc) from exc
    logger.info(
        "Seed data applied (new roles: %s, admin created: %s)",
        ", ".join(result.created_roles) or "none",
        result.created_admin,
    )
    return result


def initialize_database(services: AppServices) -> bool:
    """Apply migrations and seed data; failures are logged and startup continues."""
    try:
        migrate_and_seed(services)
    except MigrationOrSeedError:
        logger.exception("An error occurred while migrating or seeding the database.")
        return False
    return True
