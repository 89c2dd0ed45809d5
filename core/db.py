from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Generator, Union

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine
from sqlalchemy.orm import Session, sessionmaker

from .connection import ConnectionDescriptor

logger = logging.getLogger("it15.db")


def create_engine_for(target: Union[ConnectionDescriptor, URL, str], *, echo: bool = False) -> Engine:
    """Build an engine from a resolved descriptor (or an explicit SQLAlchemy URL)."""
    if isinstance(target, ConnectionDescriptor):
        logger.info("Creating database engine for %s", target.redacted())
        url: Union[URL, str] = target.to_url()
    else:
        url = target
    return create_engine(url, echo=echo, future=True, pool_pre_ping=True)


def make_sessionmaker(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)


@contextmanager
def session_scope(factory: sessionmaker) -> Generator[Session, None, None]:
    """Provide a transactional scope around a series of operations."""
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
