from __future__ import annotations

import json
import logging
from typing import Any, Optional

from sqlalchemy.orm import sessionmaker

from core.models import AuditEvent

logger = logging.getLogger("it15.audit")


class AuditService:
    """Writes audit events through its own short-lived sessions."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def record(
        self,
        *,
        actor: str,
        action: str,
        resource: str = "",
        ip: str = "",
        ua: str = "",
        result: str = "ok",
        meta: Optional[dict[str, Any]] = None,
    ) -> bool:
        """Persist an audit event with best-effort durability.

        The event is committed independently of any caller transaction. If the
        write fails the event is emitted as an application log instead and
        ``False`` is returned.
        """
        payload = {
            "actor": str(actor or "unknown")[:120],
            "action": str(action or "event")[:80],
            "resource": str(resource or "")[:255],
            "ip": str(ip or "")[:64],
            "ua": str(ua or "")[:255],
            "result": str(result or "ok")[:40],
            "meta_json": json.dumps(meta or {}, ensure_ascii=False),
        }
        session = self._session_factory()
        try:
            session.add(AuditEvent(**payload))
            session.commit()
            return True
        except Exception:
            session.rollback()
            logger.warning(
                "audit_fallback",
                exc_info=True,
                extra={
                    "event": payload["action"],
                    "actor": payload["actor"],
                    "resource": payload["resource"],
                    "result": payload["result"],
                },
            )
            return False
        finally:
            session.close()
