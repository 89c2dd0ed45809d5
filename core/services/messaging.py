from __future__ import annotations

import logging

logger = logging.getLogger("it15.messaging")


class EmailSender:
    """Outgoing e-mail transport used by the identity pages. Logs instead of delivering."""

    def send_email(self, to: str, subject: str, html: str) -> None:
        logger.info("email to=%s subject=%s (%d chars)", to, subject, len(html or ""))


def mask_number(number: str) -> str:
    return ("*" * max(0, len(number) - 4)) + number[-4:]


class SmsSender:
    """Outgoing SMS transport. Logs instead of delivering."""

    def send_sms(self, number: str, message: str) -> None:
        logger.info("sms to=%s (%d chars)", mask_number(number), len(message or ""))
