from __future__ import annotations

from typing import Optional


class PortalError(Exception):
    """Base class for bootstrap-layer errors."""

    def __init__(self, message: str = "An unexpected error occurred", *, cause: Optional[BaseException] = None):
        self.message = message
        self.cause = cause
        super().__init__(message)


class ConfigurationError(PortalError):
    """Connection configuration is malformed or incomplete. Startup must abort."""


class MigrationOrSeedError(PortalError):
    """Schema migration or seed data failed. Logged at startup, not fatal."""
