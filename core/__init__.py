from . import models  # re-export module for convenience
from .connection import ConnectionDescriptor, resolve_connection, resolve_from_settings
from .errors import ConfigurationError, MigrationOrSeedError
from .redirect import login_redirect_for
from .settings import get_settings, reset_settings_cache

__all__ = [
    "models",
    "ConnectionDescriptor",
    "resolve_connection",
    "resolve_from_settings",
    "ConfigurationError",
    "MigrationOrSeedError",
    "login_redirect_for",
    "get_settings",
    "reset_settings_cache",
]
