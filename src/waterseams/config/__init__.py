"""Application configuration helpers."""

from __future__ import annotations

from .errors import ConfigurationError
from .logging import configure_logging, get_log_level
from .sources import (
    DEFAULT_AUTHORITY_SOURCES,
    DEFAULT_PATCH_NAME,
    DEFAULT_TRUSTED_SOURCES,
    UPDATE_ESM,
    USSEP,
    ReconcileConfig,
    get_reconcile_config,
)
from .storage import DatabaseConfig, get_database_config

__all__ = [
    "DEFAULT_AUTHORITY_SOURCES",
    "DEFAULT_PATCH_NAME",
    "DEFAULT_TRUSTED_SOURCES",
    "UPDATE_ESM",
    "USSEP",
    "ConfigurationError",
    "DatabaseConfig",
    "ReconcileConfig",
    "configure_logging",
    "get_database_config",
    "get_log_level",
    "get_reconcile_config",
]
