"""SQLAlchemy adapter package for stored load orders."""

from __future__ import annotations

from .records import SqlAlchemyRecordIndex, import_plugins, store_patch_layer
from .tables import cell_record_table, create_all_tables, metadata, plugin_table
from .unit_of_work import SqlAlchemyUnitOfWork, StartupError, is_started, shutdown, startup

__all__ = [
    "SqlAlchemyRecordIndex",
    "SqlAlchemyUnitOfWork",
    "StartupError",
    "cell_record_table",
    "create_all_tables",
    "import_plugins",
    "is_started",
    "metadata",
    "plugin_table",
    "shutdown",
    "startup",
    "store_patch_layer",
]
