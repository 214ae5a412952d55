"""SQLAlchemy table metadata for stored load orders."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import (
    JSON,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    UniqueConstraint,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

# Plugin names are stored twice: casefolded for lookups, as spelled for display.
plugin_table = Table(
    "plugin",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name_key", String(255), nullable=False, unique=True),
    Column("name", String(255), nullable=False),
    Column("position", Integer, nullable=False, unique=True),
)

cell_record_table = Table(
    "cell_record",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "plugin_id",
        Integer,
        ForeignKey("plugin.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("local_id", Integer, nullable=False),
    Column("form_mod_key", String(255), nullable=False),
    Column("form_mod", String(255), nullable=False),
    Column("editor_id", String(255), nullable=True),
    Column("water_local_id", Integer, nullable=True),
    Column("water_mod", String(255), nullable=True),
    Column("flags", Integer, nullable=False, default=0),
    Column("attributes", JSON, nullable=False, default=dict),
    UniqueConstraint("plugin_id", "local_id", "form_mod_key"),
    Index("ix_cell_record_form_key", "local_id", "form_mod_key"),
)


def create_all_tables(engine: Engine) -> None:
    log.info("Creating all tables")
    metadata.create_all(engine)
