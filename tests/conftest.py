from __future__ import annotations

import json
import os
from typing import TYPE_CHECKING, Any

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from waterseams.adapters.sqlalchemy import (
    SqlAlchemyUnitOfWork,
    create_all_tables,
    shutdown,
    startup,
)

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

    from tests.helpers.dumps import DumpWriter


@pytest.fixture(autouse=True)
def _clear_waterseams_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("WATERSEAMS_PATCH_NAME", "WATERSEAMS_FAULT_ISOLATION", "WATERSEAMS_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, future=True)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()


@pytest.fixture
def write_dump(tmp_path: Path) -> DumpWriter:
    def _write(file_name: str, plugins: list[dict[str, Any]]) -> Path:
        path = tmp_path / file_name
        path.write_text(json.dumps({"plugins": plugins}), encoding="utf-8")
        return path

    return _write
