"""Location of the database that caches imported load orders."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .errors import ConfigurationError

DATA_DIR_ENV: Final[str] = "WATERSEAMS_DATA_DIR"
DATABASE_URI_ENV: Final[str] = "DATABASE_URI"
LOAD_ORDER_DB_FILENAME: Final[str] = "loadorder.db"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    """Connection settings; ``path`` is set only for the managed SQLite file."""

    uri: str
    path: Path | None = None

    @property
    def is_managed(self) -> bool:
        return self.path is not None


def platform_data_dir() -> Path:
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        root = Path(base) if base else Path.home() / "AppData" / "Local"
    else:
        base = os.getenv("XDG_DATA_HOME")
        root = Path(base) if base else Path.home() / ".local" / "share"
    return root / "waterseams"


def get_database_config() -> DatabaseConfig:
    """``DATABASE_URI`` wins; otherwise a SQLite file in the data directory."""

    override = os.getenv(DATABASE_URI_ENV, "").strip()
    if override:
        return DatabaseConfig(uri=override)

    raw_dir = os.getenv(DATA_DIR_ENV, "").strip()
    data_dir = (Path(raw_dir) if raw_dir else platform_data_dir()).expanduser().resolve()
    try:
        data_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigurationError(f"Cannot create data directory {data_dir}: {exc}") from exc
    path = data_dir / LOAD_ORDER_DB_FILENAME
    return DatabaseConfig(uri=f"sqlite+pysqlite:///{path}", path=path)
