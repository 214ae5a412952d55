from __future__ import annotations

from pathlib import Path  # noqa: TC003

import pytest

from waterseams.config import ConfigurationError, storage


def test_database_uri_uses_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", " sqlite:///override.db ")

    config = storage.get_database_config()

    assert config.uri == "sqlite:///override.db"
    assert not config.is_managed


def test_database_file_lives_in_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)
    monkeypatch.setenv("WATERSEAMS_DATA_DIR", str(tmp_path / "data-dir"))

    config = storage.get_database_config()

    expected_path = (tmp_path / "data-dir" / "loadorder.db").resolve()
    assert config.path == expected_path
    assert config.uri == f"sqlite+pysqlite:///{expected_path}"
    assert expected_path.parent.is_dir()


def test_default_data_dir_follows_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(storage.os, "name", "posix")
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

    assert storage.platform_data_dir() == tmp_path / "waterseams"


def test_unusable_data_dir_raises_configuration_error(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    monkeypatch.delenv("DATABASE_URI", raising=False)
    monkeypatch.setenv("WATERSEAMS_DATA_DIR", str(blocker / "data"))

    with pytest.raises(ConfigurationError, match="data directory"):
        storage.get_database_config()
