from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from cellrecon.config import (
    ConfigurationError,
    StorageConfig,
    get_database_config,
    get_storage_config,
)

if TYPE_CHECKING:
    from pathlib import Path


def test_storage_config_uses_env_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("CELLRECON_DATA_DIR", str(tmp_path / "data"))

    config = get_storage_config()

    assert config.resolve_data_dir() == (tmp_path / "data").resolve()
    assert config.database_path() == (tmp_path / "data" / "cellrecon.db").resolve()
    assert (tmp_path / "data").is_dir()


def test_storage_config_defaults_to_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("CELLRECON_DATA_DIR", raising=False)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

    config = get_storage_config()

    assert config.resolve_data_dir() == (tmp_path / "cellrecon").resolve()


def test_database_config_prefers_env_uri(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CELLRECON_DATABASE_URI", raising=False)
    monkeypatch.setenv("DATABASE_URI", "sqlite+pysqlite:///:memory:")

    assert get_database_config().uri == "sqlite+pysqlite:///:memory:"
    assert get_database_config().source == "DATABASE_URI"


def test_database_config_falls_back_to_storage(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.delenv("CELLRECON_DATABASE_URI", raising=False)
    monkeypatch.delenv("DATABASE_URI", raising=False)
    storage = StorageConfig(data_dir=tmp_path)

    uri = get_database_config(storage=storage).uri

    assert uri == f"sqlite+pysqlite:///{tmp_path.resolve() / 'cellrecon.db'}"


def test_data_dir_must_be_a_directory(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")

    with pytest.raises(ConfigurationError, match="not a directory"):
        StorageConfig(data_dir=blocker).ensure_data_dir()


def test_prefixed_database_uri_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CELLRECON_DATABASE_URI", "sqlite+pysqlite:///mappings.db")
    monkeypatch.setenv("DATABASE_URI", "postgresql+psycopg://other/app")

    config = get_database_config()

    assert config.uri == "sqlite+pysqlite:///mappings.db"
    assert config.source == "CELLRECON_DATABASE_URI"


def test_malformed_database_uri_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CELLRECON_DATABASE_URI", "not a database url")

    with pytest.raises(ConfigurationError, match="CELLRECON_DATABASE_URI"):
        get_database_config()
