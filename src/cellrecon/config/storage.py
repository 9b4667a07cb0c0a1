"""Where new-entity mappings are stored."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from .errors import ConfigurationError

APP_DIR_NAME: Final[str] = "cellrecon"
DEFAULT_DB_FILENAME: Final[str] = "cellrecon.db"
DATA_DIR_ENV: Final[str] = "CELLRECON_DATA_DIR"
# Checked in order; the unprefixed name is shared with other tools.
DATABASE_URI_ENVS: Final[tuple[str, ...]] = ("CELLRECON_DATABASE_URI", "DATABASE_URI")


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    database_filename: str = DEFAULT_DB_FILENAME

    def resolve_data_dir(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def ensure_data_dir(self) -> Path:
        data_dir = self.resolve_data_dir()
        if data_dir.exists() and not data_dir.is_dir():
            raise ConfigurationError(f"Data directory {data_dir} exists and is not a directory")
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def database_path(self, *, ensure: bool = True) -> Path:
        base = self.ensure_data_dir() if ensure else self.resolve_data_dir()
        return base / self.database_filename

    def database_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.database_path()}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str
    source: str = "default"


def _default_data_dir() -> Path:
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        base_path = Path(base) if base else (Path.home() / "AppData" / "Local")
    else:
        base = os.getenv("XDG_DATA_HOME")
        base_path = Path(base) if base else (Path.home() / ".local" / "share")
    return (base_path / APP_DIR_NAME).expanduser().resolve()


def get_storage_config() -> StorageConfig:
    env_dir = os.getenv(DATA_DIR_ENV)
    data_dir = Path(env_dir) if env_dir else _default_data_dir()
    return StorageConfig(data_dir=data_dir)


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    """Resolve the database URI from the environment, else a SQLite file in the data dir."""

    for name in DATABASE_URI_ENVS:
        env_uri = os.getenv(name, "").strip()
        if not env_uri:
            continue
        try:
            make_url(env_uri)
        except ArgumentError as exc:
            raise ConfigurationError(f"{name} is not a database URL: {env_uri!r}") from exc
        return DatabaseConfig(uri=env_uri, source=name)
    storage_config = storage or get_storage_config()
    return DatabaseConfig(uri=storage_config.database_uri())
