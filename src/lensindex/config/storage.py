"""Where lensindex keeps its local files."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DATA_DIR_ENV = "LENSINDEX_DATA_DIR"
DATABASE_FILE = "lensindex.db"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Local data directory holding the SQLite database."""

    data_dir: Path

    def directory(self, *, create: bool = True) -> Path:
        path = self.data_dir.expanduser().resolve()
        if create:
            path.mkdir(parents=True, exist_ok=True)
        return path

    def database_path(self, *, create: bool = True) -> Path:
        return self.directory(create=create) / DATABASE_FILE


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def get_storage_config() -> StorageConfig:
    configured = os.getenv(DATA_DIR_ENV)
    if configured:
        return StorageConfig(data_dir=Path(configured))
    xdg_data_home = os.getenv("XDG_DATA_HOME")
    base = Path(xdg_data_home) if xdg_data_home else Path.home() / ".local" / "share"
    return StorageConfig(data_dir=base / "lensindex")


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    """``DATABASE_URI`` if set, else a SQLite file inside the data directory."""

    uri = os.getenv("DATABASE_URI")
    if uri:
        return DatabaseConfig(uri=uri)
    database_path = (storage or get_storage_config()).database_path()
    return DatabaseConfig(uri=f"sqlite+pysqlite:///{database_path}")
