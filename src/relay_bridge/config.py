from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import Provider
from .protocols import LinkedIdStoreProtocol
from .store import CredentialsLinkedIdStore, SQLiteLinkedIdStore
from .utils import assert_provider

CONFIG_DIR = Path.home() / ".warelay"


class RelaySettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="relay_bridge_",
        extra="ignore",
        env_file=".env",
    )

    config_dir: Path = CONFIG_DIR
    provider: Provider = Provider.WEB
    verbose: bool = False

    # Outbound message splitting
    chunk_max_chars: int = 400

    # Linked-id reverse map: SQLite kv table when set, credentials JSON files otherwise
    lid_mapping_db_path: Path | None = None

    @field_validator("provider", mode="before")
    @classmethod
    def _validate_provider(cls, value: Any) -> Any:
        if isinstance(value, str):
            return assert_provider(value.strip().lower())
        return value

    @field_validator("chunk_max_chars", mode="after")
    @classmethod
    def _positive_chunk_limit(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("chunk_max_chars must be positive")
        return value

    @field_validator("config_dir", mode="after")
    @classmethod
    def _expand_config_dir(cls, value: Path) -> Path:
        return value.expanduser()

    @property
    def credentials_dir(self) -> Path:
        return self.config_dir / "credentials"

    def build_linked_id_store(self) -> LinkedIdStoreProtocol:
        """Return the store the resolver reads linked-id mappings from."""
        if self.lid_mapping_db_path is not None:
            store = SQLiteLinkedIdStore(self.lid_mapping_db_path)
            try:
                store.bootstrap()
            except sqlite3.Error:
                store.close()
                raise
            return store
        return CredentialsLinkedIdStore(self.credentials_dir)
