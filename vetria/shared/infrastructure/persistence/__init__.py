"""Persistence adapters (DuckDB)."""

from vetria.shared.infrastructure.persistence.kv_store import DuckDBKeyValueStore, KeyValueStoreError

__all__ = ["DuckDBKeyValueStore", "KeyValueStoreError"]
