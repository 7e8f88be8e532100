"""Storage backends for Meeple Pairing."""

from meeplepairing.storage.json_store import JsonFileStore
from meeplepairing.storage.store import InMemoryStore, ResultRow, Store

__all__ = ["InMemoryStore", "JsonFileStore", "ResultRow", "Store"]
