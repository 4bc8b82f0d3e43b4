"""Record store backends."""

from personspine.storage.memory import MemoryPersonStore
from personspine.storage.sqlalchemy_storage import SQLAlchemyPersonStore, StorageConfig

__all__ = ["MemoryPersonStore", "SQLAlchemyPersonStore", "StorageConfig"]
