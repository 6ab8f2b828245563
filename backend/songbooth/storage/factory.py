"""Pick a store implementation from settings at process start."""
from songbooth.config import Settings
from songbooth.storage.base import RequestStore
from songbooth.storage.db_store import DatabaseRequestStore
from songbooth.storage.memory_store import MemoryRequestStore


def build_store(settings: Settings) -> RequestStore:
    backend = settings.STORAGE_BACKEND.strip().lower()
    if backend == "memory":
        return MemoryRequestStore()
    if backend == "database":
        return DatabaseRequestStore(settings.DATABASE_URL, echo=settings.SQL_ECHO)
    raise ValueError(f"Unknown STORAGE_BACKEND {settings.STORAGE_BACKEND!r}; expected 'memory' or 'database'")
