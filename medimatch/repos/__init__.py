# medimatch/repos/__init__.py
from ..core.config import Settings
from ..core.exceptions import ConfigurationError
from .base import RecordStore
from .inmemory import InMemoryStore
from .supabase import SupabaseStore


def build_store(settings: Settings) -> RecordStore:
    """Construct the single store object for this process."""
    if settings.store_backend == "supabase":
        if not (settings.supabase_url and settings.supabase_anon_key):
            raise ConfigurationError("Missing Supabase environment variables")
        return SupabaseStore(settings.supabase_url, settings.supabase_anon_key, timeout=settings.http_timeout)
    if settings.store_backend == "mongo":
        from .mongo import MongoStore
        return MongoStore(settings.mongo_uri, settings.mongo_db)
    if settings.store_backend == "memory":
        return InMemoryStore()
    raise ConfigurationError(f"Unknown store backend {settings.store_backend!r}")


__all__ = ["RecordStore", "InMemoryStore", "SupabaseStore", "build_store"]
