from pathlib import Path

from permit_intake.config.settings import Settings
from permit_intake.storage.base import BaseObjectStore
from permit_intake.storage.local_adapter import LocalObjectStore
from permit_intake.storage.supabase_adapter import SupabaseObjectStore


class ObjectStoreFactory:
    """Creates the configured object store."""

    BACKENDS = ("local", "supabase")

    @classmethod
    def create(cls, settings: Settings) -> BaseObjectStore:
        backend = settings.storage_backend.lower()
        if backend == "local":
            return LocalObjectStore(
                Path(settings.storage_root),
                public_base_url=settings.storage_public_base_url,
            )
        if backend == "supabase":
            if not settings.supabase_url or not settings.supabase_api_key:
                raise ValueError(
                    "supabase_url and supabase_api_key are required for storage_backend=supabase"
                )
            return SupabaseObjectStore(
                base_url=settings.supabase_url,
                api_key=settings.supabase_api_key,
                bucket=settings.storage_bucket,
                timeout_seconds=settings.storage_timeout_seconds,
            )
        raise ValueError(
            f"Unknown storage backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
