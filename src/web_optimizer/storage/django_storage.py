from __future__ import annotations

from django.core.files.storage import default_storage

from .base import BaseAssetStorage


class DjangoStorageBackend(BaseAssetStorage):
    """Storage backend reading sources from Django's default file storage.

    Works with any Django storage backend (S3 via django-storages,
    local filesystem, GCS, Azure, etc.)
    """

    def read(self, path: str) -> bytes:
        if not default_storage.exists(path):
            raise FileNotFoundError(f"Source file not found in storage: {path!r}")
        with default_storage.open(path, "rb") as f:
            return f.read()  # type: ignore[no-any-return]

    def exists(self, path: str) -> bool:
        return default_storage.exists(path)
