from __future__ import annotations

from pathlib import Path

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from ..conf import get_setting
from .base import BaseAssetStorage


class LocalFileStorage(BaseAssetStorage):
    """Local filesystem storage for development.

    Reads sources under SOURCE_ROOT, falling back to STATIC_ROOT.
    """

    def __init__(self, root: str | Path | None = None) -> None:
        self._root = root

    def _get_root(self) -> Path:
        root = self._root or get_setting("SOURCE_ROOT")
        if not root:
            root = getattr(settings, "STATIC_ROOT", None)
        if not root:
            raise ImproperlyConfigured(
                "SOURCE_ROOT or STATIC_ROOT must be configured for LocalFileStorage"
            )
        return Path(root).resolve()

    def _get_full_path(self, path: str) -> Path:
        root = self._get_root()
        full_path = (root / path).resolve()
        if not full_path.is_relative_to(root):
            raise ValueError(
                f"Path traversal detected: {path!r} resolves outside {root}"
            )
        return full_path

    def read(self, path: str) -> bytes:
        return self._get_full_path(path).read_bytes()

    def exists(self, path: str) -> bool:
        return self._get_full_path(path).is_file()
