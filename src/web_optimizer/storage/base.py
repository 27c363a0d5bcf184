from __future__ import annotations

from abc import ABC, abstractmethod

from ..utils import compute_content_hash


class BaseAssetStorage(ABC):
    """Abstract base class for source storage backends.

    Storage backends read the source files an asset is built from and
    fingerprint them so that changed sources produce a new cache key.
    """

    @abstractmethod
    def read(self, path: str) -> bytes:
        """Read a source file.

        Args:
            path: The storage path (e.g., "templates/header.html")

        Returns:
            The raw bytes of the file

        Raises:
            FileNotFoundError: If the file does not exist
        """
        ...

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check if a source file exists in storage.

        Args:
            path: The storage path to check

        Returns:
            True if the file exists
        """
        ...

    def fingerprint(self, path: str) -> str:
        """Return the full content hash identifying the current file version.

        Backends with a cheaper change marker (mtime, ETag) may override this.
        """
        return compute_content_hash(self.read(path))
