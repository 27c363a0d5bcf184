"""Helpers for loading the configured pipeline and storage backend."""

from __future__ import annotations

import hashlib
import logging
from importlib import import_module
from typing import TYPE_CHECKING, Any

from .conf import get_setting

if TYPE_CHECKING:
    from .pipeline import Pipeline

logger = logging.getLogger(__name__)


def load_pipeline(configure_path: str | None = None) -> Pipeline:
    """Build a new Pipeline and hand it to the configured setup callable.

    Args:
        configure_path: Dotted path of a ``configure(pipeline)`` callable.
            Defaults to the ``PIPELINE`` setting.

    Returns:
        The configured pipeline. Each call returns a fresh instance; callers
        own it and pass it on explicitly.
    """
    from .pipeline import Pipeline

    pipeline = Pipeline()
    path = configure_path or get_setting("PIPELINE")
    if not path:
        logger.debug("No PIPELINE configured, returning an empty pipeline")
        return pipeline

    configure = import_attribute(path)
    configure(pipeline)
    logger.info("Loaded pipeline from %s with %d asset(s)", path, len(pipeline))
    return pipeline


def get_storage() -> Any:
    """Import and instantiate the configured storage backend."""
    storage_path = get_setting("STORAGE_BACKEND")
    cls = import_attribute(storage_path)
    return cls()


def compute_content_hash(content: bytes, length: int | None = None) -> str:
    """Compute a SHA-256 hex digest of content, truncated to ``length`` if given."""
    digest = hashlib.sha256(content).hexdigest()
    return digest if length is None else digest[:length]


def import_attribute(dotted_path: str) -> Any:
    """Import a class or callable from a dotted path string."""
    module_path, attr_name = dotted_path.rsplit(".", 1)
    module = import_module(module_path)
    return getattr(module, attr_name)
