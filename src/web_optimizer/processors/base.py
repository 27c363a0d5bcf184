"""Base classes for content processors."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, NamedTuple

if TYPE_CHECKING:
    from ..asset import AssetContext, ContentStore

logger = logging.getLogger(__name__)


class MinifyResult(NamedTuple):
    """Output of a minification transform."""

    code: str
    errors: tuple[str, ...] = ()


class BaseProcessor(ABC):
    """Abstract base class for processors.

    A processor rewrites the content of an asset and contributes a fragment
    to the asset's cache key. Processors hold configuration only and are
    shared between assets and concurrent executions, so ``execute`` must
    keep all per-run state local.
    """

    def cache_key(self, request: Any) -> str:
        """Return this processor's contribution to the asset cache key.

        Args:
            request: Opaque request context. May be None.

        Returns:
            A string derived only from ``request`` and the processor's own
            configuration, or "" when output does not vary per request.
        """
        return ""

    @abstractmethod
    async def execute(self, context: AssetContext) -> None:
        """Transform ``context.content`` in place or by replacing it."""
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"


class BaseMinifier(BaseProcessor):
    """Shared execution loop for text minifiers.

    Subclasses implement ``transform``. Keys already carrying
    ``minified_suffix`` are passed through untouched. When the transform
    reports errors the original text is served, preceded by a comment
    holding the diagnostics, so a broken source never breaks serving.
    """

    minified_suffix: str = ""
    comment_open: str = "/* "
    comment_close: str = " */"

    @abstractmethod
    def transform(self, text: str) -> MinifyResult:
        """Minify ``text`` and report any diagnostics."""
        ...

    async def execute(self, context: AssetContext) -> None:
        if not context.content:
            return

        content: ContentStore = {}
        for key, payload in context.content.items():
            if self.minified_suffix and key.endswith(self.minified_suffix):
                content[key] = payload
                continue
            content[key] = self._minify_payload(key, payload)

        context.content = content

    def _minify_payload(self, key: str, payload: bytes) -> bytes:
        try:
            source = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.warning("%r skipped %s: not valid UTF-8 (%s)", self, key, e)
            return payload

        result = self.transform(source)
        if not result.errors:
            return result.code.encode("utf-8")

        logger.warning(
            "%r reported %d error(s) for %s, serving original content",
            self,
            len(result.errors),
            key,
        )
        return self.annotate(source, result.errors).encode("utf-8")

    def annotate(self, source: str, errors: tuple[str, ...]) -> str:
        """Prefix ``source`` with a comment embedding ``errors``."""
        message = "\r\n".join(errors)
        return f"{self.comment_open}{message}{self.comment_close}\r\n{source}"
