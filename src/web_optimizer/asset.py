"""Assets: a route, its source files and an ordered processor chain."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from django.core.exceptions import ImproperlyConfigured

from .conf import get_setting
from .processors.base import BaseProcessor
from .processors.concatenator import Concatenator
from .processors.css_minifier import CssMinifier
from .processors.html_minifier import HtmlMinifier, HtmlSettings
from .processors.js_minifier import JsMinifier

if TYPE_CHECKING:
    from .storage.base import BaseAssetStorage

logger = logging.getLogger(__name__)

ContentStore = dict[str, bytes]
"""File name -> payload for one asset while it moves through its processors."""


def normalize_route(route: str) -> str:
    """Return ``route`` with exactly one leading slash."""
    stripped = route.strip().lstrip("~").lstrip("/")
    if not stripped:
        raise ImproperlyConfigured(f"Invalid asset route: {route!r}")
    return f"/{stripped}"


class AssetContext:
    """State handed to each processor during one execution of an asset."""

    def __init__(self, asset: Asset, request: Any, content: Mapping[str, bytes]) -> None:
        self.asset = asset
        self.request = request
        self._content: ContentStore = {}
        self.content = dict(content)

    @property
    def content(self) -> ContentStore:
        return self._content

    @content.setter
    def content(self, value: ContentStore) -> None:
        for key, payload in value.items():
            if not isinstance(payload, bytes):
                raise TypeError(
                    f"Content for {key!r} must be bytes, got {type(payload).__name__}"
                )
        self._content = value


class Asset:
    """A routable unit built from one or more source files.

    Assets are assembled once during pipeline setup. The fluent helpers
    append processors and return the asset, so calls chain::

        (
            pipeline.add_bundle("/site.html", HTML_CONTENT_TYPE, "a.html", "b.html")
            .concatenate()
            .minify_html()
        )
    """

    def __init__(
        self,
        route: str,
        content_type: str,
        source_files: Iterable[str],
        processors: Iterable[BaseProcessor] | None = None,
    ) -> None:
        self.route = route
        self.content_type = content_type
        self.source_files: list[str] = list(source_files)
        self.processors: list[BaseProcessor] = list(processors or [])

    def __repr__(self) -> str:
        return f"<Asset {self.route} ({len(self.processors)} processor(s))>"

    def add_processor(self, processor: BaseProcessor) -> Asset:
        self.processors.append(processor)
        return self

    def add_source_files(self, *source_files: str) -> Asset:
        """Append sources; each file may appear only once per asset."""
        for source_file in source_files:
            if source_file in self.source_files:
                raise ImproperlyConfigured(
                    f"Source file {source_file!r} is listed twice in {self.route!r}"
                )
            self.source_files.append(source_file)
        return self

    def concatenate(self, separator: bytes = b"") -> Asset:
        return self.add_processor(Concatenator(separator))

    def minify_html(self, settings: HtmlSettings | None = None) -> Asset:
        return self.add_processor(HtmlMinifier(settings))

    def minify_css(self, keep_bang_comments: bool = False) -> Asset:
        return self.add_processor(CssMinifier(keep_bang_comments))

    def minify_js(self, keep_bang_comments: bool = False) -> Asset:
        return self.add_processor(JsMinifier(keep_bang_comments))

    def for_file(self, route: str) -> Asset:
        """Derive a single-file asset sharing this asset's processors."""
        return Asset(route, self.content_type, [route.lstrip("/")], self.processors)

    def fingerprints(self, storage: BaseAssetStorage) -> list[str]:
        return [storage.fingerprint(path) for path in self.source_files]

    def generate_cache_key(self, request: Any, storage: BaseAssetStorage) -> str:
        from .cache import CacheKeyComposer

        fingerprints = self.fingerprints(storage)
        length = get_setting("HASH_LENGTH")
        logger.debug(
            "Fingerprints for %s: %s",
            self.route,
            ", ".join(fp[:length] for fp in fingerprints),
        )
        return CacheKeyComposer().compose(request, self, fingerprints)

    def load_content(self, storage: BaseAssetStorage) -> ContentStore:
        """Read every source file into a fresh ContentStore, in declaration order."""
        return {path: storage.read(path) for path in self.source_files}

    async def execute(self, request: Any, content: Mapping[str, bytes]) -> ContentStore:
        """Run the processors in registration order over a copy of ``content``."""
        context = AssetContext(self, request, content)
        for processor in self.processors:
            await processor.execute(context)
        logger.info(
            "Built %s through %d processor(s): %d file(s)",
            self.route,
            len(self.processors),
            len(context.content),
        )
        return context.content


class AssetList(list[Asset]):
    """A list of assets whose fluent helpers apply to every member."""

    def add_processor(self, processor: BaseProcessor) -> AssetList:
        for asset in self:
            asset.add_processor(processor)
        return self

    def concatenate(self, separator: bytes = b"") -> AssetList:
        for asset in self:
            asset.concatenate(separator)
        return self

    def minify_html(self, settings: HtmlSettings | None = None) -> AssetList:
        for asset in self:
            asset.minify_html(settings)
        return self

    def minify_css(self, keep_bang_comments: bool = False) -> AssetList:
        for asset in self:
            asset.minify_css(keep_bang_comments)
        return self

    def minify_js(self, keep_bang_comments: bool = False) -> AssetList:
        for asset in self:
            asset.minify_js(keep_bang_comments)
        return self
