"""Pipeline: the registry of assets assembled by configuration code."""

from __future__ import annotations

import logging
from pathlib import PurePosixPath

from django.core.exceptions import ImproperlyConfigured

from .asset import Asset, AssetList, normalize_route
from .conf import get_setting
from .processors.html_minifier import HtmlSettings

logger = logging.getLogger(__name__)

HTML_CONTENT_TYPE = "text/html; charset=UTF-8"
CSS_CONTENT_TYPE = "text/css; charset=UTF-8"
JS_CONTENT_TYPE = "text/javascript; charset=UTF-8"


class Pipeline:
    """Holds the assets and file-extension rules of one application.

    A pipeline is built once at startup (see ``utils.load_pipeline``) and
    passed explicitly to whatever serves its assets.
    """

    def __init__(self) -> None:
        self._assets: dict[str, Asset] = {}
        self._extensions: dict[str, Asset] = {}

    def __len__(self) -> int:
        return len(self._assets) + len(self._extensions)

    @property
    def assets(self) -> list[Asset]:
        return list(self._assets.values())

    @property
    def extensions(self) -> dict[str, Asset]:
        return dict(self._extensions)

    def add_file_extension(self, extension: str, content_type: str) -> Asset:
        """Register a rule applying to every requested file with ``extension``."""
        ext = "." + extension.strip().lstrip(".").lower()
        if ext == ".":
            raise ImproperlyConfigured(f"Invalid file extension: {extension!r}")
        if ext in self._extensions:
            raise ImproperlyConfigured(f"File extension {ext!r} is already registered")

        pattern = f"**/*{ext}"
        asset = Asset(pattern, content_type, [pattern])
        self._extensions[ext] = asset
        return asset

    def add_files(self, content_type: str, *source_files: str) -> AssetList:
        """Register one asset per source file, routed at the file's path."""
        if not source_files:
            raise ImproperlyConfigured("add_files() requires at least one source file")

        assets = AssetList()
        for source_file in source_files:
            route = normalize_route(source_file)
            assets.append(self._register(Asset(route, content_type, [route.lstrip("/")])))
        return assets

    def add_bundle(self, route: str, content_type: str, *source_files: str) -> Asset:
        """Register a bundle of ``source_files`` served under ``route``."""
        route = normalize_route(route)
        if not source_files and not get_setting("ALLOW_EMPTY_BUNDLE"):
            raise ImproperlyConfigured(f"Bundle {route!r} has no source files")

        files = [source_file.lstrip("/") for source_file in source_files]
        duplicates = sorted({f for f in files if files.count(f) > 1})
        if duplicates:
            raise ImproperlyConfigured(
                f"Bundle {route!r} lists source file(s) more than once: "
                f"{', '.join(duplicates)}"
            )
        return self._register(Asset(route, content_type, files))

    def get_asset(self, path: str) -> Asset | None:
        """Resolve a request path to an asset.

        Registered routes win; otherwise a file-extension rule yields a
        single-file asset sharing the rule's processors.
        """
        route = normalize_route(path)
        asset = self._assets.get(route)
        if asset is not None:
            return asset

        rule = self._extensions.get(PurePosixPath(route).suffix.lower())
        if rule is None:
            return None
        return rule.for_file(route)

    def _register(self, asset: Asset) -> Asset:
        if asset.route in self._assets:
            raise ImproperlyConfigured(f"Asset route {asset.route!r} is already registered")
        self._assets[asset.route] = asset
        logger.debug("Registered %r", asset)
        return asset

    # HTML

    def minify_html_files(
        self, *source_files: str, settings: HtmlSettings | None = None
    ) -> Asset | AssetList:
        """Minify the given .html files, or every .html file when none are given."""
        if not source_files:
            return self.add_file_extension(".html", HTML_CONTENT_TYPE).minify_html(settings)
        return self.add_files(HTML_CONTENT_TYPE, *source_files).minify_html(settings)

    def add_html_bundle(
        self, route: str, *source_files: str, settings: HtmlSettings | None = None
    ) -> Asset:
        """Create an HTML bundle on ``route`` and minify the concatenated output."""
        return (
            self.add_bundle(route, HTML_CONTENT_TYPE, *source_files)
            .concatenate()
            .minify_html(settings)
        )

    # CSS

    def minify_css_files(self, *source_files: str) -> Asset | AssetList:
        if not source_files:
            return self.add_file_extension(".css", CSS_CONTENT_TYPE).minify_css()
        return self.add_files(CSS_CONTENT_TYPE, *source_files).minify_css()

    def add_css_bundle(self, route: str, *source_files: str) -> Asset:
        return (
            self.add_bundle(route, CSS_CONTENT_TYPE, *source_files)
            .concatenate()
            .minify_css()
        )

    # JS

    def minify_js_files(self, *source_files: str) -> Asset | AssetList:
        if not source_files:
            return self.add_file_extension(".js", JS_CONTENT_TYPE).minify_js()
        return self.add_files(JS_CONTENT_TYPE, *source_files).minify_js()

    def add_js_bundle(self, route: str, *source_files: str) -> Asset:
        # Scripts need a statement boundary between files.
        return (
            self.add_bundle(route, JS_CONTENT_TYPE, *source_files)
            .concatenate(separator=b";\n")
            .minify_js()
        )
