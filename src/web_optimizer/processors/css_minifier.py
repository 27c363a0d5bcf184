"""CSS minifier processor backed by rcssmin."""

from __future__ import annotations

import rcssmin  # type: ignore[import-untyped]

from .base import BaseMinifier, MinifyResult


class CssMinifier(BaseMinifier):
    """Minifies every CSS entry of an asset with ``rcssmin.cssmin``."""

    minified_suffix = ".min.css"

    def __init__(self, keep_bang_comments: bool = False) -> None:
        self.keep_bang_comments = keep_bang_comments

    def transform(self, text: str) -> MinifyResult:
        code = rcssmin.cssmin(text, keep_bang_comments=self.keep_bang_comments)
        return MinifyResult(code)
