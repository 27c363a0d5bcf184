"""JS minifier processor backed by rjsmin."""

from __future__ import annotations

import rjsmin  # type: ignore[import-untyped]

from .base import BaseMinifier, MinifyResult


class JsMinifier(BaseMinifier):
    """Minifies every JS entry of an asset with ``rjsmin.jsmin``."""

    minified_suffix = ".min.js"

    def __init__(self, keep_bang_comments: bool = False) -> None:
        self.keep_bang_comments = keep_bang_comments

    def transform(self, text: str) -> MinifyResult:
        code = rjsmin.jsmin(text, keep_bang_comments=self.keep_bang_comments)
        return MinifyResult(code)
