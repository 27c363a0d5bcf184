"""HTML minifier processor backed by minify-html."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from html.parser import HTMLParser
from typing import Any

import minify_html

from .base import BaseMinifier, MinifyResult

logger = logging.getLogger(__name__)

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

# End tags HTML allows to be left out when the parent closes or input ends.
# <p> stays checked: an unclosed paragraph is how truncated markup shows up.
OPTIONAL_END_TAGS = frozenset(
    {
        "body",
        "caption",
        "colgroup",
        "dd",
        "dt",
        "head",
        "html",
        "li",
        "optgroup",
        "option",
        "rp",
        "rt",
        "tbody",
        "td",
        "tfoot",
        "th",
        "thead",
        "tr",
    }
)


@dataclass(frozen=True)
class HtmlSettings:
    """Options passed through to ``minify_html.minify``."""

    minify_css: bool = True
    minify_js: bool = True
    keep_closing_tags: bool = True
    keep_html_and_head_opening_tags: bool = True
    keep_comments: bool = False

    def as_options(self) -> dict[str, Any]:
        return asdict(self)


class MarkupChecker(HTMLParser):
    """HTML parser that reports unbalanced tags.

    Void elements never need closing and elements in ``OPTIONAL_END_TAGS``
    are closed implicitly. Each diagnostic is prefixed with the
    1-based ``(line,column)`` of the offending tag.
    """

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self._open: list[tuple[str, tuple[int, int]]] = []
        self._errors: list[str] = []

    @property
    def errors(self) -> list[str]:
        return list(self._errors)

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag not in VOID_ELEMENTS:
            self._open.append((tag, self.getpos()))

    def handle_endtag(self, tag: str) -> None:
        if tag in VOID_ELEMENTS:
            return
        if not any(name == tag for name, _ in self._open):
            self._report(self.getpos(), f"Unexpected end tag </{tag}>")
            return
        while self._open:
            name, pos = self._open.pop()
            if name == tag:
                break
            self._report_unclosed(name, pos)

    def close(self) -> None:
        super().close()
        while self._open:
            name, pos = self._open.pop()
            self._report_unclosed(name, pos)

    def _report_unclosed(self, name: str, pos: tuple[int, int]) -> None:
        if name not in OPTIONAL_END_TAGS:
            self._report(pos, f"Unclosed tag <{name}>")

    def _report(self, pos: tuple[int, int], message: str) -> None:
        line, offset = pos
        self._errors.append(f"({line},{offset + 1}): {message}")


def check_markup(html: str) -> list[str]:
    """Return diagnostics for unbalanced tags in ``html``."""
    checker = MarkupChecker()
    checker.feed(html)
    checker.close()
    return checker.errors


def transform_html(html: str, settings: HtmlSettings) -> MinifyResult:
    """Minify ``html``, or return it unchanged with diagnostics."""
    errors = check_markup(html)
    if errors:
        return MinifyResult(html, tuple(errors))

    try:
        code = minify_html.minify(html, **settings.as_options())
    except Exception as e:
        logger.warning("HTML minification failed: %s", e)
        return MinifyResult(html, (str(e),))
    return MinifyResult(code)


class HtmlMinifier(BaseMinifier):
    """Minifies every HTML entry of an asset.

    Output depends only on the input bytes and ``settings``, so no cache key
    fragment is contributed; source fingerprints invalidate the cache.
    """

    minified_suffix = ".min.html"
    comment_open = "<!-- "
    comment_close = " -->"

    def __init__(self, settings: HtmlSettings | None = None) -> None:
        self.settings = settings or HtmlSettings()

    def transform(self, text: str) -> MinifyResult:
        return transform_html(text, self.settings)

    def __repr__(self) -> str:
        return f"<HtmlMinifier {self.settings!r}>"
