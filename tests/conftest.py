"""Pytest fixtures for web-optimizer tests."""

from __future__ import annotations

import pytest
from django.core.cache import cache
from django.test import RequestFactory

from web_optimizer.storage.base import BaseAssetStorage


class MemoryStorage(BaseAssetStorage):
    """Dict-backed storage that counts reads."""

    def __init__(self, files: dict[str, bytes] | None = None) -> None:
        self.files = dict(files or {})
        self.reads: list[str] = []

    def read(self, path: str) -> bytes:
        self.reads.append(path)
        try:
            return self.files[path]
        except KeyError:
            raise FileNotFoundError(path) from None

    def exists(self, path: str) -> bool:
        return path in self.files


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def memory_storage():
    """Storage holding a few HTML, CSS and JS sources."""
    return MemoryStorage(
        {
            "header.html": b"<header>  <h1>Title</h1>  </header>",
            "footer.html": b"<footer>  <p>Bye</p>  </footer>",
            "page.html": b"<div>  <p>Hi</p>  </div>",
            "base.css": b"body {\n  color: red;\n}\n",
            "theme.css": b".hero {\n  margin: 0 auto;\n}\n",
            "app.js": b"function add(a, b) {\n  return a + b;\n}\n",
            "vendor.min.js": b"var v=1;",
        }
    )


@pytest.fixture
def rf_request():
    """GET request with an Accept-Encoding header."""
    return RequestFactory().get("/bundle.html", HTTP_ACCEPT_ENCODING="gzip, br")
