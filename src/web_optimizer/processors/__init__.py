from .base import BaseMinifier, BaseProcessor, MinifyResult
from .concatenator import Concatenator
from .css_minifier import CssMinifier
from .html_minifier import HtmlMinifier, HtmlSettings
from .js_minifier import JsMinifier

__all__ = [
    "BaseMinifier",
    "BaseProcessor",
    "Concatenator",
    "CssMinifier",
    "HtmlMinifier",
    "HtmlSettings",
    "JsMinifier",
    "MinifyResult",
]
