"""Concatenator processor for bundles."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..conf import get_setting
from .base import BaseProcessor

if TYPE_CHECKING:
    from ..asset import AssetContext

logger = logging.getLogger(__name__)


class Concatenator(BaseProcessor):
    """Merges every entry into a single entry keyed by the asset route.

    Payloads are joined in source declaration order. Nothing is inserted
    between them unless ``separator`` is given.
    """

    def __init__(self, separator: bytes = b"") -> None:
        self.separator = separator

    async def execute(self, context: AssetContext) -> None:
        route = context.asset.route
        if not context.content and not get_setting("ALLOW_EMPTY_BUNDLE"):
            logger.warning(
                "Bundle %s has no source content to concatenate, serving it empty",
                route,
            )

        merged = self.separator.join(context.content.values())
        logger.debug(
            "Concatenated %d file(s) into %s (%d bytes)",
            len(context.content),
            route,
            len(merged),
        )
        context.content = {route: merged}
