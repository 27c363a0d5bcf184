"""Asset optimization pipeline for Django projects."""

from .asset import Asset, AssetContext, AssetList, ContentStore
from .pipeline import Pipeline

__all__ = ["Asset", "AssetContext", "AssetList", "ContentStore", "Pipeline"]
