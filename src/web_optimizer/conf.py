"""Configuration and settings for web-optimizer."""

from typing import Any

from django.conf import settings

DEFAULTS: dict[str, Any] = {
    # Dotted path to a callable that receives the Pipeline to configure
    "PIPELINE": None,
    # Storage settings
    "STORAGE_BACKEND": "web_optimizer.storage.django_storage.DjangoStorageBackend",
    "SOURCE_ROOT": None,
    # Caching
    "ENABLE_CACHING": True,
    "CACHE_KEY_PREFIX": "wo:",
    "CACHE_TIMEOUT": 300,
    # Length of fingerprints shown in log messages
    "HASH_LENGTH": 8,
    # Bundling
    "ALLOW_EMPTY_BUNDLE": False,
}


_UNSET = object()


def get_setting(key: str, default: Any = _UNSET) -> Any:
    """Get a setting from WEB_OPTIMIZER dict or return default."""
    user_settings: dict[str, Any] = getattr(settings, "WEB_OPTIMIZER", {})
    fallback = DEFAULTS.get(key) if default is _UNSET else default
    return user_settings.get(key, fallback)
