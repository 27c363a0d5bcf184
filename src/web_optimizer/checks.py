"""Django system checks for web-optimizer settings."""

from __future__ import annotations

from typing import Any

from django.core.checks import Error, register

from .conf import get_setting
from .utils import import_attribute


@register()
def check_settings(app_configs: Any = None, **kwargs: Any) -> list[Error]:
    """Report dotted-path settings that cannot be imported."""
    errors: list[Error] = []

    storage_path = get_setting("STORAGE_BACKEND")
    try:
        import_attribute(storage_path)
    except (ImportError, AttributeError, ValueError) as e:
        errors.append(
            Error(
                f"STORAGE_BACKEND {storage_path!r} could not be imported: {e}",
                hint="Set WEB_OPTIMIZER['STORAGE_BACKEND'] to a storage class path.",
                id="web_optimizer.E001",
            )
        )

    pipeline_path = get_setting("PIPELINE")
    if pipeline_path:
        try:
            import_attribute(pipeline_path)
        except (ImportError, AttributeError, ValueError) as e:
            errors.append(
                Error(
                    f"PIPELINE {pipeline_path!r} could not be imported: {e}",
                    hint="Point WEB_OPTIMIZER['PIPELINE'] at a configure(pipeline) callable.",
                    id="web_optimizer.E002",
                )
            )

    return errors
