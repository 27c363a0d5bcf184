"""Django app configuration for web-optimizer."""

from django.apps import AppConfig


class WebOptimizerConfig(AppConfig):
    name = "web_optimizer"
    verbose_name = "Web Optimizer"

    def ready(self) -> None:
        from . import checks  # noqa: F401  registers system checks
