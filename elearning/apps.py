"""
Marketplace Application Configuration

Django application configuration for the course marketplace. The app keeps
its historical `elearning` label so the table prefix stays stable.

Author: Marketplace Development Team
Version: 1.0.0
"""

from django.apps import AppConfig


class ElearningConfig(AppConfig):
    """
    Configuration class for the marketplace Django application.

    Attributes:
        default_auto_field: Default primary key field type for models
        name: Application name for Django registration
        verbose_name: Human-readable application name for admin interface
    """

    default_auto_field: str = "django.db.models.BigAutoField"
    name: str = "elearning"
    verbose_name: str = "Course Marketplace"

    def ready(self) -> None:
        """
        Register signal handlers.

        The profile receiver lives in `users.models` and is connected on
        import; the import here keeps that explicit.
        """
        super().ready()
        from .users import models as user_models  # noqa: F401
