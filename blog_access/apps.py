"""Django app configuration for blog_access."""
from django.apps import AppConfig


class BlogAccessConfig(AppConfig):
    """Configuration for the blog access app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "blog_access"
    verbose_name = "Blog Access"

    def ready(self):
        """Register system checks for BLOG_ACCESS settings."""
        from . import checks  # noqa: F401
