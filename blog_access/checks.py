"""
System checks for BLOG_ACCESS settings.
"""
from django.conf import settings
from django.core.checks import Error, register

from .conf import blog_settings
from .models import VISIBILITY_TIERS


@register()
def check_blog_access_settings(app_configs, **kwargs):
    errors = []

    if blog_settings.DEFAULT_VISIBILITY not in VISIBILITY_TIERS:
        errors.append(
            Error(
                f"BLOG_ACCESS['DEFAULT_VISIBILITY'] is {blog_settings.DEFAULT_VISIBILITY!r}",
                hint=f"Use one of: {', '.join(VISIBILITY_TIERS)}",
                id="blog_access.E001",
            )
        )

    if blog_settings.DATABASE_ALIAS not in settings.DATABASES:
        errors.append(
            Error(
                f"BLOG_ACCESS['DATABASE_ALIAS'] {blog_settings.DATABASE_ALIAS!r} is not in DATABASES",
                id="blog_access.E002",
            )
        )

    return errors
