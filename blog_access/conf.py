"""
Configuration settings for django-blog-access.

Override these in your Django settings.py:

    BLOG_ACCESS = {
        'DEFAULT_VISIBILITY': 'drafts',
        'MASK_FORBIDDEN_READS': True,
        ...
    }

Collaborators (id generation, credential hashing) are configured as dotted
paths and loaded on use:

    BLOG_ACCESS = {
        'CREDENTIAL_HASHER': 'myproject.auth.hash_password',
    }
"""
from django.conf import settings
from django.utils.module_loading import import_string

DEFAULTS = {
    # Database alias the stores bind to when none is passed explicitly
    "DATABASE_ALIAS": "default",

    # Posts
    "DEFAULT_VISIBILITY": "public",
    "TITLE_MAX_LENGTH": 255,

    # Reading a post the caller may not see raises NotFound instead of
    # Forbidden, so the existence of private posts is not disclosed.
    "MASK_FORBIDDEN_READS": False,

    # Collaborators
    "POST_ID_GENERATOR": "uuid.uuid4",
    "CREDENTIAL_HASHER": "django.contrib.auth.hashers.make_password",
    "CREDENTIAL_VERIFIER": "django.contrib.auth.hashers.check_password",
}


class BlogAccessSettings:
    """
    Lazy settings object that reads from Django settings.

    Access via: from blog_access.conf import blog_settings
    """

    def __getattr__(self, name):
        if name not in DEFAULTS:
            raise AttributeError(f"Invalid blog_access setting: {name}")

        user_settings = getattr(settings, "BLOG_ACCESS", {})
        return user_settings.get(name, DEFAULTS[name])

    def load(self, name):
        """
        Import the callable configured under a dotted-path setting.

        Args:
            name: setting name, e.g. 'CREDENTIAL_HASHER'

        Returns:
            The imported object
        """
        return import_string(getattr(self, name))


blog_settings = BlogAccessSettings()
