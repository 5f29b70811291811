"""
Models for django-blog-access.

All models are importable from blog_access.models:

    from blog_access.models import Account, Post
"""
from .accounts import Account, fold_case
from .posts import (
    DRAFTS,
    OWNER_ONLY,
    PRIVATE,
    PUBLIC,
    UNLISTED,
    USERS,
    VISIBILITY_CHOICES,
    VISIBILITY_TIERS,
    Post,
)

__all__ = [
    # Accounts
    "Account",
    "fold_case",
    # Posts
    "Post",
    "VISIBILITY_CHOICES",
    "VISIBILITY_TIERS",
    "OWNER_ONLY",
    "PUBLIC",
    "USERS",
    "DRAFTS",
    "UNLISTED",
    "PRIVATE",
]
