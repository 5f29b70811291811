"""
Stores for django-blog-access.

    from blog_access.stores import AccountStore, PostStore
"""
from .accounts import AccountStore, UniquenessReport
from .posts import PostStore

__all__ = [
    "AccountStore",
    "PostStore",
    "UniquenessReport",
]
