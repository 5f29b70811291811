"""
Pytest fixtures for django-blog-access tests.
"""
from datetime import timedelta

import pytest
from django.utils import timezone

from blog_access.services import AccessService
from blog_access.stores import AccountStore, PostStore


@pytest.fixture
def post_store(db):
    """PostStore on the default database."""
    return PostStore(using="default")


@pytest.fixture
def account_store(db):
    """AccountStore on the default database."""
    return AccountStore(using="default")


@pytest.fixture
def service(db):
    """AccessService bound to the default database."""
    return AccessService.for_database("default")


@pytest.fixture
def make_post(post_store):
    """
    Factory inserting posts with distinct updated dates.

    minutes_ago sets updated_date relative to now, so tests control ordering.
    """

    def _make_post(author="alice", visibility="public", title="Title", minutes_ago=0, content="<p>Body</p>"):
        updated = timezone.now() - timedelta(minutes=minutes_ago)
        return post_store.insert(
            author=author,
            title=title,
            visibility=visibility,
            content=content,
            publish_date=updated - timedelta(days=1),
            updated_date=updated,
        )

    return _make_post


@pytest.fixture
def alice(account_store):
    """Registered account 'alice'."""
    return account_store.insert("alice@example.com", "alice", "hash-a")


@pytest.fixture
def bob(account_store):
    """Registered account 'bob'."""
    return account_store.insert("bob@example.com", "bob", "hash-b")
