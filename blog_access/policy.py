"""
Visibility policy for posts.

Translates a caller (a username, or None when anonymous) and an optional
author filter into a PostQuery. Nothing here touches the database; the
query is executed by PostStore.list() or evaluated in memory.

A post is visible to a caller when:
- it is public, or
- the caller is signed in and the post is for signed-in users, or
- the caller is its author and it is a draft, unlisted or private.
"""
from .models import OWNER_ONLY, PUBLIC, USERS, fold_case
from .predicates import And, Eq, In, Or

# Most recently updated first. Ties have no defined order.
ORDERING = ("-updated_date",)


class PostQuery:
    """A predicate plus the ordering and limit to apply after it."""

    def __init__(self, predicate, ordering=ORDERING, limit=None):
        self.predicate = predicate
        self.ordering = tuple(ordering)
        self.limit = limit

    def __repr__(self):
        return f"PostQuery({self.predicate!r}, ordering={self.ordering!r}, limit={self.limit!r})"

    def evaluate(self, posts):
        """Apply predicate, ordering and limit to objects in memory."""
        selected = [post for post in posts if self.predicate.matches(post)]
        # Stable sorts applied last key first give multi-key ordering.
        for key in reversed(self.ordering):
            field = key.lstrip("-")
            selected.sort(key=lambda post: getattr(post, field), reverse=key.startswith("-"))
        if self.limit is not None:
            selected = selected[:self.limit]
        return selected


def visibility_predicate(caller=None):
    """Build the predicate selecting every post the caller may see."""
    clauses = [Eq("visibility", PUBLIC)]

    if caller:
        clauses.append(And((Eq("author_key", fold_case(caller)), In("visibility", OWNER_ONLY))))
        clauses.append(Eq("visibility", USERS))

    return Or(tuple(clauses))


def build_post_query(caller=None, author=None, limit=None):
    """
    Build the query for a post listing.

    Args:
        caller: username of the requester, or None for anonymous requests
        author: restrict to this author's posts; the visibility rule still applies
        limit: maximum number of posts, or None for all

    Returns:
        PostQuery ordered by updated_date descending
    """
    if limit is not None and limit < 0:
        raise ValueError(f"limit must not be negative, got {limit}")

    predicate = visibility_predicate(caller)
    if author:
        predicate = And((Eq("author_key", fold_case(author)), predicate))

    return PostQuery(predicate=predicate, limit=limit)


def is_visible(post, caller=None):
    """Check a single post against the caller's visibility predicate."""
    return visibility_predicate(caller).matches(post)
