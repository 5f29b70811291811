"""
Post storage for django-blog-access.

PostStore runs every post read and write against one database alias. It
does no visibility filtering of its own: list() executes whatever
PostQuery it is given, and get_by_id() returns any post by id.
"""
import logging
import uuid

from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone

from ..conf import blog_settings
from ..errors import Conflict, NotFound, TransientFailure
from ..models import VISIBILITY_TIERS, Post, fold_case

logger = logging.getLogger(__name__)


def parse_post_id(post_id):
    """Return post_id as a UUID, raising NotFound when it cannot be one."""
    if isinstance(post_id, uuid.UUID):
        return post_id
    try:
        return uuid.UUID(str(post_id))
    except ValueError:
        raise NotFound(f"Post {post_id} not found", details={"id": str(post_id)}) from None


def check_visibility(visibility):
    if visibility not in VISIBILITY_TIERS:
        raise ValueError(
            f"Unknown visibility {visibility!r}, expected one of {', '.join(VISIBILITY_TIERS)}"
        )


def check_text(name, value, allow_blank=True):
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string, got {type(value).__name__}")
    if not allow_blank and not value:
        raise ValueError(f"{name} must not be blank")


def check_fields(fields):
    """Validate post field values before they reach the database."""
    if "author" in fields:
        check_text("author", fields["author"], allow_blank=False)
    for name in ("title", "content"):
        if name in fields:
            check_text(name, fields[name])
    if "visibility" in fields:
        check_visibility(fields["visibility"])


class PostStore:
    """Reads and writes posts on a single database alias."""

    def __init__(self, using=None, id_generator=None):
        self.using = using or blog_settings.DATABASE_ALIAS
        self.id_generator = id_generator or blog_settings.load("POST_ID_GENERATOR")

    def _posts(self):
        return Post.objects.using(self.using)

    def get_by_id(self, post_id):
        """Fetch a post by id regardless of its visibility."""
        key = parse_post_id(post_id)
        try:
            return self._posts().get(pk=key)
        except Post.DoesNotExist:
            raise NotFound(f"Post {key} not found", details={"id": str(key)}) from None
        except DatabaseError as exc:
            raise TransientFailure(f"Could not load post {key}", details={"id": str(key)}) from exc

    def list(self, query):
        """
        Execute a PostQuery: predicate, then ordering, then limit.

        A database failure is logged and yields an empty list. The query
        runs in a savepoint so the failure leaves an enclosing transaction
        usable.
        """
        try:
            with transaction.atomic(using=self.using):
                posts = self._posts().filter(query.predicate.as_q()).order_by(*query.ordering)
                if query.limit is not None:
                    posts = posts[:query.limit]
                return list(posts)
        except DatabaseError:
            logger.exception("Listing posts failed on %r, returning no posts", self.using)
            return []

    def count(self, query=None):
        """Count posts matching the query's predicate, or all posts."""
        try:
            posts = self._posts()
            if query is not None:
                posts = posts.filter(query.predicate.as_q())
            return posts.count()
        except DatabaseError as exc:
            raise TransientFailure("Could not count posts") from exc

    def insert(self, author, title, visibility, content, publish_date=None, updated_date=None):
        """
        Store a new post under a freshly generated id.

        publish_date defaults to now and updated_date to publish_date.

        Raises:
            ValueError: a field value is invalid
            Conflict: the generated id is already taken
        """
        check_fields({"author": author, "title": title, "content": content, "visibility": visibility})
        post = Post(
            id=uuid.UUID(str(self.id_generator())),
            author=author,
            title=title,
            visibility=visibility,
            content=content,
            publish_date=publish_date,
            updated_date=updated_date,
        )

        try:
            with transaction.atomic(using=self.using):
                post.save(using=self.using, force_insert=True)
        except IntegrityError as exc:
            if self._id_taken(post.id):
                raise Conflict(f"Post id {post.id} already exists", details={"id": str(post.id)}) from exc
            raise ValueError(f"Post rejected by the database: {exc}") from exc
        except DatabaseError as exc:
            raise TransientFailure("Could not insert post") from exc

        logger.info("Inserted post %s by %s", post.id, author)
        return post

    def _id_taken(self, key):
        try:
            return self._posts().filter(pk=key).exists()
        except DatabaseError as exc:
            raise TransientFailure(f"Could not check post id {key}", details={"id": str(key)}) from exc

    def update(self, post_id, **fields):
        """
        Update the mutable fields of a post in one statement.

        Only title, visibility, updated_date and content may change.
        updated_date is set to now unless given.

        Returns:
            The post as stored after the update
        """
        immutable = set(fields) - set(Post.MUTABLE_FIELDS)
        if immutable:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(immutable))}")
        check_fields(fields)
        if fields.get("updated_date") is None:
            fields["updated_date"] = timezone.now()

        key = parse_post_id(post_id)
        try:
            with transaction.atomic(using=self.using):
                updated = self._posts().filter(pk=key).update(**fields)
            if not updated:
                raise NotFound(f"Post {key} not found", details={"id": str(key)})
            return self._posts().get(pk=key)
        except Post.DoesNotExist:
            # Deleted between the update and the read back
            raise NotFound(f"Post {key} not found", details={"id": str(key)}) from None
        except IntegrityError as exc:
            raise ValueError(f"Update of post {key} rejected by the database: {exc}") from exc
        except DatabaseError as exc:
            raise TransientFailure(f"Could not update post {key}", details={"id": str(key)}) from exc

    def delete_by_author(self, post_id, claimed_author):
        """
        Delete a post if claimed_author is its author, ignoring case.

        Returns:
            True if a post was removed, False if none matched
        """
        if not claimed_author:
            return False
        try:
            key = parse_post_id(post_id)
        except NotFound:
            return False

        try:
            deleted, _ = self._posts().filter(pk=key, author_key=fold_case(claimed_author)).delete()
        except DatabaseError as exc:
            raise TransientFailure(f"Could not delete post {key}", details={"id": str(key)}) from exc

        if deleted:
            logger.info("Deleted post %s by %s", key, claimed_author)
        return bool(deleted)
