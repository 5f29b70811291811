"""
Access service for django-blog-access.

AccessService is what a view or API layer calls. It takes the resolved
caller (a username, or None for anonymous requests) and plain values, and
returns models, dicts or booleans, or raises one of the errors in
blog_access.errors. It keeps no state between calls.

    service = AccessService.for_database("default")
    posts = service.list_posts(request.user.username or None, limit=10)
"""
import logging

from django.utils import timezone

from .conf import blog_settings
from .errors import Conflict, Forbidden, NotFound
from .policy import build_post_query, is_visible
from .stores import AccountStore, PostStore

logger = logging.getLogger(__name__)


class AccessService:
    """Permission-checked operations over posts and accounts."""

    def __init__(self, posts=None, accounts=None, hasher=None, verifier=None):
        self.posts = posts or PostStore()
        self.accounts = accounts or AccountStore()
        self.hasher = hasher or blog_settings.load("CREDENTIAL_HASHER")
        self.verifier = verifier or blog_settings.load("CREDENTIAL_VERIFIER")

    @classmethod
    def for_database(cls, using, **kwargs):
        """Build a service whose stores run on the given database alias."""
        return cls(posts=PostStore(using=using), accounts=AccountStore(using=using), **kwargs)

    # Posts

    def list_posts(self, caller=None, limit=None, author=None, page=None):
        """
        List the posts caller may see, most recently updated first.

        Args:
            caller: username, or None for anonymous
            limit: maximum number of posts, or None for all
            author: only this author's posts
            page: accepted for compatibility, offsets are not applied
        """
        if page is not None:
            logger.debug("Ignoring page=%r, listings are limit-only", page)
        return self.posts.list(build_post_query(caller, author=author, limit=limit))

    def read_post(self, post_id, caller=None):
        """
        Fetch one post if caller may see it.

        Raises:
            NotFound: no such post, or hidden from caller with MASK_FORBIDDEN_READS
            Forbidden: the post exists but caller may not see it
        """
        post = self.posts.get_by_id(post_id)
        if is_visible(post, caller):
            return post

        if blog_settings.MASK_FORBIDDEN_READS:
            raise NotFound(f"Post {post_id} not found", details={"id": str(post_id)})
        raise Forbidden(f"Not allowed to read post {post_id}", details={"id": str(post_id)})

    def create_post(self, caller, title, content, visibility=None):
        """Create a post authored by caller. Anonymous callers are refused."""
        if not caller:
            raise Forbidden("Sign in to create posts")

        now = timezone.now()
        return self.posts.insert(
            author=caller,
            title=title,
            visibility=visibility or blog_settings.DEFAULT_VISIBILITY,
            content=content,
            publish_date=now,
            updated_date=now,
        )

    def update_post(self, caller, post_id, **fields):
        """
        Change title, visibility or content of caller's own post.

        updated_date is always refreshed.
        """
        post = self.posts.get_by_id(post_id)
        if not post.is_owned_by(caller):
            raise Forbidden(f"Not allowed to edit post {post_id}", details={"id": str(post_id)})

        fields["updated_date"] = timezone.now()
        return self.posts.update(post.id, **fields)

    def delete_post(self, caller, post_id):
        """
        Delete caller's own post.

        Returns:
            True if deleted, False if caller has no post with that id
        """
        if not caller:
            raise Forbidden("Sign in to delete posts")
        return self.posts.delete_by_author(post_id, caller)

    # Accounts

    def register_user(self, email, username, raw_credential):
        """
        Create an account after checking email and username are free.

        Raises:
            Conflict: details name which of email/username is taken
        """
        report = self.accounts.check_uniqueness(email, username)
        if not report.unique:
            raise Conflict(
                "Email or username already taken",
                details={"email_taken": report.email_taken, "username_taken": report.username_taken},
            )

        account = self.accounts.insert(email, username, self.hasher(raw_credential))
        logger.info("Registered account %s", account.username)
        return account

    def authenticate_lookup(self, identifier):
        """Find the account for a login identifier (email or username)."""
        return self.accounts.find_by_identifier(identifier)

    def authenticate(self, identifier, raw_credential):
        """
        Return the account if raw_credential matches its stored hash.

        Unknown identifiers and wrong credentials both raise Forbidden.
        """
        try:
            account = self.accounts.find_by_identifier(identifier)
        except NotFound:
            raise Forbidden("Invalid credentials") from None

        if not self.verifier(raw_credential, account.credential_hash):
            raise Forbidden("Invalid credentials")
        return account

    def change_credential(self, username, email, raw_credential):
        """Hash and store a new credential for the account holding username and email."""
        return self.accounts.update_credential(username, email, self.hasher(raw_credential))
