"""
Post model for django-blog-access.
"""
import uuid

from django.db import models
from django.utils import timezone

from ..conf import blog_settings
from .accounts import fold_case

PUBLIC = "public"
USERS = "users"
DRAFTS = "drafts"
UNLISTED = "unlisted"
PRIVATE = "private"

VISIBILITY_CHOICES = [
    (PUBLIC, "Public"),
    (USERS, "Signed-in users"),
    (DRAFTS, "Draft"),
    (UNLISTED, "Unlisted"),
    (PRIVATE, "Private"),
]

# Tiers only the author can see
OWNER_ONLY = (DRAFTS, UNLISTED, PRIVATE)

VISIBILITY_TIERS = tuple(value for value, _label in VISIBILITY_CHOICES)


class Post(models.Model):
    """
    Blog post.

    The author is a copy of the username at creation time, not a foreign
    key; renaming an account does not touch its posts.
    """

    VISIBILITY_CHOICES = VISIBILITY_CHOICES

    # Fields an update may change
    MUTABLE_FIELDS = ("title", "visibility", "updated_date", "content")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    author = models.CharField(max_length=150, editable=False)
    author_key = models.CharField(max_length=150, editable=False, db_index=True)

    title = models.CharField(max_length=blog_settings.TITLE_MAX_LENGTH, blank=True)
    visibility = models.CharField(
        max_length=20,
        choices=VISIBILITY_CHOICES,
        default=blog_settings.DEFAULT_VISIBILITY,
    )
    content = models.TextField(
        blank=True,
        help_text="Rich text, sanitized before it reaches the store",
    )

    # Timestamps
    publish_date = models.DateTimeField()
    updated_date = models.DateTimeField(db_index=True)

    class Meta:
        ordering = ["-updated_date"]
        indexes = [
            models.Index(fields=["visibility", "-updated_date"]),
            models.Index(fields=["author_key", "-updated_date"]),
        ]

    def __str__(self):
        if self.title:
            return self.title
        return str(self.id)

    def save(self, *args, **kwargs):
        self.author_key = fold_case(self.author)

        now = timezone.now()
        if not self.publish_date:
            self.publish_date = now
        if not self.updated_date:
            self.updated_date = self.publish_date

        super().save(*args, **kwargs)

    def is_owned_by(self, username):
        """Check if username is this post's author, ignoring case."""
        return username is not None and fold_case(username) == self.author_key

    def can_view(self, username):
        """Check if the caller with this username (or None) may see the post."""
        from ..policy import is_visible

        return is_visible(self, username)
