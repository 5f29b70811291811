"""
Account model for django-blog-access.
"""
from django.db import models


def fold_case(value):
    """Return the key used for case-insensitive comparison of a name or email."""
    return value.lower()


class Account(models.Model):
    """
    Blog user account.

    Email and username are unique under case-insensitive comparison. The
    comparison keys are maintained in save() and carry the unique indexes,
    so the check does not depend on the database's collation.
    """

    email = models.EmailField(max_length=254)
    username = models.CharField(max_length=150)
    credential_hash = models.CharField(
        max_length=255,
        help_text="Opaque hash produced by the configured credential hasher",
    )

    # Comparison keys
    email_key = models.CharField(max_length=254, unique=True, editable=False)
    username_key = models.CharField(max_length=150, unique=True, editable=False)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["username_key"]

    def __str__(self):
        return self.username

    def save(self, *args, **kwargs):
        self.email_key = fold_case(self.email)
        self.username_key = fold_case(self.username)
        super().save(*args, **kwargs)

    def as_identity(self):
        """Return the public identity pair of this account."""
        return {"username": self.username, "email": self.email}
