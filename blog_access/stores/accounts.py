"""
Account storage for django-blog-access.

Email and username are compared through their lower-cased keys, which
carry the unique indexes. Lookups are plain equality, never patterns.
"""
import logging
from collections import namedtuple

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Q

from ..conf import blog_settings
from ..errors import Conflict, NotFound, TransientFailure
from ..models import Account, fold_case

logger = logging.getLogger(__name__)


class UniquenessReport(namedtuple("UniquenessReport", ["email_taken", "username_taken"])):
    """Which of an email/username pair already belongs to an account."""

    __slots__ = ()

    @property
    def unique(self):
        return not (self.email_taken or self.username_taken)


def check_required(name, value):
    if not isinstance(value, str) or not value:
        raise ValueError(f"{name} must be a non-empty string")


class AccountStore:
    """Reads and writes accounts on a single database alias."""

    def __init__(self, using=None):
        self.using = using or blog_settings.DATABASE_ALIAS

    def _accounts(self):
        return Account.objects.using(self.using)

    def check_uniqueness(self, email, username):
        """
        Check email and username independently against existing accounts.

        Returns:
            UniquenessReport
        """
        email_key = fold_case(email)
        username_key = fold_case(username)
        try:
            taken = list(
                self._accounts()
                .filter(Q(email_key=email_key) | Q(username_key=username_key))
                .values_list("email_key", "username_key")
            )
        except DatabaseError as exc:
            raise TransientFailure("Could not check account uniqueness") from exc

        return UniquenessReport(
            email_taken=any(row_email == email_key for row_email, _ in taken),
            username_taken=any(row_username == username_key for _, row_username in taken),
        )

    def insert(self, email, username, credential_hash):
        """
        Create an account.

        Call check_uniqueness() first; the unique indexes still decide when
        two registrations race.

        Raises:
            ValueError: email, username or credential_hash is missing
            Conflict: email or username is already taken
        """
        check_required("email", email)
        check_required("username", username)
        check_required("credential_hash", credential_hash)

        account = Account(email=email, username=username, credential_hash=credential_hash)
        try:
            with transaction.atomic(using=self.using):
                account.save(using=self.using, force_insert=True)
        except IntegrityError as exc:
            report = self.check_uniqueness(email, username)
            if report.unique:
                raise ValueError(f"Account rejected by the database: {exc}") from exc
            raise Conflict(
                "Email or username already taken",
                details={"email_taken": report.email_taken, "username_taken": report.username_taken},
            ) from exc
        except DatabaseError as exc:
            raise TransientFailure("Could not insert account") from exc

        logger.info("Inserted account %s", account.username)
        return account

    def find_by_identifier(self, identifier):
        """
        Find the account whose email or username equals identifier, ignoring case.

        An identifier that is one account's email and another account's
        username names no single account and is treated as not found.
        """
        key = fold_case(identifier)
        try:
            matches = list(self._accounts().filter(Q(email_key=key) | Q(username_key=key))[:2])
        except DatabaseError as exc:
            raise TransientFailure("Could not look up account") from exc

        if len(matches) > 1:
            logger.warning(
                "Identifier %r matches accounts %s and %s, refusing the lookup",
                identifier, matches[0].username, matches[1].username,
            )
        if len(matches) != 1:
            raise NotFound("Account not found", details={"identifier": identifier})
        return matches[0]

    def update_credential(self, username, email, credential_hash):
        """
        Replace the credential hash of the account holding both username and email.

        Returns:
            dict with the stored username and email
        """
        check_required("credential_hash", credential_hash)
        details = {"username": username, "email": email}
        try:
            accounts = self._accounts().filter(
                username_key=fold_case(username),
                email_key=fold_case(email),
            )
            if not accounts.update(credential_hash=credential_hash):
                raise NotFound("Account not found", details=details)
            return accounts.get().as_identity()
        except Account.DoesNotExist:
            raise NotFound("Account not found", details=details) from None
        except DatabaseError as exc:
            raise TransientFailure("Could not update credential") from exc
