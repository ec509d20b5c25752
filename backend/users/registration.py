"""Wallet registration: field checks, availability checks and the user insert."""

from __future__ import annotations

import logging
import re
from typing import Optional

from django.contrib.auth import get_user_model
from django.db import DatabaseError, IntegrityError, transaction
from stellar_sdk import Keypair
from stellar_sdk.exceptions import Ed25519PublicKeyInvalidError

from core.errors import ConflictError, InternalError, ValidationError

logger = logging.getLogger(__name__)

STELLAR_KEY_RE = re.compile(r"^G[A-Z2-7]{55}$")
USERNAME_RE = re.compile(r"^[A-Za-z0-9_-]{3,20}$")
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]{2,}$")
EMAIL_MAX_LENGTH = 254


class InvalidBody(ValidationError):
    default_detail = "Invalid JSON body"
    default_code = "invalid_body"


class MissingField(ValidationError):
    default_code = "missing_field"


class InvalidPublicKey(ValidationError):
    default_detail = "Invalid Stellar public key"
    default_code = "invalid_public_key"


class InvalidUsername(ValidationError):
    default_detail = (
        "Username must be 3-20 characters and contain only letters, numbers, "
        "underscores, or hyphens"
    )
    default_code = "invalid_username"


class InvalidEmail(ValidationError):
    default_detail = "Invalid email address"
    default_code = "invalid_email"


class WalletTaken(ConflictError):
    default_detail = "A user with this wallet is already registered"
    default_code = "wallet_taken"

    def __init__(self, detail=None, code=None, public_key: Optional[str] = None):
        super().__init__(detail, code)
        self.public_key = public_key


class UsernameTaken(ConflictError):
    default_detail = "Username is already taken"
    default_code = "username_taken"


class EmailTaken(ConflictError):
    default_detail = "An account with this email already exists"
    default_code = "email_taken"


class RegistrationFailed(InternalError):
    default_detail = "Failed to create user"
    default_code = "registration_failed"


def check_public_key(public_key: str) -> None:
    if not STELLAR_KEY_RE.match(public_key):
        raise InvalidPublicKey("Invalid Stellar public key format")
    try:
        Keypair.from_public_key(public_key)
    except Ed25519PublicKeyInvalidError as exc:
        raise InvalidPublicKey() from exc


def check_username(username: str) -> None:
    if not USERNAME_RE.match(username):
        raise InvalidUsername()


def check_email(email: str) -> None:
    if len(email) > EMAIL_MAX_LENGTH or not EMAIL_RE.match(email):
        raise InvalidEmail()


def check_availability(*, public_key: str, username: str, email: Optional[str] = None) -> None:
    """Raise the first conflict found: wallet, then username, then email."""
    users = get_user_model().objects
    if users.filter(public_key=public_key).exists():
        raise WalletTaken(public_key=public_key)
    if users.filter(username=username).exists():
        raise UsernameTaken()
    if email and users.filter(email=email).exists():
        raise EmailTaken()


# Checked in this order; the first column the violation names wins.
_CONFLICT_COLUMNS = (
    ("public_key", WalletTaken),
    ("username", UsernameTaken),
    ("email", EmailTaken),
)

_PG_CONSTRAINT_RE = re.compile(r'unique constraint "(?P<name>[^"]+)"', re.IGNORECASE)
_PG_KEY_RE = re.compile(r"Key \((?P<columns>[^)]+)\)=")
_SQLITE_COLUMNS_RE = re.compile(r"UNIQUE constraint failed: (?P<columns>[\w.]+(?:, [\w.]+)*)")


def _constraint_name(exc: Exception) -> Optional[str]:
    diag = getattr(exc.__cause__, "diag", None)
    name = getattr(diag, "constraint_name", None)
    if name:
        return name
    match = _PG_CONSTRAINT_RE.search(str(exc))
    return match.group("name") if match else None


def _violated_columns(exc: Exception) -> set[str]:
    """Column names the violation reports. The rejected values are never searched."""
    message = str(exc)
    match = _PG_KEY_RE.search(message)
    if match:
        return {column.strip() for column in match.group("columns").split(",")}
    match = _SQLITE_COLUMNS_RE.search(message)
    if match:
        return {column.rsplit(".", 1)[-1] for column in match.group("columns").split(", ")}
    return set()


def classify_integrity_error(exc: Exception) -> Optional[ConflictError]:
    """
    Map a unique-constraint violation onto the conflict for its column.

    The constraint name (``users_user_<column>_key`` on Postgres) is preferred,
    then the column list from the Postgres DETAIL line or the SQLite message.
    """
    message = str(exc).lower()
    if "unique" not in message and "duplicate" not in message:
        return None

    constraint = _constraint_name(exc)
    if constraint:
        padded = f"_{constraint.lower()}_"
        for column, conflict in _CONFLICT_COLUMNS:
            if f"_{column}_" in padded:
                return conflict()

    columns = _violated_columns(exc)
    for column, conflict in _CONFLICT_COLUMNS:
        if column in columns:
            return conflict()
    return None


def create_user(*, public_key: str, username: str, email: Optional[str] = None):
    """
    Insert the user. A lost race against a concurrent registration surfaces
    as the same conflict the availability check would have raised.
    """
    user = get_user_model()(public_key=public_key, username=username, email=email)
    user.set_unusable_password()
    try:
        with transaction.atomic():
            user.save(force_insert=True)
    except IntegrityError as exc:
        conflict = classify_integrity_error(exc)
        if conflict is not None:
            logger.info(
                "registration_conflict_on_insert",
                extra={"public_key": public_key, "conflict": conflict.default_code},
            )
            raise conflict from exc
        logger.error("registration_insert_failed", exc_info=exc)
        raise RegistrationFailed() from exc
    except DatabaseError as exc:
        logger.error("registration_insert_failed", exc_info=exc)
        raise RegistrationFailed() from exc
    return user
