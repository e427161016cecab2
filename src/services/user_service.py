"""User service — create, update and delete user records.

Every write is validated here before it reaches the repository.
Uniqueness is checked up front for a clear error, and the repository
rejects a conflicting save on its own if two requests race past the check.
"""

import logging

from domain.model.credential_policy import DEFAULT_POLICY, CredentialPolicy, validate_email, validate_password
from domain.model.errors import (
    EmailRequiredError,
    EmailTakenError,
    InvalidEmailFormatError,
    InvalidPasswordFormatError,
    NotFoundError,
    UsernameRequiredError,
    UsernameTakenError,
)
from domain.model.user import UNSET, PhoneInput, User, UserUpdate
from port.password_hasher import PasswordHasher
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _provided_text(changes: UserUpdate, name: str) -> str | None:
    """Return a text field from the update, or None when it should be ignored."""
    value = getattr(changes, name)
    if value is UNSET or _is_blank(value):
        return None
    return value


# ── queries ──────────────────────────────────────────────


def get_user(repo: UserRepository, user_id: str) -> User:
    """Return the user with this id.

    Raises:
        NotFoundError: no user has this id
    """
    user = repo.get_by_id(user_id)
    if user is None:
        raise NotFoundError()
    return user


def list_users(repo: UserRepository) -> list[User]:
    return repo.list_all()


# ── commands ─────────────────────────────────────────────


def create_user(
    repo: UserRepository,
    hasher: PasswordHasher,
    username: str,
    email: str | None,
    password: str | None,
    phones: list[PhoneInput] | None = None,
    policy: CredentialPolicy = DEFAULT_POLICY,
) -> User:
    """Create a new user.

    Checks run in a fixed order and the first failure is raised:
    username present, username free, email present, email format,
    email free, password format.

    Raises:
        UsernameRequiredError, UsernameTakenError, EmailRequiredError,
        InvalidEmailFormatError, EmailTakenError, InvalidPasswordFormatError
        StoreError: the repository could not persist the user
    """
    if _is_blank(username):
        raise UsernameRequiredError()
    if repo.get_by_username(username) is not None:
        raise UsernameTakenError()
    if _is_blank(email):
        raise EmailRequiredError()
    if not validate_email(email, policy):
        raise InvalidEmailFormatError()
    if repo.exists_by_email(email):
        raise EmailTakenError()
    if not validate_password(password, policy):
        raise InvalidPasswordFormatError()

    user = User(
        username=username,
        email=email,
        password_hash=hasher.hash(password),
    )
    user.replace_phones(phones or [])

    # created_at is assigned by the store, so last_login needs a second save.
    user = repo.save(user)
    user.last_login = user.created_at
    user = repo.save(user)

    logger.info("User registered", extra={"userId": user.id, "username": user.username})
    return user


def update_user(
    repo: UserRepository,
    hasher: PasswordHasher,
    user_id: str,
    changes: UserUpdate,
    policy: CredentialPolicy = DEFAULT_POLICY,
) -> User:
    """Apply the supplied fields of `changes` to a user.

    Blank or null username, email and password are ignored. `active` is
    applied whenever it is given a value, False included. A non-null
    `phones` list replaces the whole phone set; otherwise phones are kept.
    All supplied fields are validated before any of them is applied.

    Raises:
        NotFoundError: no user has this id
        UsernameTakenError: username belongs to another user
        InvalidEmailFormatError, EmailTakenError: email rejected
        InvalidPasswordFormatError: password rejected
    """
    user = get_user(repo, user_id)

    username = _provided_text(changes, 'username')
    email = _provided_text(changes, 'email')
    password = _provided_text(changes, 'password')

    if username is not None:
        holder = repo.get_by_username(username)
        if holder is not None and holder.id != user.id:
            raise UsernameTakenError()

    if email is not None:
        if not validate_email(email, policy):
            raise InvalidEmailFormatError()
        holder = repo.get_by_email(email)
        if holder is not None and holder.id != user.id:
            raise EmailTakenError()

    if password is not None and not validate_password(password, policy):
        raise InvalidPasswordFormatError()

    if username is not None:
        user.username = username
    if email is not None:
        user.email = email
    if password is not None:
        user.password_hash = hasher.hash(password)
    if changes.active is not UNSET and changes.active is not None:
        user.active = changes.active
    if changes.phones is not UNSET and changes.phones is not None:
        user.replace_phones(changes.phones)

    user = repo.save(user)
    logger.info("User updated", extra={"userId": user.id, "fields": changes.supplied()})
    return user


def delete_user(repo: UserRepository, user_id: str) -> bool:
    """Delete a user and its phones. Return False if there was no such user."""
    if not repo.exists_by_id(user_id):
        return False
    deleted = repo.delete_by_id(user_id)
    if deleted:
        logger.info("User deleted", extra={"userId": user_id})
    return deleted
