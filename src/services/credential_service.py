"""Credential verification against the user store.

Performs no writes; auth_service.login records the login.
"""

from domain.model.errors import InvalidCredentialsError
from domain.model.user import User
from port.password_hasher import PasswordHasher
from port.user_repository import UserRepository


def authenticate(
    repo: UserRepository,
    hasher: PasswordHasher,
    username: str,
    password: str,
) -> User:
    """Authenticate a user by username and password.

    Returns the authenticated User domain object.
    Unknown usernames still cost one hash computation so response time
    does not reveal whether the account exists.

    Deactivated accounts are refused even with the right password. The
    check runs after the password check so it costs the same time.

    Raises:
        InvalidCredentialsError: unknown user, wrong password or inactive
            account (same message in every case)
    """
    user = repo.get_by_username(username) if username else None
    if user is None:
        hasher.hash(password or '')
        raise InvalidCredentialsError()

    if not hasher.verify(password or '', user.password_hash) or not user.active:
        raise InvalidCredentialsError()
    return user
