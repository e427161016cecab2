"""Auth service — login and registration flows.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import logging
from datetime import datetime, timezone

from domain.model.credential_policy import DEFAULT_POLICY, CredentialPolicy
from domain.model.errors import AuthError, InvalidCredentialsError, NotFoundError, StoreError
from domain.model.user import AuthSession, PhoneInput
from port.password_hasher import PasswordHasher
from port.user_repository import UserRepository
from services import credential_service, user_service
from services.token_service import TokenIssuer

logger = logging.getLogger(__name__)


def register(
    repo: UserRepository,
    hasher: PasswordHasher,
    issuer: TokenIssuer,
    username: str,
    email: str | None,
    password: str | None,
    phones: list[PhoneInput] | None = None,
    policy: CredentialPolicy = DEFAULT_POLICY,
) -> AuthSession:
    """Register a new user and issue their first token.

    Raises:
        ValidationError, ConflictError: see user_service.create_user
    """
    user = user_service.create_user(repo, hasher, username, email, password, phones, policy)
    return AuthSession(user=user, token=issuer.issue(user))


def login(
    repo: UserRepository,
    hasher: PasswordHasher,
    issuer: TokenIssuer,
    username: str,
    password: str,
) -> AuthSession:
    """Authenticate a user, record the login and issue a token.

    Every failure is reported as the same InvalidCredentialsError so the
    caller cannot tell which check failed. Unexpected errors from the
    store or the hasher are logged and reported the same way.

    Deactivated accounts (active=False) are refused here even though the
    account record itself is otherwise valid; see credential_service.

    Raises:
        InvalidCredentialsError: authentication failed for any reason
    """
    try:
        user = credential_service.authenticate(repo, hasher, username, password)
        user.last_login = datetime.now(timezone.utc)
        user = repo.save(user)
    except AuthError:
        raise InvalidCredentialsError() from None
    except (StoreError, NotFoundError) as e:
        logger.error("Login failed on internal error", extra={"error": type(e).__name__})
        raise InvalidCredentialsError() from None
    except Exception:
        logger.exception("Login failed on unexpected error")
        raise InvalidCredentialsError() from None

    logger.info("User logged in", extra={"userId": user.id})
    return AuthSession(user=user, token=issuer.issue(user))
