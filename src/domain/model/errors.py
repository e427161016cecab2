"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
Each leaf error carries the user-facing message it is reported with.
"""


class DomainError(Exception):
    """Base class for all domain errors."""

    default_message = "Domain error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class NotFoundError(DomainError):
    """Requested entity does not exist."""

    default_message = "User not found"


class ValidationError(DomainError):
    """Input violates a format or required-field rule."""


class UsernameRequiredError(ValidationError):
    default_message = "Username is required"


class EmailRequiredError(ValidationError):
    default_message = "Email is required"


class InvalidEmailFormatError(ValidationError):
    default_message = "Invalid email format"


class InvalidPasswordFormatError(ValidationError):
    default_message = (
        "Password must be at least 8 characters long "
        "and contain at least one letter and one number"
    )


class ConflictError(DomainError):
    """Entity with the same unique key already exists."""


class UsernameTakenError(ConflictError):
    default_message = "Username already exists"


class EmailTakenError(ConflictError):
    default_message = "Email is already in use"


class AuthError(DomainError):
    """Authentication failed. Deliberately non-specific."""


class InvalidCredentialsError(AuthError):
    default_message = "Invalid username or password"


class TokenError(DomainError):
    """Bearer token could not be accepted."""


class TokenExpiredError(TokenError):
    default_message = "Token has expired"


class MalformedTokenError(TokenError):
    default_message = "Invalid authentication credentials"


class StoreError(DomainError):
    """Persistence failure. Never shown to callers in detail."""

    default_message = "Internal server error"
