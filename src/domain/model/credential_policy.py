"""Email and password format rules.

The patterns live on a CredentialPolicy so a different policy can be
handed to the user service without touching its call sites.
"""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class CredentialPolicy:
    """Named format constants for credentials."""
    # One or more of [A-Za-z0-9+_.-], a single '@', then at least one
    # character that is neither '@' nor a line terminator.
    email_pattern: str = r'[A-Za-z0-9+_.-]+@[^@\r\n\u0085\u2028\u2029]+'
    password_min_length: int = 8
    password_letter_pattern: str = r'[A-Za-z]'
    password_digit_pattern: str = r'[0-9]'


DEFAULT_POLICY = CredentialPolicy()


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def validate_email(email: str | None, policy: CredentialPolicy = DEFAULT_POLICY) -> bool:
    """Return True if email is present and matches the policy's email pattern.

    No DNS or MX checks are made.

    Example:
        validate_email('a@example.com') → True
        validate_email('a@b@c') → False
    """
    if _is_blank(email):
        return False
    return re.fullmatch(policy.email_pattern, email) is not None


def validate_password(password: str | None, policy: CredentialPolicy = DEFAULT_POLICY) -> bool:
    """Return True if password is long enough and mixes letters with digits.

    Length is measured after stripping surrounding whitespace.

    Example:
        validate_password('password') → False (no digit)
        validate_password('Password123') → True
    """
    if _is_blank(password):
        return False
    if len(password.strip()) < policy.password_min_length:
        return False
    if not re.search(policy.password_letter_pattern, password):
        return False
    return re.search(policy.password_digit_pattern, password) is not None
