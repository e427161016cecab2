"""Port definition for TokenSigner."""

from typing import Protocol


class TokenSigner(Protocol):
    def sign(self, claims: dict) -> str: ...

    def verify(self, token: str) -> dict:
        """Check signature and structure and return the claims.

        Expiry is not checked here; the caller owns the clock.

        Raises:
            MalformedTokenError: signature or structure is invalid
        """
        ...
