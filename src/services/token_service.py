"""Token issuing: signed, time-bounded bearer tokens for verified users."""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable

from domain.model.errors import MalformedTokenError, TokenExpiredError
from domain.model.user import TokenIdentity, User
from port.token_signer import TokenSigner

DEFAULT_TOKEN_TTL = timedelta(days=7)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TokenIssuer:
    """Derives bearer tokens from users and resolves them back to identities.

    The signer owns signature checks; expiry is judged against this
    issuer's clock.
    """

    def __init__(
        self,
        signer: TokenSigner,
        ttl: timedelta = DEFAULT_TOKEN_TTL,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.signer = signer
        self.ttl = ttl
        self.clock = clock

    def issue(self, user: User) -> str:
        """Create a token for a saved user.

        Each token carries a random `jti`, so two tokens issued for the
        same user in the same second still differ.
        """
        if not user.id:
            raise ValueError("Cannot issue a token for an unsaved user")
        now = self.clock()
        claims = {
            "sub": user.id,
            "username": user.username,
            "iat": int(now.timestamp()),
            "exp": int((now + self.ttl).timestamp()),
            "jti": uuid.uuid4().hex,
        }
        return self.signer.sign(claims)

    def verify(self, token: str) -> TokenIdentity:
        """Resolve a token to the identity it was issued for.

        Raises:
            MalformedTokenError: bad signature, bad structure or missing claims
            TokenExpiredError: token is past its expiration
        """
        claims = self.signer.verify(token)
        try:
            identity = TokenIdentity(
                user_id=str(claims["sub"]),
                username=str(claims["username"]),
                issued_at=datetime.fromtimestamp(int(claims["iat"]), tz=timezone.utc),
                expires_at=datetime.fromtimestamp(int(claims["exp"]), tz=timezone.utc),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedTokenError() from e

        if identity.expires_at <= self.clock():
            raise TokenExpiredError()
        return identity
