"""python-jose implementation of TokenSigner."""

import logging

from jose import JWTError, jwt

from domain.model.errors import MalformedTokenError

logger = logging.getLogger(__name__)

JWT_ALGORITHM = 'HS256'


class JoseTokenSigner:
    def __init__(self, secret_key: str, algorithm: str = JWT_ALGORITHM):
        if not secret_key:
            raise ValueError("JWT secret key must not be empty")
        self._secret_key = secret_key
        self.algorithm = algorithm

    def sign(self, claims: dict) -> str:
        return jwt.encode(claims, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> dict:
        """Decode a JWT, checking signature and structure only."""
        try:
            return jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options={'verify_exp': False},
            )
        except JWTError as e:
            logger.debug(f"JWT verification failed: {e}")
            raise MalformedTokenError() from e
