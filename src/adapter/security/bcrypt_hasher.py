"""bcrypt implementation of PasswordHasher."""

import base64
import hashlib
import os

import bcrypt

# 12 rounds = 2^12 iterations; override with BCRYPT_ROUNDS for tests/dev.
BCRYPT_ROUNDS = int(os.getenv('BCRYPT_ROUNDS', '12'))


def _prehash(plaintext: str) -> bytes:
    """SHA-256 digest, base64 encoded: 44 bytes, under bcrypt's 72-byte input limit."""
    return base64.b64encode(hashlib.sha256(plaintext.encode('utf-8')).digest())


class BcryptPasswordHasher:
    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        self.rounds = rounds

    def hash(self, plaintext: str) -> str:
        """Hash password using bcrypt.

        The password is pre-hashed so any length is accepted and every
        byte of it counts.

        Args:
            plaintext: Plain text password

        Returns:
            Bcrypt hashed password as string
        """
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_prehash(plaintext), salt).decode('utf-8')

    def verify(self, plaintext: str, hashed: str) -> bool:
        """Verify password against hash.

        A stored value that is not a bcrypt hash counts as a mismatch.
        """
        try:
            return bcrypt.checkpw(_prehash(plaintext), hashed.encode('utf-8'))
        except ValueError:
            return False
