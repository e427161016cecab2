"""Fast, non-cryptographic PasswordHasher for testing."""

import hashlib


class FakePasswordHasher:
    PREFIX = 'fake$'

    def __init__(self):
        self.hash_calls = 0
        self.verify_calls = 0

    def hash(self, plaintext: str) -> str:
        self.hash_calls += 1
        return self.PREFIX + hashlib.sha256(plaintext.encode('utf-8')).hexdigest()

    def verify(self, plaintext: str, hashed: str) -> bool:
        self.verify_calls += 1
        expected = self.PREFIX + hashlib.sha256(plaintext.encode('utf-8')).hexdigest()
        return expected == hashed
