import os
from datetime import timedelta

from fastapi import HTTPException

from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
from adapter.mongodb.user_repository import MongoUserRepository
from adapter.security.bcrypt_hasher import BcryptPasswordHasher
from adapter.security.jose_signer import JWT_ALGORITHM, JoseTokenSigner
from port.password_hasher import PasswordHasher
from port.user_repository import UserRepository
from services.token_service import TokenIssuer

JWT_EXPIRATION_DAYS = int(os.getenv("JWT_EXPIRATION_DAYS", "7"))

_token_issuer: TokenIssuer | None = None
_password_hasher: PasswordHasher | None = None


def _get_db():
    """Get MongoDB database, raising 503 if unavailable."""
    client = get_mongodb_client()
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[DATABASE_NAME]


def get_user_repo() -> UserRepository:
    return MongoUserRepository(_get_db())


def get_password_hasher() -> PasswordHasher:
    global _password_hasher
    if _password_hasher is None:
        _password_hasher = BcryptPasswordHasher()
    return _password_hasher


def get_token_issuer() -> TokenIssuer:
    """Build the token issuer once, from JWT_* environment variables."""
    global _token_issuer
    if _token_issuer is None:
        secret_key = os.getenv("JWT_SECRET_KEY")
        if not secret_key:
            raise ValueError(
                "JWT_SECRET_KEY environment variable is required. "
                "Generate a secure key with: openssl rand -hex 32"
            )
        signer = JoseTokenSigner(secret_key, algorithm=os.getenv("JWT_ALGORITHM", JWT_ALGORITHM))
        _token_issuer = TokenIssuer(signer, ttl=timedelta(days=JWT_EXPIRATION_DAYS))
    return _token_issuer


def reset_token_issuer():
    global _token_issuer
    _token_issuer = None
