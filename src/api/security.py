"""Bearer-token guard for protected routes.

Resolves the Authorization header to a stored, active user before a
route handler runs.
"""

import logging
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from api.dependencies import get_token_issuer, get_user_repo
from domain.model.errors import TokenError
from domain.model.user import User
from port.user_repository import UserRepository
from services.token_service import TokenIssuer

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user_required(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    issuer: TokenIssuer = Depends(get_token_issuer),
    user_repo: UserRepository = Depends(get_user_repo),
) -> User:
    """Get current authenticated user (required). Raises 401 if not authenticated."""
    if not credentials:
        raise _unauthorized("Not authenticated")

    try:
        identity = issuer.verify(credentials.credentials)
    except TokenError as e:
        logger.debug("Bearer token rejected", extra={"reason": type(e).__name__})
        raise _unauthorized(e.message)

    user = user_repo.get_by_id(identity.user_id)
    if not user or not user.active:
        raise _unauthorized("User not found")

    return user
