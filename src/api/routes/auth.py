"""Authentication routes (register, login, current user)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_password_hasher, get_token_issuer, get_user_repo
from api.models import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
    to_auth_response,
    to_user_response,
)
from api.security import get_current_user_required
from domain.model.errors import ConflictError, InvalidCredentialsError, ValidationError
from domain.model.user import User
from port.password_hasher import PasswordHasher
from port.user_repository import UserRepository
from services import auth_service
from services.token_service import TokenIssuer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    repo: UserRepository = Depends(get_user_repo),
    hasher: PasswordHasher = Depends(get_password_hasher),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    """Register a new user.

    Returns:
        User info with a JWT token

    Raises:
        HTTPException: 400 if a field is missing or malformed,
            409 if the username or email is taken
    """
    phones = [p.to_domain() for p in request.phones] if request.phones else None
    try:
        session = auth_service.register(
            repo, hasher, issuer,
            username=request.username,
            email=request.email,
            password=request.password,
            phones=phones,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)

    return to_auth_response(session.user, session.token)


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    repo: UserRepository = Depends(get_user_repo),
    hasher: PasswordHasher = Depends(get_password_hasher),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    """Login user and return JWT token.

    Raises:
        HTTPException: 401 with the same body for every failed login
    """
    try:
        session = auth_service.login(repo, hasher, issuer, request.username, request.password)
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )

    return to_auth_response(session.user, session.token)


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user_required)):
    """Get current authenticated user info."""
    return to_user_response(current_user)
