"""User management routes. Every endpoint requires a bearer token.

Endpoints:
- GET /api/users: List all users
- GET /api/users/{id}: Get one user
- PUT /api/users/{id}: Update a user
- PATCH /api/users/{id}: Update only the fields present in the body
- DELETE /api/users/{id}: Delete a user and its phones
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_password_hasher, get_user_repo
from api.models import MessageResponse, UpdateUserRequest, UserResponse, to_user_response
from api.security import get_current_user_required
from domain.model.errors import ConflictError, NotFoundError, ValidationError
from domain.model.user import User
from port.password_hasher import PasswordHasher
from port.user_repository import UserRepository
from services import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
async def list_users(
    current_user: User = Depends(get_current_user_required),
    repo: UserRepository = Depends(get_user_repo),
):
    """Return every user."""
    return [to_user_response(u) for u in user_service.list_users(repo)]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    current_user: User = Depends(get_current_user_required),
    repo: UserRepository = Depends(get_user_repo),
):
    try:
        user = user_service.get_user(repo, user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return to_user_response(user)


def _apply_update(
    repo: UserRepository,
    hasher: PasswordHasher,
    user_id: str,
    request: UpdateUserRequest,
    current_user: User,
) -> UserResponse:
    try:
        user = user_service.update_user(repo, hasher, user_id, request.to_domain())
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=e.message)

    logger.info("User updated via API", extra={"userId": user_id, "actorId": current_user.id})
    return to_user_response(user)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    request: UpdateUserRequest,
    current_user: User = Depends(get_current_user_required),
    repo: UserRepository = Depends(get_user_repo),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    """Update a user. Omitted or null fields keep their current values."""
    return _apply_update(repo, hasher, user_id, request, current_user)


@router.patch("/{user_id}", response_model=UserResponse)
async def partial_update_user(
    user_id: str,
    request: UpdateUserRequest,
    current_user: User = Depends(get_current_user_required),
    repo: UserRepository = Depends(get_user_repo),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    """Update only the fields present in the request body."""
    return _apply_update(repo, hasher, user_id, request, current_user)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str,
    current_user: User = Depends(get_current_user_required),
    repo: UserRepository = Depends(get_user_repo),
):
    """Delete a user."""
    if not user_service.delete_user(repo, user_id):
        raise HTTPException(status_code=404, detail="User not found")

    logger.info("User deleted via API", extra={"userId": user_id, "actorId": current_user.id})
    return MessageResponse(message="User deleted successfully")
