"""Public and protected probe endpoints for checking bearer auth wiring."""

from fastapi import APIRouter, Depends

from api.models import MessageResponse
from api.security import get_current_user_required
from domain.model.user import User

router = APIRouter(prefix="/api", tags=["access"])


@router.get("/public", response_model=MessageResponse)
async def public_endpoint():
    return MessageResponse(message="This is a public endpoint")


@router.get("/protected", response_model=MessageResponse)
async def protected_endpoint(current_user: User = Depends(get_current_user_required)):
    return MessageResponse(message="This is a protected endpoint")
