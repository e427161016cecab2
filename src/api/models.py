"""Pydantic models for API request/response."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from domain.model.user import UNSET, PhoneInput, User, UserUpdate


class PhoneRequest(BaseModel):
    """Phone entry supplied by the caller."""
    number: str = Field(..., min_length=1)
    city_code: str = Field(..., min_length=1)
    country_code: str = Field(..., min_length=1)

    def to_domain(self) -> PhoneInput:
        return PhoneInput(number=self.number, city_code=self.city_code, country_code=self.country_code)


class PhoneResponse(BaseModel):
    id: str
    number: str
    city_code: str
    country_code: str


class LoginRequest(BaseModel):
    """Request model for user login."""
    username: str
    password: str


class RegisterRequest(BaseModel):
    """Request model for user registration.

    Email and password formats are checked by the user service, so that
    rule order and messages stay in one place.
    """
    username: str
    email: Optional[str] = None
    password: Optional[str] = None
    phones: Optional[list[PhoneRequest]] = None


class UpdateUserRequest(BaseModel):
    """Request model for PUT and PATCH on a user.

    Fields left out of the body are not applied. For PUT and PATCH alike a
    null or blank username/email/password is ignored, and `phones`
    replaces the whole phone list when given.
    """
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    active: Optional[bool] = None
    phones: Optional[list[PhoneRequest]] = None

    def to_domain(self) -> UserUpdate:
        """Build a UserUpdate carrying only the fields present in the request body."""
        values = {}
        for name in self.model_fields_set:
            value = getattr(self, name)
            if name == 'phones' and value is not None:
                value = [p.to_domain() for p in value]
            values[name] = value
        return UserUpdate(**{name: values.get(name, UNSET) for name in UserUpdate.__dataclass_fields__})


class UserResponse(BaseModel):
    """Outward projection of a user. Never carries the password hash."""
    id: str
    username: str
    email: str
    role: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    last_login: Optional[datetime] = None
    active: bool
    phones: list[PhoneResponse] = Field(default_factory=list)


class AuthResponse(UserResponse):
    """User projection plus the bearer token, for login and registration."""
    token: str


class MessageResponse(BaseModel):
    message: str


def to_user_response(user: User) -> UserResponse:
    """Convert domain User to API UserResponse."""
    return UserResponse(**_projection(user))


def to_auth_response(user: User, token: str) -> AuthResponse:
    return AuthResponse(**_projection(user), token=token)


def _projection(user: User) -> dict:
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "role": user.role,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
        "last_login": user.last_login,
        "active": user.active,
        "phones": [
            PhoneResponse(
                id=p.id,
                number=p.number,
                city_code=p.city_code,
                country_code=p.country_code,
            )
            for p in user.phones
        ],
    }
