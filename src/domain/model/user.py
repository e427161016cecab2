# domain/model/user.py

import uuid
from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum
from typing import TypeVar, Union

DEFAULT_ROLE = 'USER'


@dataclass(frozen=True)
class Phone:
    """Contact number owned by exactly one User.

    Phones hold no reference back to their user; the owning User keeps
    them by value and back-lookups go through the repository.
    """
    id: str
    number: str
    city_code: str
    country_code: str

    @staticmethod
    def create(number: str, city_code: str, country_code: str) -> 'Phone':
        """Factory method, assigns a fresh phone id."""
        return Phone(
            id=uuid.uuid4().hex,
            number=number,
            city_code=city_code,
            country_code=country_code,
        )


@dataclass(frozen=True)
class PhoneInput:
    """Caller-supplied phone data, before an id is assigned."""
    number: str
    city_code: str
    country_code: str


@dataclass
class User:
    """Domain model representing a user.

    `id`, `created_at` and `updated_at` stay None until the first save,
    where the repository assigns them.
    """
    username: str
    email: str
    password_hash: str = field(repr=False)
    id: str | None = None
    role: str = DEFAULT_ROLE
    active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None
    last_login: datetime | None = None
    phones: list[Phone] = field(default_factory=list)

    def replace_phones(self, phones: list[PhoneInput]) -> None:
        """Discard the current phone set and attach freshly created phones."""
        self.phones = [Phone.create(p.number, p.city_code, p.country_code) for p in phones]


# ── Partial updates ──────────────────────────────────────


class _Unset(Enum):
    UNSET = 'UNSET'

    def __repr__(self) -> str:
        return 'UNSET'

    def __bool__(self) -> bool:
        return False


UNSET = _Unset.UNSET

T = TypeVar('T')
Maybe = Union[T, _Unset]


@dataclass(frozen=True)
class UserUpdate:
    """Optional-field changes for update_user.

    A field left at UNSET was not supplied by the caller; a field set to
    None was supplied as null. Both are no-ops for every field, but the
    distinction is kept so callers can tell what the request contained.
    """
    username: Maybe[str | None] = UNSET
    email: Maybe[str | None] = UNSET
    password: Maybe[str | None] = UNSET
    active: Maybe[bool | None] = UNSET
    phones: Maybe[list[PhoneInput] | None] = UNSET

    def is_set(self, name: str) -> bool:
        return getattr(self, name) is not UNSET

    def supplied(self) -> list[str]:
        """Names of fields present in the update."""
        return [f.name for f in fields(self) if self.is_set(f.name)]


@dataclass(frozen=True)
class AuthSession:
    """Result of a successful login or registration."""
    user: User
    token: str


@dataclass(frozen=True)
class TokenIdentity:
    """Identity recovered from a verified bearer token."""
    user_id: str
    username: str
    issued_at: datetime
    expires_at: datetime
