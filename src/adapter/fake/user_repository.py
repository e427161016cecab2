"""In-memory implementation of UserRepository for testing."""

import copy
import threading
import uuid
from datetime import datetime, timezone

from domain.model.errors import EmailTakenError, NotFoundError, UsernameTakenError
from domain.model.user import User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}
        self._lock = threading.Lock()

    # ── write operations ─────────────────────────────────────

    def save(self, user: User) -> User:
        with self._lock:
            if user.id is not None and user.id not in self.store:
                raise NotFoundError()

            # Uniqueness is checked under the lock, so a racing save that
            # passed the service pre-check is still rejected here.
            for other in self.store.values():
                if other.id == user.id:
                    continue
                if other.username == user.username:
                    raise UsernameTakenError()
                if other.email == user.email:
                    raise EmailTakenError()

            stored = copy.deepcopy(user)
            now = datetime.now(timezone.utc)
            if stored.id is None:
                stored.id = uuid.uuid4().hex
                stored.created_at = now
            stored.updated_at = now
            self.store[stored.id] = stored
            return copy.deepcopy(stored)

    def delete_by_id(self, user_id: str) -> bool:
        with self._lock:
            return self.store.pop(user_id, None) is not None

    # ── read operations ──────────────────────────────────────

    def _find(self, predicate) -> User | None:
        for user in self.store.values():
            if predicate(user):
                return copy.deepcopy(user)
        return None

    def get_by_id(self, user_id: str) -> User | None:
        user = self.store.get(user_id)
        return copy.deepcopy(user) if user else None

    def get_by_username(self, username: str) -> User | None:
        return self._find(lambda u: u.username == username)

    def get_by_email(self, email: str) -> User | None:
        return self._find(lambda u: u.email == email)

    def get_by_phone_id(self, phone_id: str) -> User | None:
        return self._find(lambda u: any(p.id == phone_id for p in u.phones))

    def exists_by_id(self, user_id: str) -> bool:
        return user_id in self.store

    def exists_by_email(self, email: str) -> bool:
        return any(u.email == email for u in self.store.values())

    def list_all(self) -> list[User]:
        return [copy.deepcopy(u) for u in self.store.values()]
