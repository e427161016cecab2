"""Port definition for UserRepository."""

from typing import Protocol

from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Read methods return detached copies; changes reach the store only
    through save().
    """
    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def get_by_username(self, username: str) -> User | None:
        """Find a user by exact username. Return User or None if not found."""
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        ...

    def get_by_phone_id(self, phone_id: str) -> User | None:
        """Find the user owning a phone. Return User or None if not found."""
        ...

    def exists_by_id(self, user_id: str) -> bool: ...

    def exists_by_email(self, email: str) -> bool: ...

    def list_all(self) -> list[User]: ...

    def save(self, user: User) -> User:
        """Insert or replace a user and return the stored copy.

        First save assigns id, created_at and updated_at; every save
        refreshes updated_at.

        Raises:
            UsernameTakenError: another user holds the username
            EmailTakenError: another user holds the email
            StoreError: the write failed
        """
        ...

    def delete_by_id(self, user_id: str) -> bool:
        """Delete a user with its phones. Return True if a record was removed."""
        ...
