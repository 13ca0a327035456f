"""Repository protocols (interfaces) for testability and clear boundaries."""
from typing import List, Protocol

from userapi.models import User


class UserRepository(Protocol):
    """User persistence: one storage statement per operation."""

    def ensure_schema(self) -> None:
        """Create the user table if it does not exist. Raises StorageError."""
        ...

    def list_all(self) -> List[User]:
        """All users in row order. Raises StorageError."""
        ...

    def count(self) -> int:
        ...

    def get_by_id(self, user_id: int) -> User:
        """Raises NotFoundError when no row has this id."""
        ...

    def get_by_username(self, username: str) -> User:
        """Raises NotFoundError when no row has this username."""
        ...

    def create(self, user: User) -> User:
        """Insert user (any id is ignored); return a copy with the assigned id."""
        ...

    def update(self, user: User) -> User:
        """Overwrite username/password/email of row user.id. Raises NotFoundError if no row matched."""
        ...

    def delete(self, user: User) -> None:
        """Delete row user.id. Raises NotFoundError if no row matched."""
        ...
