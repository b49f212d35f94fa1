from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for users.

    Note: the service layer depends on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def list(self, *, role: Optional[Role] = None, gestor_id: Optional[str] = None) -> Sequence[User]:
        raise NotImplementedError

    def insert(self, user: User) -> User:
        """Persist a new user. Raises ConflictError on a duplicate email."""

        raise NotImplementedError

    def update(self, user_id: str, changes: dict[str, Any]) -> Optional[User]:
        """Apply attribute changes; returns None when the id is unknown."""

        raise NotImplementedError

    def delete_by_id(self, user_id: str) -> bool:
        raise NotImplementedError
