from __future__ import annotations

import threading
from dataclasses import replace
from typing import Any, Optional, Sequence

from ..core.enums import Role
from ..core.exceptions import ConflictError
from .model import User
from .repository import UserRepository


class InMemoryUserRepository(UserRepository):
    def __init__(self):
        self._by_id: dict[str, User] = {}
        self._lock = threading.Lock()

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._by_id.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        for user in self._by_id.values():
            if user.email == email:
                return user
        return None

    def list(self, *, role: Optional[Role] = None, gestor_id: Optional[str] = None) -> Sequence[User]:
        items = list(self._by_id.values())
        if role is not None:
            items = [u for u in items if u.role == role]
        if gestor_id is not None:
            items = [u for u in items if u.gestor_id == gestor_id]
        items.sort(key=lambda u: (u.name.lower(), u.created_at))
        return items

    def _email_taken(self, email: str, *, exclude_id: Optional[str] = None) -> bool:
        return any(u.email == email and u.user_id != exclude_id for u in self._by_id.values())

    def insert(self, user: User) -> User:
        with self._lock:
            if self._email_taken(user.email):
                raise ConflictError("Este email já está cadastrado")
            self._by_id[user.user_id] = user
        return user

    def update(self, user_id: str, changes: dict[str, Any]) -> Optional[User]:
        with self._lock:
            current = self._by_id.get(user_id)
            if current is None:
                return None
            if "email" in changes and self._email_taken(changes["email"], exclude_id=user_id):
                raise ConflictError("Este email já está cadastrado")
            updated = replace(current, **changes)
            self._by_id[user_id] = updated
            return updated

    def delete_by_id(self, user_id: str) -> bool:
        with self._lock:
            return self._by_id.pop(user_id, None) is not None
