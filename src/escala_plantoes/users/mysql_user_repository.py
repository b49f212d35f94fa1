from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.enums import Role
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import Row, execute, is_duplicate_key, query_all, query_one
from .model import User
from .repository import UserRepository

_SELECT = "SELECT user_id, name, email, password_hash, role, gestor_id, created_at FROM users"

_UPDATABLE = ("name", "email", "password_hash", "role", "gestor_id")


def _row_to_user(row: Row) -> User:
    return User(
        user_id=str(row["user_id"]),
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        gestor_id=row.get("gestor_id"),
        created_at=row["created_at"],
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _one(self, where: str, value: str) -> Optional[User]:
        row = query_one(self._conn_factory, f"{_SELECT} WHERE {where}=%s", (value,))
        return _row_to_user(row) if row else None

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._one("user_id", user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return self._one("email", email)

    def list(self, *, role: Optional[Role] = None, gestor_id: Optional[str] = None) -> Sequence[User]:
        filters = {"role": role.value if role else None, "gestor_id": gestor_id}
        used = {col: v for col, v in filters.items() if v is not None}
        where = " AND ".join(f"{col}=%s" for col in used)

        sql = f"{_SELECT} {'WHERE ' + where if where else ''} ORDER BY name ASC, created_at ASC"
        return [_row_to_user(r) for r in query_all(self._conn_factory, sql, tuple(used.values()))]

    def insert(self, user: User) -> User:
        self._write(
            """
            INSERT INTO users(user_id, name, email, password_hash, role, gestor_id, created_at)
            VALUES(%s,%s,%s,%s,%s,%s,%s)
            """,
            (
                user.user_id,
                user.name,
                user.email,
                user.password_hash,
                user.role.value,
                user.gestor_id,
                user.created_at.replace(tzinfo=None),
            ),
        )
        return user

    def update(self, user_id: str, changes: dict[str, Any]) -> Optional[User]:
        unknown = set(changes) - set(_UPDATABLE)
        if unknown:
            raise KeyError(f"Not updatable: {sorted(unknown)}")

        if changes:
            assignments = ", ".join(f"{attr}=%s" for attr in changes)
            params = [v.value if isinstance(v, Role) else v for v in changes.values()]
            self._write(f"UPDATE users SET {assignments} WHERE user_id=%s", (*params, user_id))
        return self.get_by_id(user_id)

    def delete_by_id(self, user_id: str) -> bool:
        return execute(self._conn_factory, "DELETE FROM users WHERE user_id=%s", (user_id,)) > 0

    def _write(self, sql: str, params: Sequence[Any]) -> int:
        # email is the only unique column besides the primary key
        try:
            return execute(self._conn_factory, sql, params)
        except Exception as e:
            if is_duplicate_key(e):
                raise ConflictError("Este email já está cadastrado") from e
            raise
