from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import utc_now
from ..common.ids import new_id
from ..common.validators import (
    blank_to_none,
    normalize_email,
    require_max_length,
    require_min_length,
    require_non_empty,
)
from ..core.constants import MAX_EMAIL_LENGTH, MAX_NAME_LENGTH, MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


def parse_role(value: Any) -> Role:
    try:
        return Role(str(value).strip().lower())
    except ValueError:
        raise ValidationError("Cargo inválido") from None


def _valid_name(value: Any) -> str:
    return require_max_length(require_non_empty(value, "Nome é obrigatório"), "Nome", MAX_NAME_LENGTH)


def _valid_email(value: Any) -> str:
    email = normalize_email(require_non_empty(value, "Email é obrigatório"))
    return require_max_length(email, "Email", MAX_EMAIL_LENGTH)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: str
    name: str
    role: Role


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        user = self._users.get_by_email(normalize_email(email))
        if not user or not isinstance(password, str):
            raise AuthenticationError("Email ou senha inválidos")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Email ou senha inválidos")

        return SessionUser(user_id=user.user_id, name=user.name, role=user.role)


class UserService:
    """Use case: self-registration and team management."""

    def __init__(self, users: UserRepository):
        self._users = users

    def register(self, *, name: Optional[str], email: Optional[str], password: Optional[str]) -> User:
        """Auto-cadastro: o usuário entra como 'pendente' até receber um cargo."""
        if not name or not email or not password:
            raise ValidationError("Nome, email e senha são obrigatórios")
        return self.create_user(name=name, email=email, password=password, role=Role.PENDENTE)

    def create_user(
        self,
        *,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
        role: Role,
        gestor_id: Optional[str] = None,
    ) -> User:
        name = _valid_name(name)
        email = _valid_email(email)
        require_min_length(password, "Senha", MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(email):
            raise ConflictError("Este email já está cadastrado")

        user = User(
            user_id=new_id(),
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
            gestor_id=self._resolve_gestor(role, gestor_id),
            created_at=utc_now(),
        )
        self._users.insert(user)
        logger.info("user %s created with role %s", user.user_id, role.value)
        return user

    def update_user(self, user_id: str, payload: Mapping[str, Any]) -> User:
        current = self.get_user(user_id)
        changes: dict[str, Any] = {}

        if "name" in payload:
            changes["name"] = _valid_name(payload["name"])
        if "email" in payload:
            email = _valid_email(payload["email"])
            existing = self._users.get_by_email(email)
            if existing and existing.user_id != user_id:
                raise ConflictError("Este email já está cadastrado")
            changes["email"] = email
        if payload.get("password"):
            require_min_length(payload["password"], "Senha", MIN_PASSWORD_LENGTH)
            changes["password_hash"] = generate_password_hash(payload["password"])

        role = parse_role(payload["role"]) if "role" in payload else current.role
        if role != current.role:
            changes["role"] = role

        if "gestorId" in payload or role != current.role:
            gestor_id = payload["gestorId"] if "gestorId" in payload else current.gestor_id
            changes["gestor_id"] = self._resolve_gestor(role, gestor_id)

        updated = self._users.update(user_id, changes)
        if updated is None:
            raise NotFoundError("Usuário não encontrado")
        return updated

    def delete_user(self, user_id: str) -> None:
        if not self._users.delete_by_id(user_id):
            raise NotFoundError("Usuário não encontrado")
        logger.info("user %s deleted", user_id)

    def get_user(self, user_id: str) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("Usuário não encontrado")
        return user

    def list_users(self) -> Sequence[User]:
        return self._users.list()

    def list_by_role(self, role: Any) -> Sequence[User]:
        return self._users.list(role=parse_role(role))

    def list_corretores_by_gestor(self, gestor_id: str) -> Sequence[User]:
        return self._users.list(role=Role.CORRETOR, gestor_id=gestor_id)

    def _resolve_gestor(self, role: Role, gestor_id: Any) -> Optional[str]:
        # The gestor link only means something for corretores.
        gestor_id = blank_to_none(gestor_id)
        if role != Role.CORRETOR or gestor_id is None:
            return None
        gestor = self._users.get_by_id(gestor_id)
        if not gestor or gestor.role != Role.GESTOR:
            raise ValidationError("Gestor inválido")
        return gestor_id
