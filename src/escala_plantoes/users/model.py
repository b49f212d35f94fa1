from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import to_iso
from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Entidade de domínio: usuário.

    Obs.: objeto de dados puro (sem acesso a banco). A senha só existe como
    hash e nunca é serializada.
    """

    user_id: str
    name: str
    email: str
    password_hash: str
    role: Role
    gestor_id: Optional[str]
    created_at: datetime

    def to_public_dict(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "gestorId": self.gestor_id,
            "createdAt": to_iso(self.created_at),
        }
