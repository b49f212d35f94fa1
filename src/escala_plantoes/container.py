from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .database.connection import DBConfig, DatabaseConnection
from .plantoes.memory_plantao_repository import InMemoryPlantaoRepository
from .plantoes.mysql_plantao_repository import MySQLPlantaoRepository
from .plantoes.repository import PlantaoRepository
from .plantoes.service import PlantaoService
from .users.memory_user_repository import InMemoryUserRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService

STORAGE_BACKENDS = ("mysql", "memory")


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    plantoes_repo: PlantaoRepository

    auth_service: AuthService
    user_service: UserService
    plantao_service: PlantaoService


def build_container(*, db_config: dict, storage: str = "mysql") -> Container:
    if storage not in STORAGE_BACKENDS:
        raise ValueError(f"Unknown storage backend: {storage!r}")

    conn: Optional[DatabaseConnection] = None
    if storage == "memory":
        users_repo: UserRepository = InMemoryUserRepository()
        plantoes_repo: PlantaoRepository = InMemoryPlantaoRepository()
    else:
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
        users_repo = MySQLUserRepository(conn)
        plantoes_repo = MySQLPlantaoRepository(conn)

    return Container(
        conn=conn,
        users_repo=users_repo,
        plantoes_repo=plantoes_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        plantao_service=PlantaoService(plantoes_repo, users_repo),
    )
