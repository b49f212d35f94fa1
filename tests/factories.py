from __future__ import annotations

from dataclasses import dataclass

from escala_plantoes.core.enums import Role
from escala_plantoes.users.model import User
from escala_plantoes.users.service import UserService


@dataclass
class Team:
    diretor: User
    gestor: User
    outro_gestor: User
    corretor: User
    corretor_outro_gestor: User


def build_team(users: UserService) -> Team:
    diretor = users.create_user(name="Admin Diretor", email="diretor@escala.com", password="123456", role=Role.DIRETOR)
    gestor = users.create_user(name="João Batista", email="joao@escala.com", password="123456", role=Role.GESTOR)
    outro = users.create_user(name="Claudia Glasson", email="claudia@escala.com", password="123456", role=Role.GESTOR)
    corretor = users.create_user(
        name="Matheus Catani", email="matheus@escala.com", password="123456", role=Role.CORRETOR, gestor_id=gestor.user_id
    )
    corretor_outro = users.create_user(
        name="Carlos Silva", email="carlos@escala.com", password="123456", role=Role.CORRETOR, gestor_id=outro.user_id
    )
    return Team(diretor, gestor, outro, corretor, corretor_outro)
