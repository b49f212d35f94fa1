from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Cargo do usuário, usado para filtros e vínculos de equipe."""

    DIRETOR = "diretor"
    GESTOR = "gestor"
    CORRETOR = "corretor"
    RECEPCIONISTA = "recepcionista"
    PENDENTE = "pendente"


class PlantaoStatus(str, Enum):
    """Estado do plantão, derivado de gestor/corretor/confirmação."""

    AGUARDANDO_GESTOR = "aguardando_gestor"
    AGUARDANDO_CORRETOR = "aguardando_corretor"
    AGUARDANDO_CONFIRMACAO = "aguardando_confirmacao"
    CONFIRMADO = "confirmado"
