from __future__ import annotations

import logging

from ..core.enums import Role
from ..users.service import UserService

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "123456"


def seed_demo_users(user_service: UserService) -> int:
    """Create the demo team (diretor, gestor, corretor) on an empty database.

    Returns how many users were created.
    """
    existing = user_service.list_users()
    if existing:
        logger.info("seed skipped: %d users already exist", len(existing))
        return 0

    user_service.create_user(
        name="Admin Diretor", email="diretor@escala.com", password=DEMO_PASSWORD, role=Role.DIRETOR
    )
    gestor = user_service.create_user(
        name="Gestor Batista", email="gestor@escala.com", password=DEMO_PASSWORD, role=Role.GESTOR
    )
    user_service.create_user(
        name="Corretor",
        email="corretor@escala.com",
        password=DEMO_PASSWORD,
        role=Role.CORRETOR,
        gestor_id=gestor.user_id,
    )
    logger.info("seed finished: 3 demo users created")
    return 3
