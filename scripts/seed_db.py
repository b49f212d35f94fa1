from __future__ import annotations

import importlib
import logging

from config import get_settings_module

from escala_plantoes.container import build_container
from escala_plantoes.database.seed import seed_demo_users


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=dict(settings.DB_CONFIG),
        storage=getattr(settings, "STORAGE_BACKEND", "mysql"),
    )

    created = seed_demo_users(container.user_service)
    logging.info("OK: Seeded database (users created=%d)", created)


if __name__ == "__main__":
    main()
