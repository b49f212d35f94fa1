from __future__ import annotations

import importlib
import logging

from config import get_settings_module

from escala_plantoes.database.bootstrap import apply_schema, list_tables
from escala_plantoes.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_dict(dict(settings.DB_CONFIG))
    conn = DatabaseConnection.get_instance(config)

    apply_schema(conn)
    tables = list_tables(conn)
    logging.info(
        "OK: Applied schema.sql -> %s@%s:%s/%s (tables=%d)",
        config.user, config.host, config.port, config.database, len(tables),
    )


if __name__ == "__main__":
    main()
