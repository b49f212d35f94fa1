from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = "escala_plantoes"
    charset: str = "utf8mb4"

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        """Build from a settings `DB_CONFIG` dict; missing keys keep the defaults."""
        known = {k: db_config[k] for k in cls.__dataclass_fields__ if db_config.get(k) not in (None, "")}
        if "port" in known:
            known["port"] = int(known["port"])
        return cls(**known)


class DatabaseConnection:
    """Hands out short-lived MySQL connections for one database config.

    One factory per distinct config, shared by every repository of the app.
    """

    _instances: ClassVar[dict[DBConfig, "DatabaseConnection"]] = {}

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if config not in cls._instances:
            cls._instances[config] = cls(config)
        return cls._instances[config]

    def connect(self, *, with_database: bool = True):
        options = {
            "host": self._config.host,
            "port": self._config.port,
            "user": self._config.user,
            "password": self._config.password,
            "charset": self._config.charset,
            "autocommit": False,
            "use_pure": True,
        }
        if with_database:
            options["database"] = self._config.database
        return mysql.connector.connect(**options)
