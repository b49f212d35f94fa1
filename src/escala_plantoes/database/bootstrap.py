from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"

# quoted strings are matched whole so a ';' inside them never splits
_TOKEN_RE = re.compile(r"'(?:[^'\\]|\\.)*'|\"(?:[^\"\\]|\\.)*\"|;|[^'\";]+", re.S)
# database selection comes from DB_CONFIG, not from the file
_DB_SELECTION_RE = re.compile(r"^\s*(CREATE\s+DATABASE|USE)\b", re.I)


def iter_sql_statements(sql: str) -> Iterator[str]:
    """Split a schema file into statements, dropping `--` comment lines."""
    sql = "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))
    current: list[str] = []
    for token in _TOKEN_RE.findall(sql):
        if token == ";":
            stmt = "".join(current).strip()
            current = []
            if stmt:
                yield stmt
        else:
            current.append(token)
    tail = "".join(current).strip()
    if tail:
        yield tail


def load_schema(schema_path: str | Path = DEFAULT_SCHEMA_PATH) -> list[str]:
    sql = Path(schema_path).read_text(encoding="utf-8")
    return [s for s in iter_sql_statements(sql) if not _DB_SELECTION_RE.match(s)]


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    cfg = conn_factory.config
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(f"CREATE DATABASE IF NOT EXISTS `{cfg.database}` CHARACTER SET {cfg.charset}")
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path = DEFAULT_SCHEMA_PATH) -> None:
    """Create the database if needed and run every statement of the schema file."""
    ensure_database_exists(conn_factory)
    statements = load_schema(schema_path)

    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("schema applied: %d statements from %s", len(statements), schema_path)


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return sorted(row[0] for row in cur.fetchall())
    finally:
        conn.close()
