from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.enums import PlantaoStatus
from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import Row, db_cursor, execute, query_all, query_one
from .lifecycle import apply_changes
from .model import Plantao
from .repository import ComputeFn, PlantaoRepository

# attribute -> column; `date` is a reserved word in MySQL
_COLUMN_FOR = {
    "plantao_id": "plantao_id",
    "title": "title",
    "date": "shift_date",
    "start_time": "start_time",
    "end_time": "end_time",
    "location": "location",
    "notes": "notes",
    "gestor_id": "gestor_id",
    "corretor_id": "corretor_id",
    "confirmed_by_corretor": "confirmed_by_corretor",
    "status": "status",
    "created_at": "created_at",
}

_SELECT = f"SELECT {', '.join(_COLUMN_FOR.values())} FROM plantoes"
_ORDER = "ORDER BY shift_date ASC, start_time ASC, created_at ASC"


def _row_to_plantao(r: Row) -> Plantao:
    return Plantao(
        plantao_id=str(r["plantao_id"]),
        title=r.get("title") or "",
        date=r.get("shift_date") or "",
        start_time=r.get("start_time") or "",
        end_time=r.get("end_time") or "",
        location=r.get("location") or "",
        notes=r.get("notes") or "",
        gestor_id=r.get("gestor_id"),
        corretor_id=r.get("corretor_id"),
        confirmed_by_corretor=bool(r.get("confirmed_by_corretor")),
        status=PlantaoStatus(r["status"]),
        created_at=r["created_at"],
    )


def _db_value(value: Any) -> Any:
    if isinstance(value, PlantaoStatus):
        return value.value
    if isinstance(value, bool):
        return int(value)
    if hasattr(value, "tzinfo") and value.tzinfo is not None:
        return value.replace(tzinfo=None)
    return value


class MySQLPlantaoRepository(PlantaoRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, plantao_id: str) -> Optional[Plantao]:
        r = query_one(self._conn_factory, f"{_SELECT} WHERE plantao_id=%s", (plantao_id,))
        return _row_to_plantao(r) if r else None

    def list(self, *, gestor_id: Optional[str] = None, corretor_id: Optional[str] = None) -> Sequence[Plantao]:
        filters = {"gestor_id": gestor_id, "corretor_id": corretor_id}
        used = {col: v for col, v in filters.items() if v is not None}
        where = " AND ".join(f"{col}=%s" for col in used)

        sql = f"{_SELECT} {'WHERE ' + where if where else ''} {_ORDER}"
        return [_row_to_plantao(r) for r in query_all(self._conn_factory, sql, tuple(used.values()))]

    def insert(self, plantao: Plantao) -> Plantao:
        values = [_db_value(getattr(plantao, attr)) for attr in _COLUMN_FOR]
        placeholders = ",".join(["%s"] * len(values))
        execute(
            self._conn_factory,
            f"INSERT INTO plantoes({', '.join(_COLUMN_FOR.values())}) VALUES({placeholders})",
            values,
        )
        return plantao

    def apply_update(self, plantao_id: str, compute: ComputeFn) -> Plantao:
        with db_cursor(self._conn_factory) as cur:
            # Row lock: concurrent updates of the same plantão serialize here.
            cur.execute(f"{_SELECT} WHERE plantao_id=%s FOR UPDATE", (plantao_id,))
            r = cur.fetchone()
            if not r:
                raise NotFoundError("Plantão não encontrado")

            current = _row_to_plantao(r)
            changes = compute(current)

            if changes:
                assignments = ", ".join(f"{_COLUMN_FOR[attr]}=%s" for attr in changes)
                params = [_db_value(v) for v in changes.values()]
                cur.execute(f"UPDATE plantoes SET {assignments} WHERE plantao_id=%s", (*params, plantao_id))
            return apply_changes(current, changes)

    def delete(self, plantao_id: str) -> bool:
        return execute(self._conn_factory, "DELETE FROM plantoes WHERE plantao_id=%s", (plantao_id,)) > 0
