from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import to_iso
from ..common.validators import blank_to_none
from ..core.enums import PlantaoStatus


class _Unset:
    """Marker for a field that is absent from an update payload."""

    _instance: Optional["_Unset"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()

# JSON key -> attribute name, for the fields a client may write.
WRITABLE_FIELDS = {
    "title": "title",
    "date": "date",
    "startTime": "start_time",
    "endTime": "end_time",
    "location": "location",
    "notes": "notes",
    "gestorId": "gestor_id",
    "corretorId": "corretor_id",
    "confirmedByCorretor": "confirmed_by_corretor",
}

REFERENCE_FIELDS = ("gestor_id", "corretor_id")


@dataclass(frozen=True)
class Plantao:
    """Entidade de domínio: plantão (turno de atendimento).

    Objeto de dados puro; `status` é sempre recalculado pelo ciclo de vida.
    """

    plantao_id: str
    title: str
    date: str
    start_time: str
    end_time: str
    location: str
    notes: str
    gestor_id: Optional[str]
    corretor_id: Optional[str]
    confirmed_by_corretor: bool
    status: PlantaoStatus
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.plantao_id,
            "title": self.title,
            "date": self.date,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "location": self.location,
            "notes": self.notes,
            "gestorId": self.gestor_id,
            "corretorId": self.corretor_id,
            "confirmedByCorretor": self.confirmed_by_corretor,
            "status": self.status.value,
            "createdAt": to_iso(self.created_at),
        }


def _coerce(attr: str, value: Any) -> Any:
    if attr in REFERENCE_FIELDS:
        return blank_to_none(value)
    if attr == "confirmed_by_corretor":
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "sim", "yes"}
        return bool(value)
    return "" if value is None else str(value).strip()


@dataclass(frozen=True)
class PlantaoUpdate:
    """Partial update of a plantão.

    Every field defaults to UNSET, so "omitted" and "explicitly cleared"
    (None / empty string) stay distinguishable.
    """

    title: Any = UNSET
    date: Any = UNSET
    start_time: Any = UNSET
    end_time: Any = UNSET
    location: Any = UNSET
    notes: Any = UNSET
    gestor_id: Any = UNSET
    corretor_id: Any = UNSET
    confirmed_by_corretor: Any = UNSET
    extra: Mapping[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "PlantaoUpdate":
        """Build from a camelCase JSON body.

        Server-owned keys (id, status, createdAt, _id) and unknown keys are
        kept aside in `extra` and never written.
        """
        values: dict[str, Any] = {}
        extra: dict[str, Any] = {}
        for key, value in payload.items():
            attr = WRITABLE_FIELDS.get(key)
            if attr is None:
                extra[key] = value
                continue
            values[attr] = _coerce(attr, value)
        return cls(extra=extra, **values)

    def provided(self) -> dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name != "extra" and getattr(self, f.name) is not UNSET
        }

    def has(self, attr: str) -> bool:
        return getattr(self, attr) is not UNSET
