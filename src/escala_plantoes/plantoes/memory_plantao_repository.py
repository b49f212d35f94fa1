from __future__ import annotations

import threading
from typing import Optional, Sequence

from ..core.exceptions import NotFoundError
from .lifecycle import apply_changes
from .model import Plantao
from .repository import ComputeFn, PlantaoRepository


class InMemoryPlantaoRepository(PlantaoRepository):
    def __init__(self):
        self._by_id: dict[str, Plantao] = {}
        self._lock = threading.Lock()

    def get_by_id(self, plantao_id: str) -> Optional[Plantao]:
        return self._by_id.get(plantao_id)

    def list(self, *, gestor_id: Optional[str] = None, corretor_id: Optional[str] = None) -> Sequence[Plantao]:
        items = list(self._by_id.values())
        if gestor_id is not None:
            items = [p for p in items if p.gestor_id == gestor_id]
        if corretor_id is not None:
            items = [p for p in items if p.corretor_id == corretor_id]
        items.sort(key=lambda p: (p.date, p.start_time, p.created_at))
        return items

    def insert(self, plantao: Plantao) -> Plantao:
        with self._lock:
            self._by_id[plantao.plantao_id] = plantao
        return plantao

    def apply_update(self, plantao_id: str, compute: ComputeFn) -> Plantao:
        with self._lock:
            current = self._by_id.get(plantao_id)
            if current is None:
                raise NotFoundError("Plantão não encontrado")
            updated = apply_changes(current, compute(current))
            self._by_id[plantao_id] = updated
            return updated

    def delete(self, plantao_id: str) -> bool:
        with self._lock:
            return self._by_id.pop(plantao_id, None) is not None
