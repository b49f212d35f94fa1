from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, Sequence

from .model import Plantao

ComputeFn = Callable[[Plantao], dict[str, Any]]


class PlantaoRepository(Protocol):
    """Repository interface for plantões.

    The service depends on this interface, not on a concrete database.
    """

    def get_by_id(self, plantao_id: str) -> Optional[Plantao]:
        raise NotImplementedError

    def list(self, *, gestor_id: Optional[str] = None, corretor_id: Optional[str] = None) -> Sequence[Plantao]:
        """List plantões ordered by date and start time, optionally filtered."""

        raise NotImplementedError

    def insert(self, plantao: Plantao) -> Plantao:
        raise NotImplementedError

    def apply_update(self, plantao_id: str, compute: ComputeFn) -> Plantao:
        """Read, compute and write one plantão atomically.

        `compute` receives the current record and returns the fields to
        persist. Raises NotFoundError when the id is unknown; any exception
        from `compute` aborts the write.
        """

        raise NotImplementedError

    def delete(self, plantao_id: str) -> bool:
        raise NotImplementedError
