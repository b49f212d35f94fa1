from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import utc_now
from ..common.ids import new_id
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from ..users.repository import UserRepository
from .lifecycle import compute_update, initial_status
from .model import UNSET, Plantao, PlantaoUpdate
from .repository import PlantaoRepository
from .validation import validate_plantao_data

logger = logging.getLogger(__name__)


class PlantaoService:
    """Use cases for plantões.

    Status is never taken from the client: it is computed here on create and
    by the lifecycle engine on every update.
    """

    def __init__(self, plantoes: PlantaoRepository, users: UserRepository):
        self._plantoes = plantoes
        self._users = users

    def create(self, payload: Mapping[str, Any]) -> Plantao:
        errors = validate_plantao_data(payload)
        if errors:
            raise ValidationError(errors)

        data = PlantaoUpdate.from_payload(payload)
        gestor_id = data.gestor_id or None
        if gestor_id:
            self._require_gestor(gestor_id)

        plantao = Plantao(
            plantao_id=new_id(),
            title=data.title or "",
            date=data.date or "",
            start_time=data.start_time or "",
            end_time=data.end_time or "",
            location=data.location or "",
            notes=data.notes or "",
            gestor_id=gestor_id,
            corretor_id=None,
            confirmed_by_corretor=False,
            status=initial_status(gestor_id),
            created_at=utc_now(),
        )
        self._plantoes.insert(plantao)
        logger.info("plantao %s created with status %s", plantao.plantao_id, plantao.status.value)
        return plantao

    def update(self, plantao_id: str, payload: Mapping[str, Any]) -> Plantao:
        update = PlantaoUpdate.from_payload(payload)

        def compute(current: Plantao) -> dict[str, Any]:
            merged = {
                "title": update.title if update.has("title") else current.title,
                "location": update.location if update.has("location") else current.location,
                "date": update.date if update.has("date") else current.date,
                "startTime": update.start_time if update.has("start_time") else current.start_time,
                "endTime": update.end_time if update.has("end_time") else current.end_time,
            }
            errors = validate_plantao_data(merged)
            if errors:
                raise ValidationError(errors)

            changes = compute_update(current, self._without_foreign_corretor(update))
            self._check_references(current, changes)
            return changes

        updated = self._plantoes.apply_update(plantao_id, compute)
        logger.info("plantao %s updated, status=%s", plantao_id, updated.status.value)
        return updated

    def delete(self, plantao_id: str) -> None:
        if self._plantoes.delete(plantao_id):
            logger.info("plantao %s deleted", plantao_id)

    def get(self, plantao_id: str) -> Plantao:
        plantao = self._plantoes.get_by_id(plantao_id)
        if not plantao:
            raise NotFoundError("Plantão não encontrado")
        return plantao

    def list_all(self) -> Sequence[Plantao]:
        return self._plantoes.list()

    def list_by_gestor(self, gestor_id: str) -> Sequence[Plantao]:
        return self._plantoes.list(gestor_id=gestor_id)

    def list_by_corretor(self, corretor_id: str) -> Sequence[Plantao]:
        return self._plantoes.list(corretor_id=corretor_id)

    def _without_foreign_corretor(self, update: PlantaoUpdate) -> PlantaoUpdate:
        """A full record sent with `gestorId` may still carry a corretor of
        another team; that corretor falls under the gestor-change rule and is
        dropped instead of rejected.
        """
        if not (update.has("gestor_id") and update.corretor_id):
            return update
        corretor = self._users.get_by_id(update.corretor_id)
        if corretor and corretor.role == Role.CORRETOR and corretor.gestor_id == update.gestor_id:
            return update
        logger.info("ignoring corretor %s outside the team of gestor %s", update.corretor_id, update.gestor_id)
        return replace(update, corretor_id=UNSET)

    def _check_references(self, current: Plantao, changes: Mapping[str, Any]) -> None:
        gestor_id: Optional[str] = changes.get("gestor_id", current.gestor_id)
        if "gestor_id" in changes and gestor_id and gestor_id != current.gestor_id:
            self._require_gestor(gestor_id)

        corretor_id: Optional[str] = changes.get("corretor_id", current.corretor_id)
        if "corretor_id" in changes and corretor_id and corretor_id != current.corretor_id:
            corretor = self._users.get_by_id(corretor_id)
            if not corretor or corretor.role != Role.CORRETOR:
                raise ValidationError("Corretor inválido")
            if not gestor_id or corretor.gestor_id != gestor_id:
                raise ValidationError("Corretor não pertence à equipe do gestor do plantão")

    def _require_gestor(self, gestor_id: str) -> None:
        gestor = self._users.get_by_id(gestor_id)
        if not gestor or gestor.role != Role.GESTOR:
            raise ValidationError("Gestor inválido")
