"""Ciclo de vida do status do plantão.

aguardando_gestor -> aguardando_corretor -> aguardando_confirmacao -> confirmado

Pure functions only: the service reads the current record, calls
`compute_update` and persists the returned fields in the same transaction.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Optional

from ..core.enums import PlantaoStatus
from .model import Plantao, PlantaoUpdate


def initial_status(gestor_id: Optional[str]) -> PlantaoStatus:
    return derive_status(gestor_id, None, False)


def compute_update(current: Plantao, update: PlantaoUpdate) -> dict[str, Any]:
    """Return every field to persist for `update`, status included.

    The assignment fields are resolved first and the status is derived from
    them, so applying the same update twice leaves the same record:

    1. gestor assigned where there was none -> aguardando_corretor
    2. corretor assigned (new or swapped) -> aguardando_confirmacao,
       confirmation reset
    3. confirmedByCorretor=True with a corretor -> confirmado, also when it
       comes in the same update as the assignment
    4. corretor removed -> aguardando_corretor, confirmation reset
    5. nothing above -> status unchanged

    A gestor change drops the attached corretor: a corretor belongs to
    exactly one gestor's team. A payload carrying `gestorId` only assigns a
    corretor together with a gestor change; next to an unchanged gestor the
    `corretorId` is an echo of a full record and is ignored. Without a
    gestor there is no corretor.
    """
    changes = update.provided()

    gestor_sent = "gestor_id" in changes
    gestor_id = changes.get("gestor_id", current.gestor_id)
    gestor_changed = gestor_sent and gestor_id != current.gestor_id

    corretor_id = current.corretor_id
    if "corretor_id" in changes:
        requested = changes.pop("corretor_id")
        if not requested:
            corretor_id = None
        elif requested != current.corretor_id and (gestor_changed or not gestor_sent):
            corretor_id = requested
    if gestor_changed and corretor_id == current.corretor_id:
        corretor_id = None
    if not gestor_id:
        corretor_id = None

    if not corretor_id:
        confirmed = False
    elif "confirmed_by_corretor" in changes:
        confirmed = bool(changes["confirmed_by_corretor"])
    elif corretor_id != current.corretor_id:
        confirmed = False
    else:
        confirmed = current.confirmed_by_corretor

    if corretor_id != current.corretor_id:
        changes["corretor_id"] = corretor_id
    changes["confirmed_by_corretor"] = confirmed
    changes["status"] = derive_status(gestor_id, corretor_id, confirmed)
    return changes


def apply_changes(current: Plantao, changes: dict[str, Any]) -> Plantao:
    """Merge computed fields into a new record (repositories share this)."""
    return replace(current, **changes)


def derive_status(
    gestor_id: Optional[str], corretor_id: Optional[str], confirmed_by_corretor: bool
) -> PlantaoStatus:
    """The only status consistent with the given assignment fields."""
    if not gestor_id:
        return PlantaoStatus.AGUARDANDO_GESTOR
    if not corretor_id:
        return PlantaoStatus.AGUARDANDO_CORRETOR
    if not confirmed_by_corretor:
        return PlantaoStatus.AGUARDANDO_CONFIRMACAO
    return PlantaoStatus.CONFIRMADO
