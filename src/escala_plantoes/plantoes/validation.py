from __future__ import annotations

import re
from typing import Any, Mapping

from ..common.datetime_utils import parse_iso_date
from ..core.constants import MAX_LOCATION_LENGTH, MAX_PLANTAO_YEAR, MAX_TITLE_LENGTH, MIN_PLANTAO_YEAR

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def validate_plantao_data(data: Mapping[str, Any]) -> list[str]:
    """Check text lengths and date/time fields of a plantão payload (camelCase keys).

    Returns human-readable errors; an empty list means valid. Missing or
    empty fields are not checked.
    """
    errors: list[str] = []

    for key, label, limit in (("title", "Título", MAX_TITLE_LENGTH), ("location", "Local", MAX_LOCATION_LENGTH)):
        if len(str(data.get(key) or "").strip()) > limit:
            errors.append(f"{label} deve ter no máximo {limit} caracteres")

    value = data.get("date")
    if value:
        value = str(value)
        if not _DATE_RE.match(value):
            errors.append("Formato de data inválido. Use YYYY-MM-DD")
        else:
            try:
                parsed = parse_iso_date(value)
            except ValueError:
                errors.append("Data inválida")
            else:
                if not MIN_PLANTAO_YEAR <= parsed.year <= MAX_PLANTAO_YEAR:
                    errors.append(f"Ano deve estar entre {MIN_PLANTAO_YEAR} e {MAX_PLANTAO_YEAR}")

    start = data.get("startTime")
    end = data.get("endTime")
    bad_format = [v for v in (start, end) if v and not _TIME_RE.match(str(v))]
    if bad_format:
        errors.append("Formato de horário inválido. Use HH:MM")
    elif start and end and str(start) >= str(end):
        # HH:MM compares correctly as plain strings
        errors.append("Hora de fim deve ser maior que hora de início")

    return errors
