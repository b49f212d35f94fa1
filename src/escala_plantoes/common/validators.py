from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Any, message: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(message)
    return str(value).strip()


def require_min_length(value: Any, field_name: str, min_len: int) -> str:
    # JSON numbers and other non-strings count as too short
    if not isinstance(value, str) or len(value) < min_len:
        raise ValidationError(f"{field_name} deve ter no mínimo {min_len} caracteres")
    return value


def require_max_length(value: str, field_name: str, max_len: int) -> str:
    if len(value) > max_len:
        raise ValidationError(f"{field_name} deve ter no máximo {max_len} caracteres")
    return value


def normalize_email(value: Any) -> str:
    return str(value if value is not None else "").strip().lower()


def blank_to_none(value) -> Optional[str]:
    """Reference ids arrive as '', None or a string; empty means "no reference"."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None
