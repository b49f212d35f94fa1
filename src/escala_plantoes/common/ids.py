from __future__ import annotations

import uuid


def new_id() -> str:
    """Time-based unique id for new records."""
    return uuid.uuid1().hex
