"""Identifier and clock helpers.

Generated order ids and event ids are UUID4 strings.  Event timestamps
are timezone-aware UTC datetimes; naive datetimes never leave here.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone


def new_id() -> str:
    """Fresh UUID4 string, used when the caller supplies no id."""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
