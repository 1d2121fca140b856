"""Normalization helpers.

Centralizes defensive parsing, placeholder handling and the group-aware
field adapter used by the loader.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pymonitoreo._constants import Group
    from pymonitoreo.models import Record

# Sentinel strings upstream sources use for "not available".
SENTINELS = frozenset({"", "--", "NaN", "nan"})

_TRUE_STRINGS = frozenset({"true", "1", "yes", "si", "sí"})
_FALSE_STRINGS = frozenset({"false", "0", "no"})


def safe_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str) and value.strip() in SENTINELS:
        return None
    try:
        result = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if math.isnan(result):
        return None
    return result


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text.strip() not in SENTINELS else None


def safe_bool(value: Any) -> bool | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in _TRUE_STRINGS:
            return True
        if normalized in _FALSE_STRINGS:
            return False
    return None


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC.

    Unparseable values yield ``None`` so a single bad record cannot break
    ordering for the rest of the history.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if text in SENTINELS:
            return None
        if text.endswith(("Z", "z")):
            text = f"{text[:-1]}+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed


def display_string(value: Any) -> str:
    """String form of a scalar as the dashboard controls see it.

    Booleans render lowercase (``"true"``/``"false"``), integral floats
    drop their fractional part and a missing value is ``""``.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def is_meaningful(value: Any) -> bool:
    """Return True if the value counts as present."""
    if value is None:
        return False
    if isinstance(value, str) and value.strip() in SENTINELS:
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    return True


def first_present(raw: dict[str, Any], keys: tuple[str, ...]) -> tuple[str, Any] | None:
    """Return ``(key, value)`` for the first key of *keys* present in *raw*."""
    for key in keys:
        if key in raw and is_meaningful(raw[key]):
            return key, raw[key]
    return None


def parse_record(group: Group, raw: dict[str, Any]) -> Record:
    """Parse a raw payload into the canonical record model for *group*."""
    # Import lazily to avoid coupling the helpers above back into models.
    from pymonitoreo.models import RECORD_MODELS

    return RECORD_MODELS[group].model_validate(raw)


def normalize(group: Group, raw: dict[str, Any]) -> dict[str, Any]:
    """Map a raw payload onto the group's canonical attribute names.

    Concepts missing from *raw* are omitted rather than defaulted, so
    callers can tell "missing" apart from zero.
    """
    return parse_record(group, raw).model_dump(exclude={"raw"}, exclude_none=True)
