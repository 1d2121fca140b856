"""Base model for telemetry records.

Every canonical record inherits from :class:`MonitorBaseModel` which
provides:

* ``alias_generator=to_camel`` so the camelCase keys used by the
  telemetry API map automatically to snake_case fields.
* A ``model_validator(mode="before")`` that strips sentinel values
  (``""``, ``"--"``, NaN) so the next alias in a field's priority
  list, or the ``None`` default, is used instead.
* A ``raw`` dict that captures the original payload.
* The shared ``timestamp_evento`` field used for ordering.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from pymonitoreo.ingestion.normalize import SENTINELS, parse_timestamp, safe_bool, safe_float, safe_str

EventTimestamp = Annotated[datetime | None, BeforeValidator(parse_timestamp)]
"""ISO-8601 timestamp; unparseable values become ``None``."""

SafeFloat = Annotated[float | None, BeforeValidator(safe_float)]
SafeBool = Annotated[bool | None, BeforeValidator(safe_bool)]
SafeStr = Annotated[str | None, BeforeValidator(safe_str)]

# Records without a timestamp sort as the oldest ones.
_OLDEST = datetime.min.replace(tzinfo=UTC)


class MonitorBaseModel(BaseModel):
    """Base for canonical telemetry records."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    timestamp_evento: EventTimestamp = Field(
        default=None,
        validation_alias=AliasChoices("timestampEvento", "timestamp"),
    )
    raw: dict[str, Any] = Field(default_factory=dict)
    """Original API record."""

    @model_validator(mode="before")
    @classmethod
    def _clean_values(cls, values: Any) -> Any:
        """Strip sentinel values and stash the raw payload."""
        if not isinstance(values, dict):
            return values

        cleaned: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if isinstance(value, str) and value.strip() in SENTINELS:
                continue
            if isinstance(value, float) and math.isnan(value):
                continue
            cleaned[key] = value

        # Only auto-stash raw when not explicitly provided.
        if "raw" not in values:
            cleaned["raw"] = dict(values)
        return cleaned

    @property
    def sort_key(self) -> datetime:
        return self.timestamp_evento if self.timestamp_evento is not None else _OLDEST
