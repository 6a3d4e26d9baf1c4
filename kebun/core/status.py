"""Kebun Status Store — per-day care records and the merge-on-write update."""

import logging
import re
from dataclasses import dataclass, field
from datetime import date as date_type
from typing import Any

from kebun.core.errors import ValidationError

logger = logging.getLogger("kebun.status")

STATUS_FIELDS = ("watered", "fertilized", "harvested")

_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


@dataclass(frozen=True)
class DayStatus:
    """Care record for one plant on one calendar date."""

    watered: bool = False
    fertilized: bool = False
    harvested: bool = False
    # Keys found in persisted data that are not care fields. Kept for round-trip only.
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_json(cls, raw: Any) -> "DayStatus":
        """Read a persisted day record. Anything but a JSON `true` reads as False."""
        if not isinstance(raw, dict):
            return cls()
        values = {name: raw.get(name) is True for name in STATUS_FIELDS}
        extra = {k: v for k, v in raw.items() if k not in STATUS_FIELDS}
        return cls(**values, extra=extra)

    def to_json(self) -> dict[str, Any]:
        data = dict(self.extra)
        data.update({name: getattr(self, name) for name in STATUS_FIELDS})
        return data

    def with_field(self, name: str, value: bool) -> "DayStatus":
        values = {n: getattr(self, n) for n in STATUS_FIELDS}
        values[name] = value
        return DayStatus(**values, extra=dict(self.extra))


class StatusStore:
    """Mapping of ISO date (``YYYY-MM-DD``) to :class:`DayStatus`.

    Dates are absent until first written. Instances are treated as immutable:
    :func:`apply_update` returns a new store.
    """

    def __init__(self, days: dict[str, DayStatus] | None = None):
        self._days: dict[str, DayStatus] = dict(days or {})

    @classmethod
    def from_json(cls, raw: Any) -> "StatusStore":
        """Build a store from the persisted JSON blob.

        A blob that is not an object (legacy rows, null, lists) reads as empty.
        """
        if not isinstance(raw, dict):
            if raw not in (None, {}):
                logger.warning(f"Ignoring malformed status blob of type {type(raw).__name__}")
            return cls()
        return cls({str(day): DayStatus.from_json(value) for day, value in raw.items()})

    def to_json(self) -> dict[str, dict[str, Any]]:
        return {day: status.to_json() for day, status in self._days.items()}

    def get(self, day: str) -> DayStatus | None:
        return self._days.get(day)

    def status_for(self, day: str) -> DayStatus:
        """Return the record for ``day``, or an all-false record when absent."""
        return self._days.get(day) or DayStatus()

    def dates(self) -> list[str]:
        return sorted(self._days)

    def __contains__(self, day: object) -> bool:
        return day in self._days

    def __len__(self) -> int:
        return len(self._days)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StatusStore):
            return NotImplemented
        return self._days == other._days

    def __repr__(self) -> str:
        return f"<StatusStore dates={self.dates()!r}>"


def validate_date(value: Any) -> str:
    """Check that ``value`` is a ``YYYY-MM-DD`` calendar date and return it."""
    if not isinstance(value, str) or not value:
        raise ValidationError("Date is required")
    if not _DATE_RE.fullmatch(value):
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")
    try:
        date_type.fromisoformat(value)
    except ValueError:
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD") from None
    return value


def validate_field(value: Any) -> str:
    if value not in STATUS_FIELDS:
        raise ValidationError(
            f"Unknown status field {value!r}. Expected one of: {', '.join(STATUS_FIELDS)}"
        )
    return value


def apply_update(store: StatusStore, day: str, field_name: str, value: bool) -> StatusStore:
    """Set one care field for one date and return the resulting store.

    A date seen for the first time starts from an all-false record. Every other
    date and every other field of ``day`` is carried over unchanged. The input
    store is left untouched, so a rejected update has no effect.

    There is no concurrency control here: callers read the whole plant, merge,
    and write it back, so two concurrent updates to the same plant race and
    the later write wins.
    """
    validate_date(day)
    validate_field(field_name)
    if not isinstance(value, bool):
        raise ValidationError(f"Status value must be a boolean, got {type(value).__name__}")

    days = dict(store._days)
    days[day] = days.get(day, DayStatus()).with_field(field_name, value)
    return StatusStore(days)
