"""Kebun Dashboard — per-day summary counts across a user's plants."""

from dataclasses import asdict, dataclass
from typing import Any, Iterable

from kebun.core.status import StatusStore


@dataclass(frozen=True)
class DashboardSummary:
    total_plants: int = 0
    watered_today: int = 0
    fertilized_today: int = 0
    harvested_today: int = 0
    need_watering: int = 0
    need_fertilizing: int = 0
    ready_to_harvest: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


def _status_of(plant: Any) -> Any:
    if isinstance(plant, dict):
        return plant.get("status")
    return getattr(plant, "status", None)


def compute(plants: Iterable[Any], day: str) -> DashboardSummary:
    """Derive dashboard counts for ``day``.

    Reads each plant's ``status`` (plant objects or plain dicts) without
    mutating it. Plants with no record for ``day``, or with a malformed status
    blob, count as not watered, not fertilized and not harvested.

    There is no ``need_harvesting`` count.
    """
    total = watered = fertilized = harvested = ready = 0
    for plant in plants:
        total += 1
        status = StatusStore.from_json(_status_of(plant)).status_for(day)
        watered += status.watered
        fertilized += status.fertilized
        harvested += status.harvested
        if status.watered and status.fertilized and not status.harvested:
            ready += 1

    return DashboardSummary(
        total_plants=total,
        watered_today=watered,
        fertilized_today=fertilized,
        harvested_today=harvested,
        need_watering=total - watered,
        need_fertilizing=total - fertilized,
        ready_to_harvest=ready,
    )
