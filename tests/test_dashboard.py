from types import SimpleNamespace

from kebun.core.dashboard import DashboardSummary, compute

DAY = "2025-07-15"


def _plant(status):
    return SimpleNamespace(status=status)


def test_empty_collection_is_all_zero():
    assert compute([], DAY).to_dict() == {
        "total_plants": 0,
        "watered_today": 0,
        "fertilized_today": 0,
        "harvested_today": 0,
        "need_watering": 0,
        "need_fertilizing": 0,
        "ready_to_harvest": 0,
    }


def test_plant_without_entries_counts_nothing():
    summary = compute([_plant({})], DAY)
    assert summary == DashboardSummary(total_plants=1, need_watering=1, need_fertilizing=1)


def test_one_ready_plant_and_one_untouched():
    plants = [
        _plant({DAY: {"watered": True, "fertilized": True, "harvested": False}}),
        _plant({"2025-07-14": {"watered": True, "fertilized": True, "harvested": True}}),
    ]
    assert compute(plants, DAY) == DashboardSummary(
        total_plants=2,
        watered_today=1,
        fertilized_today=1,
        harvested_today=0,
        need_watering=1,
        need_fertilizing=1,
        ready_to_harvest=1,
    )


def test_harvested_plant_is_not_ready():
    plants = [_plant({DAY: {"watered": True, "fertilized": True, "harvested": True}})]
    summary = compute(plants, DAY)
    assert summary.harvested_today == 1
    assert summary.ready_to_harvest == 0


def test_malformed_status_degrades_to_false():
    plants = [
        _plant(None),
        _plant(["not", "a", "mapping"]),
        _plant({DAY: "watered"}),
        _plant({DAY: {"watered": "true", "fertilized": 1}}),
        SimpleNamespace(),
    ]
    summary = compute(plants, DAY)
    assert summary.total_plants == 5
    assert summary.watered_today == 0
    assert summary.fertilized_today == 0
    assert summary.need_watering == 5


def test_accepts_plain_dicts_and_does_not_mutate():
    status = {DAY: {"watered": True}}
    plants = [{"status": status}]
    summary = compute(plants, DAY)
    assert summary.watered_today == 1
    assert summary.ready_to_harvest == 0
    assert status == {DAY: {"watered": True}}
