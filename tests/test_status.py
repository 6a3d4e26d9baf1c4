import pytest

from kebun.core.errors import ValidationError
from kebun.core.status import STATUS_FIELDS, DayStatus, StatusStore, apply_update

DAY = "2025-07-15"


def test_first_touch_defaults_other_fields():
    store = apply_update(StatusStore(), DAY, "fertilized", True)
    assert store.to_json() == {
        DAY: {"watered": False, "fertilized": True, "harvested": False},
    }


def test_first_touch_with_false_still_creates_entry():
    store = apply_update(StatusStore(), DAY, "watered", False)
    assert DAY in store
    assert store.get(DAY) == DayStatus()


@pytest.mark.parametrize("field", STATUS_FIELDS)
def test_update_changes_only_one_cell(field):
    before = StatusStore.from_json({
        DAY: {"watered": True, "fertilized": False, "harvested": True},
        "2025-07-14": {"watered": True, "fertilized": True, "harvested": False},
    })
    current = getattr(before.get(DAY), field)

    after = apply_update(before, DAY, field, not current)

    assert getattr(after.get(DAY), field) is (not current)
    for other in STATUS_FIELDS:
        if other != field:
            assert getattr(after.get(DAY), other) == getattr(before.get(DAY), other)
    assert after.get("2025-07-14") == before.get("2025-07-14")


def test_update_is_idempotent():
    store = StatusStore.from_json({DAY: {"watered": True, "fertilized": False, "harvested": False}})
    once = apply_update(store, DAY, "harvested", True)
    assert apply_update(once, DAY, "harvested", True) == once


def test_input_store_is_not_mutated():
    store = StatusStore()
    apply_update(store, DAY, "watered", True)
    assert len(store) == 0


def test_unknown_field_is_rejected():
    store = StatusStore.from_json({DAY: {"watered": True, "fertilized": False, "harvested": False}})
    with pytest.raises(ValidationError):
        apply_update(store, DAY, "pruned", True)
    assert store.to_json() == {DAY: {"watered": True, "fertilized": False, "harvested": False}}


@pytest.mark.parametrize("day", [
    "", "15-07-2025", "2025-13-01", "2025-02-30", "2025-7-15", None,
    "1752537600", "2025-07-15T00:00:00", "\uff12\uff10\uff12\uff15-07-15",
])
def test_malformed_date_is_rejected(day):
    with pytest.raises(ValidationError):
        apply_update(StatusStore(), day, "watered", True)


def test_non_boolean_value_is_rejected():
    with pytest.raises(ValidationError):
        apply_update(StatusStore(), DAY, "watered", "yes")


@pytest.mark.parametrize("blob", [None, [], "oops", 42])
def test_malformed_blob_reads_as_empty(blob):
    store = StatusStore.from_json(blob)
    assert len(store) == 0
    merged = apply_update(store, DAY, "watered", True)
    assert merged.to_json() == {DAY: {"watered": True, "fertilized": False, "harvested": False}}


def test_non_object_day_entry_restarts_from_defaults():
    store = StatusStore.from_json({DAY: "watered"})
    merged = apply_update(store, DAY, "fertilized", True)
    assert merged.to_json()[DAY] == {"watered": False, "fertilized": True, "harvested": False}


def test_only_json_true_counts_as_set():
    status = DayStatus.from_json({"watered": "true", "fertilized": 1, "harvested": True})
    assert status == DayStatus(watered=False, fertilized=False, harvested=True)


def test_unknown_keys_in_day_record_survive_a_merge():
    store = StatusStore.from_json({DAY: {"watered": False, "fertilized": False, "harvested": False, "pruned": True}})
    merged = apply_update(store, DAY, "watered", True)
    assert merged.to_json()[DAY] == {
        "pruned": True,
        "watered": True,
        "fertilized": False,
        "harvested": False,
    }
