"""Tests for the inventory service."""

import json
from dataclasses import replace
from datetime import date

import pytest

from food_expiry.adapters.key_value_inventory_repository import (
    KeyValueInventoryRepository,
)
from food_expiry.domain.inventory import default_references
from food_expiry.services.inventory import (
    MISSING_FOOD_FIELDS,
    MISSING_REFERENCE_FIELDS,
    InventoryService,
    InventoryValidationError,
)
from tests.conftest import FixedClock, InMemoryKeyValueStore, sequential_ids


def _add(service: InventoryService, name: str = "Milk", expiry: str = "2024-01-10"):
    return service.add_food(
        name=name,
        location="Fridge",
        period="7",
        expiry_date=expiry,
        email="me@example.com",
    )


def test_first_run_writes_defaults(store: InMemoryKeyValueStore) -> None:
    service = InventoryService(KeyValueInventoryRepository(store))

    assert service.foods == []
    assert service.references == default_references()
    assert json.loads(store.values["foods"]) == []
    assert len(json.loads(store.values["references"])) == 14


def test_existing_state_is_loaded_verbatim(store: InMemoryKeyValueStore) -> None:
    store.values["references"] = json.dumps(
        [{"id": "r1", "name": "Kimchi", "period": "3 weeks", "location": "Fridge"}]
    )
    store.values["foods"] = json.dumps([])

    service = InventoryService(KeyValueInventoryRepository(store))

    assert [ref.name for ref in service.references] == ["Kimchi"]
    assert store.writes == []


def test_add_food_persists_entry(
    inventory_service: InventoryService, store: InMemoryKeyValueStore
) -> None:
    food = _add(inventory_service)

    assert food.id == "id-1"
    assert food.period == 7
    assert food.expiry_date == date(2024, 1, 10)
    assert food.added_date == date(2024, 1, 1)
    assert food.reminder_sent is False
    stored = json.loads(store.values["foods"])
    assert stored[0]["name"] == "Milk"
    assert stored[0]["reminderSent"] is False


@pytest.mark.parametrize(
    "missing", ["name", "location", "period", "expiry_date", "email"]
)
def test_add_food_with_missing_field_leaves_store_unchanged(
    inventory_service: InventoryService,
    store: InMemoryKeyValueStore,
    missing: str,
) -> None:
    before = store.values["foods"]
    fields = {
        "name": "Milk",
        "location": "Fridge",
        "period": "7",
        "expiry_date": "2024-01-10",
        "email": "me@example.com",
    }
    fields[missing] = "  "

    with pytest.raises(InventoryValidationError, match=MISSING_FOOD_FIELDS):
        inventory_service.add_food(**fields)

    assert inventory_service.foods == []
    assert store.values["foods"] == before


@pytest.mark.parametrize(
    ("period", "expiry"), [("abc", "2024-01-10"), ("0", "2024-01-10"), ("7", "soon")]
)
def test_add_food_rejects_malformed_values(
    inventory_service: InventoryService, period: str, expiry: str
) -> None:
    with pytest.raises(InventoryValidationError):
        inventory_service.add_food(
            name="Milk",
            location="Fridge",
            period=period,
            expiry_date=expiry,
            email="me@example.com",
        )

    assert inventory_service.foods == []


def test_add_food_runs_hook(inventory_service: InventoryService) -> None:
    seen = []
    inventory_service.on_food_added = seen.append

    food = _add(inventory_service)

    assert seen == [food]


def test_delete_food_requires_confirmation(
    inventory_service: InventoryService,
) -> None:
    food = _add(inventory_service)

    assert inventory_service.delete_food(food.id, confirmed=False) is False
    assert inventory_service.foods == [food]


def test_delete_food_removes_only_that_entry(
    inventory_service: InventoryService, store: InMemoryKeyValueStore
) -> None:
    first = _add(inventory_service, name="Milk")
    second = _add(inventory_service, name="Eggs")
    third = _add(inventory_service, name="Bread")
    inventory_service.mark_reminders_sent({third.id})

    assert inventory_service.delete_food(second.id, confirmed=True) is True

    assert inventory_service.foods == [first, replace(third, reminder_sent=True)]
    reloaded = InventoryService(KeyValueInventoryRepository(store))
    assert reloaded.foods == inventory_service.foods


def test_delete_unknown_food_is_noop(inventory_service: InventoryService) -> None:
    food = _add(inventory_service)

    assert inventory_service.delete_food("missing", confirmed=True) is False
    assert inventory_service.foods == [food]


def test_add_reference_validates_fields(
    inventory_service: InventoryService,
) -> None:
    with pytest.raises(InventoryValidationError, match=MISSING_REFERENCE_FIELDS):
        inventory_service.add_reference(name="Kale", location="", period="5 days")

    assert len(inventory_service.references) == 14


def test_add_and_delete_reference(inventory_service: InventoryService) -> None:
    reference = inventory_service.add_reference(
        name=" Kale ", location="Fridge", period="5 days"
    )

    assert reference.name == "Kale"
    assert inventory_service.references[-1] == reference
    assert inventory_service.delete_reference(reference.id, confirmed=False) is False
    assert inventory_service.delete_reference(reference.id, confirmed=True) is True
    assert reference not in inventory_service.references


def test_autofill_uses_first_matching_reference(
    inventory_service: InventoryService,
) -> None:
    inventory_service.add_reference(name="Milk", location="Door", period="3 days")

    suggestion = inventory_service.autofill("Milk")

    assert suggestion is not None
    assert suggestion.location == "Fridge"
    assert suggestion.period_days == 7
    assert suggestion.expiry_date == date(2024, 1, 8)


def test_autofill_converts_weeks(inventory_service: InventoryService) -> None:
    suggestion = inventory_service.autofill("Carrots", today=date(2024, 2, 1))

    assert suggestion is not None
    assert suggestion.period_days == 14
    assert suggestion.expiry_date == date(2024, 2, 15)


def test_autofill_unknown_name(inventory_service: InventoryService) -> None:
    assert inventory_service.autofill("Durian") is None
    assert inventory_service.autofill("") is None


def test_food_rows_sorted_by_expiry(inventory_service: InventoryService) -> None:
    _add(inventory_service, name="Bread", expiry="2024-01-20")
    _add(inventory_service, name="Milk", expiry="2023-12-30")
    _add(inventory_service, name="Eggs", expiry="2024-01-03")

    rows = inventory_service.food_rows()

    assert [row.food.name for row in rows] == ["Milk", "Eggs", "Bread"]
    assert [row.severity for row in rows] == ["expired", "warning", "safe"]
    assert rows[0].status_text == "Expired 2d ago"
    assert [food.name for food in inventory_service.foods] == [
        "Bread",
        "Milk",
        "Eggs",
    ]


def test_food_name_options_keep_existing_selection(
    inventory_service: InventoryService,
) -> None:
    options = inventory_service.food_name_options("Eggs")

    assert options[0].value == ""
    assert options[0].label == "Select Food"
    assert [opt.value for opt in options if opt.selected] == ["Eggs"]
    assert len(options) == 15


def test_food_name_options_drop_missing_selection(
    inventory_service: InventoryService,
) -> None:
    options = inventory_service.food_name_options("Durian")

    assert [opt.value for opt in options if opt.selected] == [""]


def test_ids_come_from_factory(store: InMemoryKeyValueStore) -> None:
    service = InventoryService(
        KeyValueInventoryRepository(store),
        clock=FixedClock(),
        id_factory=sequential_ids(),
    )

    reference = service.add_reference(name="Kale", location="Fridge", period="5d")

    assert reference.id == "id-1"


def test_food_name_options_select_first_duplicate_only(
    inventory_service: InventoryService,
) -> None:
    inventory_service.add_reference(name="Eggs", location="Pantry", period="1 week")

    options = inventory_service.food_name_options("Eggs")

    eggs = [opt for opt in options if opt.value == "Eggs"]
    assert [opt.selected for opt in eggs] == [True, False]
    assert sum(opt.selected for opt in options) == 1
