"""Inventory repository serializing collections into a key-value store."""

import json
from dataclasses import dataclass
from datetime import date

from food_expiry.domain.inventory import FoodEntry, ReferenceEntry
from food_expiry.services.storage import (
    FOODS_KEY,
    REFERENCES_KEY,
    InventoryRepository,
    KeyValueStore,
)


@dataclass
class KeyValueInventoryRepository(InventoryRepository):
    """Stores each collection as a JSON array under its own key."""

    store: KeyValueStore

    def load_foods(self) -> list[FoodEntry] | None:
        """Return stored food entries, or None when the key is absent."""
        raw = self.store.get(FOODS_KEY)
        if raw is None:
            return None
        return [_parse_food(row) for row in json.loads(raw)]

    def save_foods(self, foods: list[FoodEntry]) -> None:
        """Overwrite the stored food entries."""
        self.store.set(FOODS_KEY, json.dumps([_serialize_food(f) for f in foods]))

    def load_references(self) -> list[ReferenceEntry] | None:
        """Return stored reference entries, or None when the key is absent."""
        raw = self.store.get(REFERENCES_KEY)
        if raw is None:
            return None
        return [_parse_reference(row) for row in json.loads(raw)]

    def save_references(self, references: list[ReferenceEntry]) -> None:
        """Overwrite the stored reference entries."""
        self.store.set(
            REFERENCES_KEY,
            json.dumps([_serialize_reference(ref) for ref in references]),
        )


def _serialize_food(food: FoodEntry) -> dict[str, object]:
    return {
        "id": food.id,
        "name": food.name,
        "location": food.location,
        "period": food.period,
        "expiryDate": food.expiry_date.isoformat(),
        "email": food.email,
        "addedDate": food.added_date.isoformat(),
        "reminderSent": food.reminder_sent,
    }


def _parse_food(row: dict[str, object]) -> FoodEntry:
    """Parse a stored food row into a domain model."""
    return FoodEntry(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        location=str(row.get("location", "")),
        period=int(row.get("period", 0)),
        expiry_date=date.fromisoformat(str(row["expiryDate"])),
        email=str(row.get("email", "")),
        added_date=date.fromisoformat(str(row["addedDate"])),
        reminder_sent=bool(row.get("reminderSent", False)),
    )


def _serialize_reference(reference: ReferenceEntry) -> dict[str, object]:
    return {
        "id": reference.id,
        "name": reference.name,
        "period": reference.period,
        "location": reference.location,
    }


def _parse_reference(row: dict[str, object]) -> ReferenceEntry:
    return ReferenceEntry(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        period=str(row.get("period", "")),
        location=str(row.get("location", "")),
    )
