"""Persistence interfaces for inventory state."""

from typing import Protocol

from food_expiry.domain.inventory import FoodEntry, ReferenceEntry

FOODS_KEY = "foods"
REFERENCES_KEY = "references"


class KeyValueStore(Protocol):
    """String-keyed store holding serialized values."""

    def get(self, key: str) -> str | None:
        """Return the stored value for a key, if present."""

    def set(self, key: str, value: str) -> None:
        """Replace the stored value for a key."""


class InventoryRepository(Protocol):
    """Persistence interface for the food and reference collections."""

    def load_foods(self) -> list[FoodEntry] | None:
        """Return stored food entries, or None when nothing was stored yet."""

    def save_foods(self, foods: list[FoodEntry]) -> None:
        """Overwrite the stored food entries."""

    def load_references(self) -> list[ReferenceEntry] | None:
        """Return stored reference entries, or None when nothing was stored yet."""

    def save_references(self, references: list[ReferenceEntry]) -> None:
        """Overwrite the stored reference entries."""
