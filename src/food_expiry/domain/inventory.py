"""Domain models for the food inventory."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class FoodEntry:
    """Represents a tracked perishable item."""

    id: str
    name: str
    location: str
    period: int
    expiry_date: date
    email: str
    added_date: date
    reminder_sent: bool = False


@dataclass(frozen=True)
class ReferenceEntry:
    """Represents a shelf-life guideline used to autofill food entries."""

    id: str
    name: str
    period: str
    location: str


@dataclass(frozen=True)
class AutofillSuggestion:
    """Values suggested for the add-food form from a reference entry."""

    location: str
    period_days: int
    expiry_date: date | None


@dataclass(frozen=True)
class FoodRow:
    """Display row for a food entry."""

    food: FoodEntry
    remaining_days: int
    severity: str
    status_text: str


@dataclass(frozen=True)
class FoodNameOption:
    """Option of the food-name select."""

    value: str
    label: str
    selected: bool = False


def default_references() -> list[ReferenceEntry]:
    """Return the built-in storage guide."""
    rows = [
        ("Carrots", "2 weeks", "Crisper Drawer"),
        ("Cucumber", "5 days", "Crisper Drawer"),
        ("Tomatoes", "5 days", "Pantry"),
        ("Cabbage", "2 weeks", "Crisper Drawer"),
        ("Bell Peppers", "10 days", "Crisper Drawer"),
        ("Onions", "3 weeks", "Pantry"),
        ("Potatoes", "3 weeks", "Pantry"),
        ("Milk", "7 days", "Fridge"),
        ("Bread", "5 days", "Pantry"),
        ("Curd/Yogurt", "10 days", "Fridge"),
        ("Eggs", "3 weeks", "Fridge"),
        ("Chicken (Raw)", "2 days", "Fridge"),
        ("Meat (Raw)", "3 days", "Fridge"),
        ("Cooked Leftovers", "4 days", "Fridge"),
    ]
    return [
        ReferenceEntry(id=str(index), name=name, period=period, location=location)
        for index, (name, period, location) in enumerate(rows, start=1)
    ]
