"""Inventory management for food and reference entries."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import date
from uuid import uuid4

from food_expiry.domain.expiry import (
    DEFAULT_WARNING_DAYS,
    calculate_expiry_date,
    expiry_status,
    parse_period_days,
)
from food_expiry.domain.inventory import (
    AutofillSuggestion,
    FoodEntry,
    FoodNameOption,
    FoodRow,
    ReferenceEntry,
    default_references,
)
from food_expiry.services.storage import InventoryRepository

logger = logging.getLogger(__name__)

MISSING_FOOD_FIELDS = "Please fill in all fields, including your email"
MISSING_REFERENCE_FIELDS = "Please fill in all reference fields"


class InventoryValidationError(ValueError):
    """Raised when an add request is missing or has malformed fields."""


def _new_id() -> str:
    return uuid4().hex


@dataclass
class InventoryService:
    """Application service holding the food and reference collections."""

    repository: InventoryRepository
    clock: Callable[[], date] = date.today
    id_factory: Callable[[], str] = _new_id
    warning_days: int = DEFAULT_WARNING_DAYS
    on_food_added: Callable[[FoodEntry], None] | None = None
    foods: list[FoodEntry] = field(init=False)
    references: list[ReferenceEntry] = field(init=False)

    def __post_init__(self) -> None:
        stored_foods = self.repository.load_foods()
        if stored_foods is None:
            self.foods = []
            self.repository.save_foods(self.foods)
        else:
            self.foods = stored_foods

        stored_references = self.repository.load_references()
        if stored_references is None:
            self.references = default_references()
            self.repository.save_references(self.references)
        else:
            self.references = stored_references

    def add_food(  # noqa: PLR0913
        self,
        name: str,
        location: str,
        period: str,
        expiry_date: str,
        email: str,
    ) -> FoodEntry:
        """Validate and register a food entry."""
        values = [
            (value or "").strip()
            for value in (name, location, period, expiry_date, email)
        ]
        if not all(values):
            raise InventoryValidationError(MISSING_FOOD_FIELDS)
        name, location, period, expiry_date, email = values
        food = FoodEntry(
            id=self.id_factory(),
            name=name,
            location=location,
            period=_parse_period(period),
            expiry_date=_parse_date(expiry_date),
            email=email,
            added_date=self.clock(),
        )
        self.foods.append(food)
        self.repository.save_foods(self.foods)
        logger.info("Food added", extra={"food_id": food.id})
        if self.on_food_added is not None:
            self.on_food_added(food)
        return food

    def delete_food(self, food_id: str, confirmed: bool) -> bool:
        """Remove a food entry once the deletion was confirmed."""
        if not confirmed:
            return False
        remaining = [food for food in self.foods if food.id != food_id]
        removed = len(remaining) != len(self.foods)
        self.foods = remaining
        self.repository.save_foods(self.foods)
        return removed

    def mark_reminders_sent(self, food_ids: set[str]) -> None:
        """Flag entries whose reminder went out and persist all foods."""
        self.foods = [
            replace(food, reminder_sent=True) if food.id in food_ids else food
            for food in self.foods
        ]
        self.repository.save_foods(self.foods)

    def add_reference(self, name: str, location: str, period: str) -> ReferenceEntry:
        """Validate and register a reference entry."""
        name, location, period = (
            (value or "").strip() for value in (name, location, period)
        )
        if not name or not location or not period:
            raise InventoryValidationError(MISSING_REFERENCE_FIELDS)
        reference = ReferenceEntry(
            id=self.id_factory(), name=name, period=period, location=location
        )
        self.references.append(reference)
        self.repository.save_references(self.references)
        return reference

    def delete_reference(self, reference_id: str, confirmed: bool) -> bool:
        """Remove a reference entry once the deletion was confirmed."""
        if not confirmed:
            return False
        remaining = [ref for ref in self.references if ref.id != reference_id]
        removed = len(remaining) != len(self.references)
        self.references = remaining
        self.repository.save_references(self.references)
        return removed

    def get_food(self, food_id: str) -> FoodEntry | None:
        """Return a food entry by id, if present."""
        return next((food for food in self.foods if food.id == food_id), None)

    def find_reference(self, name: str) -> ReferenceEntry | None:
        """Return the first reference with the given name."""
        return next((ref for ref in self.references if ref.name == name), None)

    def autofill(
        self, name: str, today: date | None = None
    ) -> AutofillSuggestion | None:
        """Suggest location, period and expiry date for a food name."""
        if not name:
            return None
        reference = self.find_reference(name)
        if reference is None:
            return None
        period_days = parse_period_days(reference.period)
        return AutofillSuggestion(
            location=reference.location,
            period_days=period_days,
            expiry_date=calculate_expiry_date(period_days, today or self.clock()),
        )

    def food_rows(self, today: date | None = None) -> list[FoodRow]:
        """Return display rows sorted by expiry date."""
        resolved_today = today or self.clock()
        rows = []
        for food in sorted(self.foods, key=lambda item: item.expiry_date):
            status = expiry_status(food.expiry_date, resolved_today, self.warning_days)
            rows.append(
                FoodRow(
                    food=food,
                    remaining_days=status.remaining_days,
                    severity=status.severity,
                    status_text=status.text,
                )
            )
        return rows

    def food_name_options(self, selected: str | None = None) -> list[FoodNameOption]:
        """Return food-name options derived from the references."""
        names = [ref.name for ref in self.references]
        keep = selected if selected and selected in names else None
        options = [
            FoodNameOption(value="", label="Select Food", selected=keep is None)
        ]
        for name in names:
            is_selected = name == keep and not any(opt.selected for opt in options)
            options.append(FoodNameOption(value=name, label=name, selected=is_selected))
        return options


def _parse_period(raw: str) -> int:
    try:
        period = int(raw)
    except ValueError as exc:
        raise InventoryValidationError(
            "Storage period must be a whole number of days"
        ) from exc
    if period <= 0:
        raise InventoryValidationError("Storage period must be a positive number")
    return period


def _parse_date(raw: str) -> date:
    try:
        return date.fromisoformat(raw)
    except ValueError as exc:
        raise InventoryValidationError(
            "Invalid expiry date format; use YYYY-MM-DD"
        ) from exc
