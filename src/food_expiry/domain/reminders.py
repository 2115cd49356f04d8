"""Domain models for expiry reminders."""

from dataclasses import dataclass
from datetime import date

from food_expiry.domain.inventory import FoodEntry


@dataclass(frozen=True)
class ReminderMessage:
    """Outbound reminder for a food entry close to expiry."""

    item_name: str
    expiry_date: date
    to_email: str

    @classmethod
    def for_food(cls, food: FoodEntry) -> "ReminderMessage":
        """Build the reminder for a food entry."""
        return cls(
            item_name=food.name,
            expiry_date=food.expiry_date,
            to_email=food.email,
        )

    def template_params(self) -> dict[str, str]:
        """Return the parameters passed to the email template."""
        return {
            "item_name": self.item_name,
            "expiry_date": self.expiry_date.isoformat(),
            "to_email": self.to_email,
        }


def needs_reminder(food: FoodEntry, days: int, threshold_days: int) -> bool:
    """Return true when a reminder should be dispatched for the entry."""
    return 0 <= days <= threshold_days and not food.reminder_sent
