"""Expiry date rules and shelf-life parsing."""

import re
from dataclasses import dataclass
from datetime import date, timedelta

EXPIRED = "expired"
WARNING = "warning"
SAFE = "safe"

DEFAULT_WARNING_DAYS = 3
DEFAULT_PERIOD_DAYS = 7
DAYS_PER_WEEK = 7

_DAY_PATTERN = re.compile(r"(\d+)[～~-]?(\d+)?\s*(day|d)", re.IGNORECASE)
_WEEK_PATTERN = re.compile(r"(\d+)[～~-]?(\d+)?\s*(week|w)", re.IGNORECASE)


@dataclass(frozen=True)
class ExpiryStatus:
    """Remaining days with their display classification."""

    remaining_days: int
    severity: str
    text: str


def remaining_days(expiry_date: date, today: date) -> int:
    """Return whole calendar days from today until the expiry date."""
    return (expiry_date - today).days


def classify(days: int, warning_days: int = DEFAULT_WARNING_DAYS) -> str:
    """Map remaining days to a severity."""
    if days < 0:
        return EXPIRED
    if days <= warning_days:
        return WARNING
    return SAFE


def status_text(days: int) -> str:
    """Return the human readable remaining-days label."""
    if days < 0:
        return f"Expired {abs(days)}d ago"
    if days == 0:
        return "Expires Today"
    if days == 1:
        return "Expires Tomorrow"
    return f"{days} days left"


def expiry_status(
    expiry_date: date, today: date, warning_days: int = DEFAULT_WARNING_DAYS
) -> ExpiryStatus:
    """Compute the full expiry status of a date relative to today."""
    days = remaining_days(expiry_date, today)
    return ExpiryStatus(
        remaining_days=days,
        severity=classify(days, warning_days),
        text=status_text(days),
    )


def calculate_expiry_date(period_days: int, today: date) -> date | None:
    """Return the expiry date for a storage period starting today."""
    if period_days <= 0:
        return None
    return today + timedelta(days=period_days)


def parse_period_days(period_text: str) -> int:
    """Approximate a day count from free-text shelf life.

    Ranges such as ``10～14 days`` resolve to the upper bound. Weeks are
    converted to days, and anything unrecognised falls back to a week.
    """
    day_match = _DAY_PATTERN.search(period_text)
    if day_match:
        return int(day_match.group(2) or day_match.group(1))
    week_match = _WEEK_PATTERN.search(period_text)
    if week_match:
        return int(week_match.group(2) or week_match.group(1)) * DAYS_PER_WEEK
    return DEFAULT_PERIOD_DAYS
