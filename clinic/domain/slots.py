"""Bookable time slots."""
from __future__ import annotations

TIME_SLOTS: tuple[str, ...] = (
    "10:00 AM",
    "11:00 AM",
    "12:00 PM",
    "02:00 PM",
    "03:00 PM",
    "04:00 PM",
)


def is_valid_slot(value: str | None) -> bool:
    """Return True when value is one of the fixed bookable slots."""
    if not value:
        return False
    return value in TIME_SLOTS
