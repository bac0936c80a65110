"""Booking price calculation: nightly rate times number of nights."""

from __future__ import annotations

from datetime import date, datetime

from resort_booking.utils.datetime import days_between


class InvalidStayError(ValueError):
    """Raised when check-out is not strictly after check-in."""


def count_nights(check_in: date | datetime, check_out: date | datetime) -> int:
    """
    Number of nights charged for a stay.

    Partial days round up, and a valid stay is never charged fewer than one
    night.

    Args:
        check_in: Check-in date or datetime
        check_out: Check-out date or datetime

    Returns:
        int: Nights to charge (>= 1)

    Raises:
        InvalidStayError: If check_out <= check_in
    """
    days = days_between(check_in, check_out)
    if days <= 0:
        raise InvalidStayError("Check-out date must be after check-in date")
    return max(1, days)


def calculate_total_price(
    price: float, check_in: date | datetime, check_out: date | datetime
) -> float:
    """
    Total price of a stay.

    Example:
        >>> calculate_total_price(250, date(2024, 1, 15), date(2024, 1, 18))
        750
    """
    return price * count_nights(check_in, check_out)
