"""Field validators shared by request schemas."""

import re

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")


def check_email(value: str) -> str:
    """
    Validate an email address with the same loose pattern the booking form uses
    and normalize it to lowercase, the form it is stored and matched in.

    Raises:
        ValueError: If the value is blank or does not look like an email
    """
    value = value.strip()
    if not value:
        raise ValueError("Email is required")
    if not EMAIL_PATTERN.search(value):
        raise ValueError("Email is invalid")
    return value.lower()


def check_required(value: str, message: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError(message)
    return value
