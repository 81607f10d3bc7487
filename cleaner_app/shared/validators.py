"""Shared validation utilities"""

import re
from datetime import date, datetime
from typing import Optional

DATE_KEY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
MONTH_KEY_PATTERN = re.compile(r"^\d{4}-\d{2}$")


def validate_date_key(value: str) -> str:
    """
    Validate a YYYY-MM-DD date key.

    Raises:
        ValueError: If the key is malformed or not a real calendar date
    """
    if not value or not DATE_KEY_PATTERN.match(value):
        raise ValueError("Date must be in YYYY-MM-DD format")
    try:
        date.fromisoformat(value)
    except ValueError:
        raise ValueError(f"Invalid calendar date: {value}")
    return value


def parse_date_key(value: Optional[str]) -> Optional[date]:
    """Parse an optional YYYY-MM-DD query value"""
    if not value:
        return None
    return date.fromisoformat(validate_date_key(value))


def parse_iso_datetime(value: str) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp as sent by the backend.

    Accepts a trailing "Z" and bare dates. Returns None instead of raising
    when the value cannot be parsed.
    """
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    if text.endswith("Z") or text.endswith("z"):
        text = text[:-1] + "+00:00"

    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None
