"""
Day-level date helpers

All calendar and timeline comparisons happen on local calendar days. A task
timestamp is reduced to a `date` with `normalize`; anything that cannot be
reduced comes back as None and is left for the caller to skip.
"""

from datetime import date, datetime, timedelta
from typing import Optional, Union

from ...shared.validators import parse_iso_datetime

DateLike = Union[date, datetime, str]

DAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def local_today() -> date:
    return datetime.now().date()


def normalize(value: Optional[DateLike]) -> Optional[date]:
    """Truncate a date, datetime or ISO-8601 string to its local calendar day"""
    if value is None:
        return None

    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        return value
    else:
        moment = parse_iso_datetime(value)
        if moment is None:
            return None

    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return moment.date()


def is_same_day(a: Optional[DateLike], b: Optional[DateLike]) -> bool:
    day_a = normalize(a)
    day_b = normalize(b)
    if day_a is None or day_b is None:
        return False
    return day_a == day_b


def is_today(value: Optional[DateLike], today: Optional[date] = None) -> bool:
    return is_same_day(value, today or local_today())


def is_tomorrow(value: Optional[DateLike], today: Optional[date] = None) -> bool:
    return is_same_day(value, (today or local_today()) + timedelta(days=1))


def is_upcoming(value: Optional[DateLike], today: Optional[date] = None) -> bool:
    day = normalize(value)
    if day is None:
        return False
    return day >= (today or local_today())


def format_date_key(value: date) -> str:
    """YYYY-MM-DD key used by the task cache and the timeline groups"""
    return value.strftime("%Y-%m-%d")


def format_month_key(value: date) -> str:
    return value.strftime("%Y-%m")


def weekday_index(value: date) -> int:
    """Weekday with Sunday as 0, the column order of the month grid"""
    return (value.weekday() + 1) % 7


def day_name(value: date) -> str:
    return DAY_NAMES[weekday_index(value)]
