"""Task card colors and calendar header text"""

import calendar
import logging
from datetime import date, timedelta
from typing import Optional

from ...shared.validators import parse_iso_datetime
from ..tasks.schemas import Task
from .dates import DateLike, day_name, local_today, normalize

logger = logging.getLogger(__name__)

TASK_COLORS = {
    "STANDARD": {
        "border": "#8E44AD",
        "background": "rgba(142, 68, 173, 0.05)",
        "name": "Standard Cleaning",
    },
    "DEEP": {
        "border": "#00BFA6",
        "background": "rgba(0, 191, 166, 0.05)",
        "name": "Deep Cleaning",
    },
    "MAINTENANCE": {
        "border": "#FF6B35",
        "background": "rgba(255, 107, 53, 0.05)",
        "name": "Maintenance",
    },
}

# Tasks longer than this many hours are shown as deep cleans
DEEP_CLEAN_MIN_HOURS = 4


def calculate_task_duration(task: Task) -> float:
    """Hours between check-in and check-out, 0 when either end is unknown"""
    extra = task.model_extra or {}
    start_raw = task.checkInDate or extra.get("startTime")
    end_raw = task.checkOutDate or extra.get("endTime")
    if not start_raw or not end_raw:
        return 0

    start = parse_iso_datetime(start_raw)
    end = parse_iso_datetime(end_raw)
    if start is None or end is None:
        return 0

    try:
        return (end - start).total_seconds() / 3600
    except TypeError:
        # naive and aware timestamps cannot be subtracted
        logger.warning(f"⚠️ Mixed timezone timestamps on task {task.id}")
        return 0


def get_task_color(task: Task) -> dict:
    description = (task.description or "").lower()

    if "maintenance" in description or "repair" in description:
        return TASK_COLORS["MAINTENANCE"]

    if (
        calculate_task_duration(task) > DEEP_CLEAN_MIN_HOURS
        or "deep" in description
        or "thorough" in description
    ):
        return TASK_COLORS["DEEP"]

    return TASK_COLORS["STANDARD"]


def generate_date_header_text(
    value: Optional[DateLike],
    include_context: bool = True,
    today: Optional[date] = None,
) -> str:
    """Header like "Today - Sat, Aug 2"; the year is added outside the current year"""
    if value is None:
        return "All Tasks"

    target = normalize(value)
    if target is None:
        return "All Tasks"
    today = today or local_today()

    formatted = f"{day_name(target)}, {calendar.month_abbr[target.month]} {target.day}"
    if target.year != today.year:
        formatted = f"{formatted}, {target.year}"

    context = ""
    if include_context:
        if target == today:
            context = "Today - "
        elif target == today + timedelta(days=1):
            context = "Tomorrow - "

    return f"{context}{formatted}"
