"""
Calendar day aggregation

Buckets a flat task list into per-day summaries for the week strip and the
month grid. Each bucket counts the tasks whose canonical date falls on that
day and carries the dot configuration for it.
"""

import calendar
from datetime import date, timedelta
from typing import Optional, Union

from ..tasks.partition import TaskPartition, partition_tasks
from ..tasks.schemas import Task
from .dates import day_name, local_today, normalize, weekday_index
from .indicators import classify
from .schemas import DayBucket, EmptyDay, MonthView, WeekView

WEEK_RADIUS = 3


def _partition(tasks: Union[list[Task], TaskPartition]) -> TaskPartition:
    if isinstance(tasks, TaskPartition):
        return tasks
    return partition_tasks(tasks or [])


def build_day(
    day: date,
    tasks: Union[list[Task], TaskPartition],
    today: Optional[date] = None,
) -> DayBucket:
    """Summary for a single calendar day"""
    day = normalize(day)
    today = today or local_today()
    day_tasks = _partition(tasks).tasks_on(day)
    count = len(day_tasks)
    is_today = day == today

    return DayBucket(
        date=day.day,
        fullDate=day,
        dayName=day_name(day),
        isToday=is_today,
        isTomorrow=day == today + timedelta(days=1),
        hasTask=count > 0,
        tasksCount=count,
        dotConfig=classify(count, is_today),
        tasks=day_tasks,
    )


def aggregate_week(
    center: date,
    tasks: Union[list[Task], TaskPartition],
    today: Optional[date] = None,
) -> list[DayBucket]:
    """Seven buckets, center - 3 days through center + 3 days, ascending"""
    center = normalize(center)
    partition = _partition(tasks)

    return [
        build_day(center + timedelta(days=offset), partition, today)
        for offset in range(-WEEK_RADIUS, WEEK_RADIUS + 1)
    ]


def week_view(center: date, tasks: list[Task], today: Optional[date] = None) -> WeekView:
    partition = _partition(tasks)
    return WeekView(
        centerDate=normalize(center),
        days=aggregate_week(center, partition, today),
        skipped=partition.skipped_info(),
    )


def aggregate_month(
    month_date: date,
    tasks: Union[list[Task], TaskPartition],
    today: Optional[date] = None,
) -> MonthView:
    """
    Month grid for the month containing `month_date`.

    `days` starts with one EmptyDay per weekday column before the 1st
    (Sunday first), followed by one bucket per day of the month.
    """
    month_date = normalize(month_date)
    year, month = month_date.year, month_date.month
    partition = _partition(tasks)

    first_of_month = date(year, month, 1)
    days_in_month = calendar.monthrange(year, month)[1]

    days: list[Union[DayBucket, EmptyDay]] = [
        EmptyDay() for _ in range(weekday_index(first_of_month))
    ]
    for day_number in range(1, days_in_month + 1):
        days.append(build_day(date(year, month, day_number), partition, today))

    return MonthView(
        year=year,
        month=month,
        monthName=calendar.month_name[month],
        days=days,
        skipped=partition.skipped_info(),
    )
