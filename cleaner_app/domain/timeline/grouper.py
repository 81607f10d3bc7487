"""
Timeline grouping

Turns a flat task list into date groups for the timeline: group by the
canonical task date, filter by view mode, then sort today first, tomorrow
second and everything else chronologically.
"""

import calendar
from datetime import date, timedelta
from typing import Optional, Union

from ..calendar.dates import format_date_key, is_upcoming, local_today, normalize
from ..tasks.partition import TaskPartition, partition_tasks
from ..tasks.schemas import Task
from .schemas import DateGroup, ViewMode


def group_tasks_by_date(
    tasks: Union[list[Task], TaskPartition],
    today: Optional[date] = None,
) -> list[DateGroup]:
    """One group per distinct task day, in order of first appearance"""
    partition = tasks if isinstance(tasks, TaskPartition) else partition_tasks(tasks or [])
    today = today or local_today()
    tomorrow = today + timedelta(days=1)

    groups: dict[str, DateGroup] = {}
    for day, task in partition.dated:
        key = format_date_key(day)
        if key not in groups:
            groups[key] = DateGroup(
                date=day,
                dateKey=key,
                tasks=[],
                isToday=day == today,
                isTomorrow=day == tomorrow,
            )
        groups[key].tasks.append(task)

    return list(groups.values())


def filter_by_view_mode(
    groups: list[DateGroup],
    view_mode: ViewMode,
    filter_date: Optional[date] = None,
    today: Optional[date] = None,
) -> list[DateGroup]:
    today = today or local_today()

    if view_mode == ViewMode.ALL_UPCOMING:
        return [group for group in groups if is_upcoming(group.date, today)]

    if view_mode == ViewMode.DATE_FILTER:
        target = normalize(filter_date)
        if target is None:
            return []
        return [group for group in groups if group.date == target]

    if view_mode == ViewMode.TODAY_ONLY:
        return [group for group in groups if group.date == today]

    return list(groups)


def _sort_key(group: DateGroup) -> tuple[int, date]:
    if group.isToday:
        return (0, group.date)
    if group.isTomorrow:
        return (1, group.date)
    return (2, group.date)


def sort_groups(groups: list[DateGroup]) -> list[DateGroup]:
    """Stable sort: today, tomorrow, then ascending date. Returns a new list."""
    return sorted(groups, key=_sort_key)


def build_timeline(
    tasks: Union[list[Task], TaskPartition],
    view_mode: ViewMode,
    selected_date: Optional[date] = None,
    today: Optional[date] = None,
) -> list[DateGroup]:
    groups = group_tasks_by_date(tasks, today)
    filtered = filter_by_view_mode(groups, view_mode, selected_date, today)
    # ordering never carries over from a previous pass
    return sort_groups(filtered)


def determine_view_mode(selected_date: Optional[date], today: Optional[date] = None) -> ViewMode:
    if selected_date is None:
        return ViewMode.ALL_UPCOMING
    if normalize(selected_date) == (today or local_today()):
        return ViewMode.TODAY_ONLY
    return ViewMode.DATE_FILTER


def get_view_mode_text(view_mode: ViewMode, selected_date: Optional[date] = None) -> str:
    if view_mode == ViewMode.ALL_UPCOMING:
        return "All Upcoming Tasks"
    if view_mode == ViewMode.TODAY_ONLY:
        return "Today's Tasks"
    if view_mode == ViewMode.DATE_FILTER:
        if selected_date:
            return f"Tasks for {calendar.month_abbr[selected_date.month]} {selected_date.day}"
        return "Filtered Tasks"
    return "Tasks"


def get_empty_state_message(view_mode: ViewMode, selected_date: Optional[date] = None) -> str:
    if view_mode == ViewMode.ALL_UPCOMING:
        return "No upcoming tasks scheduled"
    if view_mode == ViewMode.TODAY_ONLY:
        return "No tasks scheduled for today"
    if view_mode == ViewMode.DATE_FILTER:
        if selected_date:
            return f"No tasks scheduled for {calendar.month_name[selected_date.month]} {selected_date.day}"
        return "No tasks found for selected date"
    return "No tasks available"
