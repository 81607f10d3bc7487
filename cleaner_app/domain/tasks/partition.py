"""Split task batches into dated tasks and skipped records"""

import logging
from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from ..calendar.dates import normalize
from .schemas import SkippedTaskInfo, Task, task_date_value

logger = logging.getLogger(__name__)


class SkipReason(str, Enum):
    MISSING_DATE = "missing_date"
    INVALID_DATE = "invalid_date"


@dataclass(frozen=True)
class SkippedTask:
    task: Task
    reason: SkipReason


@dataclass
class TaskPartition:
    """Tasks paired with their normalized day, plus the records left out"""

    dated: list[tuple[date, Task]] = field(default_factory=list)
    skipped: list[SkippedTask] = field(default_factory=list)

    def tasks_on(self, day: date) -> list[Task]:
        return [task for task_day, task in self.dated if task_day == day]

    def skipped_info(self) -> list[SkippedTaskInfo]:
        return [SkippedTaskInfo(taskId=s.task.id, reason=s.reason.value) for s in self.skipped]


def partition_tasks(tasks: list[Task]) -> TaskPartition:
    """
    Resolve the canonical date of every task.

    Tasks without a date, or with one that cannot be parsed, go to `skipped`
    with a reason instead of raising; input order is preserved on both sides.
    """
    partition = TaskPartition()

    for task in tasks:
        raw = task_date_value(task)
        if not raw:
            partition.skipped.append(SkippedTask(task, SkipReason.MISSING_DATE))
            continue

        day = normalize(raw)
        if day is None:
            partition.skipped.append(SkippedTask(task, SkipReason.INVALID_DATE))
            continue

        partition.dated.append((day, task))

    if partition.skipped:
        logger.debug(
            f"Skipped {len(partition.skipped)} of {len(tasks)} tasks without a usable date"
        )
    return partition
