"""Task service - fetch-through cache for a cleaner's accepted tasks"""

import logging
from datetime import date
from typing import Any, Optional

from ...cache import TaskCache
from ...services.task_api import TaskApiService
from ..calendar.dates import format_date_key, format_month_key, normalize
from ..timeline.grouper import group_tasks_by_date
from ..timeline.schemas import DateGroup
from .partition import partition_tasks
from .schemas import Task, TaskStatus

logger = logging.getLogger(__name__)


class TaskService:
    """
    Holds one cleaner session's task state.

    `current_tasks` is what the timeline and calendar show; the cache keeps
    every day fetched so far so switching views does not refetch.
    """

    def __init__(self, api: TaskApiService, cache: Optional[TaskCache] = None):
        self.api = api
        self.cache = cache or TaskCache()
        self.current_tasks: list[Task] = []
        self.selected_date: Optional[date] = None
        self._loaded_months: set[str] = set()

    async def fetch_tasks_for_date(
        self, day: date, status: Optional[str] = None, token: Optional[int] = None
    ) -> list[Task]:
        """
        Tasks for one day; a status filter is a narrower query and bypasses the cache.

        With a selection `token` the result is only cached while that selection
        is still current.
        """
        key = format_date_key(normalize(day))

        if status:
            logger.info(f"Fetching {key} tasks filtered by status {status}")
            return await self.api.list_accepted_tasks({"date": key, "status": status})

        return await self.cache.get_or_fetch(
            key, lambda: self.api.list_accepted_tasks({"date": key}), token=token
        )

    async def fetch_tasks_for_month(self, day: date) -> list[Task]:
        month_key = format_month_key(normalize(day))
        logger.info(f"Fetching tasks for entire month: {month_key}")
        epoch = self.cache.epoch

        tasks = await self.api.list_accepted_tasks({"month": month_key})
        self._store_batch(tasks, epoch)
        if self.cache.epoch == epoch:
            self._loaded_months.add(month_key)
        return tasks

    async def ensure_month_loaded(self, day: date) -> None:
        """Fetch a month once per cache lifetime"""
        if format_month_key(normalize(day)) not in self._loaded_months:
            await self.fetch_tasks_for_month(day)

    async def fetch_all_tasks(self) -> list[Task]:
        """Every accepted task, without a date filter"""
        epoch = self.cache.epoch

        tasks = await self.api.list_accepted_tasks({})
        self._store_batch(tasks, epoch)
        if self.cache.epoch == epoch:
            self.current_tasks = tasks
        return tasks

    async def fetch_pending_tasks(
        self, day: Optional[date] = None, status: Optional[str] = None
    ) -> list[Task]:
        body: dict[str, Any] = {}
        if day:
            body["date"] = format_date_key(normalize(day))
        if status:
            body["status"] = status
        return await self.api.list_pending_tasks(body)

    def _store_batch(self, tasks: list[Task], epoch: int) -> None:
        if self.cache.epoch != epoch:
            logger.info("🗑️ Cache was cleared during fetch; batch not stored")
            return
        self.cache.ingest(tasks)

    async def select_date(self, day: date) -> Optional[list[Task]]:
        """
        Make `day` the selected date and load its tasks.

        Returns None when another selection (or a refresh) happened while the
        fetch was in flight; the late result is then not applied.
        """
        day = normalize(day)
        token = self.cache.next_generation()
        self.selected_date = day

        tasks = await self.fetch_tasks_for_date(day, token=token)
        if not self.cache.is_current(token):
            logger.info(f"Ignoring superseded response for {format_date_key(day)}")
            return None

        self.current_tasks = tasks
        return tasks

    def get_tasks_for_date(self, day: date) -> list[Task]:
        """Current tasks on `day`, excluding ones still pending acceptance"""
        tasks_on_day = partition_tasks(self.current_tasks).tasks_on(normalize(day))
        return [task for task in tasks_on_day if task.status != TaskStatus.PENDING.value]

    def get_all_tasks_grouped_by_date(self) -> list[DateGroup]:
        groups = group_tasks_by_date(self.current_tasks)
        logger.debug(f"Found {len(groups)} days with tasks")
        return sorted(groups, key=lambda group: group.date)

    def get_all_cached_tasks(self) -> list[Task]:
        return self.cache.get_all()

    def refresh(self) -> None:
        """Forget everything fetched so far; the next read goes to the backend"""
        self.cache.clear()
        self.current_tasks = []
        self._loaded_months.clear()

    def logout(self) -> None:
        self.refresh()
        self.selected_date = None

    async def get_task_details(self, task_id: str) -> dict[str, Any]:
        return await self.api.get_task_details(task_id)

    async def update_task(self, task_id: str, updates: dict[str, Any]) -> dict[str, Any]:
        return await self.api.update_task(task_id, updates)
