"""
In-memory task cache keyed by date
Avoids refetching a day's tasks when the user switches between calendar views
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from .domain.calendar.dates import format_date_key
from .domain.tasks.partition import SkippedTask, partition_tasks
from .domain.tasks.schemas import Task

logger = logging.getLogger(__name__)

Fetcher = Callable[[], Awaitable[list[Task]]]


def merge_into_flat_list(existing: list[Task], new_tasks: list[Task]) -> list[Task]:
    """Append tasks whose ID is not already present; first seen wins, order kept"""
    seen = {task.id for task in existing}
    merged = list(existing)
    for task in new_tasks:
        if task.id not in seen:
            seen.add(task.id)
            merged.append(task)
    return merged


class TaskCache:
    """
    Date-keyed task cache with one writer per key.

    A populated key only changes through `put` (which appends unseen tasks),
    `replace` (explicit refresh) or `clear`. Concurrent misses for the same
    key share one in-flight fetch, and a fetch that started before a `clear`
    never writes. Selection generations let callers drop responses for a
    date the user has already moved away from. Runs on a single event loop
    without locks.
    """

    def __init__(self):
        self._entries: dict[str, list[Task]] = {}
        self._inflight: dict[str, asyncio.Future] = {}
        self._interest: dict[str, list[Optional[int]]] = {}
        self._epoch = 0
        self._generation = 0
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Optional[list[Task]]:
        """Get the tasks cached for a date key; None means a fetch is required"""
        tasks = self._entries.get(key)
        if tasks is None:
            self.misses += 1
            logger.debug(f"❌ Cache MISS: {key}")
            return None
        self.hits += 1
        logger.debug(f"✅ Cache HIT: {key}")
        return list(tasks)

    def put(self, key: str, tasks: list[Task]) -> None:
        """Populate a key, or append unseen tasks to an existing entry"""
        existing = self._entries.get(key)
        if existing is None:
            self._entries[key] = list(tasks)
            logger.debug(f"✅ Cache SET: {key} ({len(tasks)} tasks)")
            return

        merged = merge_into_flat_list(existing, tasks)
        self._entries[key] = merged
        logger.debug(f"✅ Cache MERGE: {key} (+{len(merged) - len(existing)} tasks)")

    def replace(self, key: str, tasks: list[Task]) -> None:
        """Overwrite a key with freshly fetched tasks"""
        self._entries[key] = list(tasks)
        logger.debug(f"🔄 Cache REPLACE: {key} ({len(tasks)} tasks)")

    def ingest(self, tasks: list[Task]) -> list[SkippedTask]:
        """Split a fetched batch by task date and put each slice; returns the undated tasks"""
        partition = partition_tasks(tasks)
        by_key: dict[str, list[Task]] = {}
        for day, task in partition.dated:
            by_key.setdefault(format_date_key(day), []).append(task)

        for key, day_tasks in by_key.items():
            self.put(key, day_tasks)

        if partition.skipped:
            logger.warning(f"⚠️ {len(partition.skipped)} fetched tasks have no usable date")
        return partition.skipped

    def get_all(self) -> list[Task]:
        """All cached tasks, ordered by date key then insertion order"""
        all_tasks: list[Task] = []
        for key in sorted(self._entries):
            all_tasks.extend(self._entries[key])
        return all_tasks

    def keys(self) -> list[str]:
        return sorted(self._entries)

    def clear(self) -> None:
        """Drop every entry; fetches still in flight will not write back"""
        self._entries.clear()
        self._inflight.clear()
        self._interest.clear()
        self._epoch += 1
        self._generation += 1
        logger.info("🧹 Task cache cleared")

    @property
    def epoch(self) -> int:
        return self._epoch

    def next_generation(self) -> int:
        """Start a new selection; tokens handed out earlier stop being current"""
        self._generation += 1
        return self._generation

    def is_current(self, token: int) -> bool:
        return token == self._generation

    async def get_or_fetch(self, key: str, fetcher: Fetcher, token: Optional[int] = None) -> list[Task]:
        """
        Read-through access for a date key.

        On a miss one fetch task runs `fetcher` and is the only writer for
        the key; every caller awaits it through `asyncio.shield`, so a
        cancelled caller only stops its own wait. Errors reach every waiter
        and nothing is cached. A result that arrives after `clear` is
        returned to its callers but not stored. Callers that pass a
        selection `token` only get the result stored while that token is
        current; untracked callers always want it stored.
        """
        cached = self.get(key)
        if cached is not None:
            return cached

        fetch = self._inflight.get(key)
        if fetch is None:
            fetch = asyncio.ensure_future(self._run_fetch(key, fetcher, self._epoch))
            self._inflight[key] = fetch
            self._interest[key] = []
        else:
            logger.debug(f"⏳ Joining in-flight fetch: {key}")
        self._interest[key].append(token)

        return list(await asyncio.shield(fetch))

    async def _run_fetch(self, key: str, fetcher: Fetcher, started_epoch: int) -> list[Task]:
        try:
            tasks = await fetcher()
        finally:
            tokens = self._release(key, asyncio.current_task())

        if self._epoch != started_epoch:
            logger.info(f"🗑️ Discarding fetch result for {key}: cache was cleared")
        elif not any(token is None or self.is_current(token) for token in tokens):
            logger.info(f"🗑️ Discarding fetch result for {key}: selection superseded")
        else:
            self.put(key, tasks)
        return tasks

    def _release(self, key: str, fetch: Optional[asyncio.Future]) -> list[Optional[int]]:
        """Forget the in-flight fetch for a key; returns the tokens of its callers"""
        if self._inflight.get(key) is not fetch:
            return []
        del self._inflight[key]
        return self._interest.pop(key, [])

    def stats(self) -> dict:
        return {
            "keys": len(self._entries),
            "tasks": sum(len(tasks) for tasks in self._entries.values()),
            "hits": self.hits,
            "misses": self.misses,
            "inflight": len(self._inflight),
        }
