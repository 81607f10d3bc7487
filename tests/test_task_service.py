import asyncio
import unittest
from datetime import date

from cleaner_app.domain.tasks.service import TaskService
from tests.factories import ids, make_task


class FakeTaskApi:
    """Stands in for TaskApiService; answers from a dict keyed by request body"""

    def __init__(self, responses=None):
        self.responses = responses or {}
        self.calls: list[dict] = []
        self.gates: dict[str, asyncio.Event] = {}

    def _key(self, body: dict) -> str:
        return body.get("date") or body.get("month") or "all"

    async def list_accepted_tasks(self, body=None):
        body = body or {}
        self.calls.append(dict(body))
        key = self._key(body)
        if key in self.gates:
            await self.gates[key].wait()
        return list(self.responses.get(key, []))

    async def list_pending_tasks(self, body=None):
        self.calls.append({"pending": True, **(body or {})})
        return [make_task("p1", "2025-01-15T10:00:00", status="PENDING")]

    async def get_task_details(self, task_id):
        return {"_id": task_id}

    async def update_task(self, task_id, updates):
        return {"success": True, "taskId": task_id, **updates}


class TestTaskService(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.api = FakeTaskApi(
            {
                "2025-01-15": [
                    make_task("a", "2025-01-15T09:00:00"),
                    make_task("b", "2025-01-15T11:00:00", status="PENDING"),
                ],
                "2025-01-16": [make_task("c", "2025-01-16T09:00:00")],
                "2025-01": [
                    make_task("a", "2025-01-15T09:00:00"),
                    make_task("m", "2025-01-20T09:00:00"),
                    make_task("undated"),
                ],
                "all": [make_task("x", "2025-02-01T09:00:00"), make_task("a", "2025-01-15T09:00:00")],
            }
        )
        self.service = TaskService(self.api)

    async def test_date_fetch_is_cached(self) -> None:
        first = await self.service.fetch_tasks_for_date(date(2025, 1, 15))
        second = await self.service.fetch_tasks_for_date(date(2025, 1, 15))

        self.assertEqual(ids(first), ["a", "b"])
        self.assertEqual(ids(second), ["a", "b"])
        self.assertEqual(self.api.calls, [{"date": "2025-01-15"}])

    async def test_status_filter_bypasses_cache(self) -> None:
        await self.service.fetch_tasks_for_date(date(2025, 1, 15), status="COMPLETED")

        self.assertEqual(self.api.calls, [{"date": "2025-01-15", "status": "COMPLETED"}])
        self.assertIsNone(self.service.cache.get("2025-01-15"))

    async def test_month_fetch_ingests_into_cache(self) -> None:
        await self.service.fetch_tasks_for_month(date(2025, 1, 3))

        self.assertEqual(self.api.calls, [{"month": "2025-01"}])
        self.assertEqual(ids(self.service.cache.get("2025-01-20")), ["m"])
        self.assertEqual(ids(self.service.get_all_cached_tasks()), ["a", "m"])

    async def test_ensure_month_loaded_fetches_once(self) -> None:
        await self.service.ensure_month_loaded(date(2025, 1, 3))
        await self.service.ensure_month_loaded(date(2025, 1, 28))
        self.assertEqual(len(self.api.calls), 1)

        self.service.refresh()
        await self.service.ensure_month_loaded(date(2025, 1, 3))
        self.assertEqual(len(self.api.calls), 2)

    async def test_fetch_all_sets_current_tasks(self) -> None:
        tasks = await self.service.fetch_all_tasks()

        self.assertEqual(ids(tasks), ["x", "a"])
        self.assertEqual(ids(self.service.current_tasks), ["x", "a"])
        self.assertEqual(ids(self.service.get_all_cached_tasks()), ["a", "x"])

    async def test_pending_tasks_are_not_cached(self) -> None:
        tasks = await self.service.fetch_pending_tasks(date(2025, 1, 15), status="PENDING")

        self.assertEqual(ids(tasks), ["p1"])
        self.assertEqual(self.api.calls, [{"pending": True, "date": "2025-01-15", "status": "PENDING"}])
        self.assertEqual(self.service.get_all_cached_tasks(), [])

    async def test_select_date_applies_tasks(self) -> None:
        tasks = await self.service.select_date(date(2025, 1, 15))

        self.assertEqual(ids(tasks), ["a", "b"])
        self.assertEqual(self.service.selected_date, date(2025, 1, 15))
        self.assertEqual(ids(self.service.get_tasks_for_date(date(2025, 1, 15))), ["a"])

    async def test_superseded_selection_is_discarded(self) -> None:
        self.api.gates["2025-01-15"] = asyncio.Event()

        slow = asyncio.create_task(self.service.select_date(date(2025, 1, 15)))
        await asyncio.sleep(0)
        fast = await self.service.select_date(date(2025, 1, 16))
        self.api.gates["2025-01-15"].set()

        self.assertIsNone(await slow)
        self.assertEqual(ids(fast), ["c"])
        self.assertEqual(ids(self.service.current_tasks), ["c"])
        self.assertEqual(self.service.selected_date, date(2025, 1, 16))
        self.assertIsNone(self.service.cache.get("2025-01-15"))
        self.assertEqual(ids(self.service.cache.get("2025-01-16")), ["c"])

    async def test_refresh_during_fetch_drops_late_result(self) -> None:
        self.api.gates["2025-01-15"] = asyncio.Event()

        pending = asyncio.create_task(self.service.select_date(date(2025, 1, 15)))
        await asyncio.sleep(0)
        self.service.refresh()
        self.api.gates["2025-01-15"].set()

        self.assertIsNone(await pending)
        self.assertEqual(self.service.current_tasks, [])
        self.assertEqual(self.service.get_all_cached_tasks(), [])

    async def test_grouped_by_date_is_ascending(self) -> None:
        await self.service.fetch_all_tasks()
        groups = self.service.get_all_tasks_grouped_by_date()
        self.assertEqual([group.dateKey for group in groups], ["2025-01-15", "2025-02-01"])

    async def test_logout_clears_state(self) -> None:
        await self.service.select_date(date(2025, 1, 15))
        self.service.logout()

        self.assertIsNone(self.service.selected_date)
        self.assertEqual(self.service.current_tasks, [])
        self.assertEqual(self.service.get_all_cached_tasks(), [])

    async def test_details_and_update_delegate_to_api(self) -> None:
        self.assertEqual(await self.service.get_task_details("a"), {"_id": "a"})
        result = await self.service.update_task("a", {"status": "COMPLETED"})
        self.assertEqual(result["status"], "COMPLETED")


if __name__ == "__main__":
    unittest.main()
