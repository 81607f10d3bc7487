import json
import unittest

import httpx

from cleaner_app.exceptions import SessionExpiredError, TaskApiError
from cleaner_app.services.task_api import TaskApiService
from tests.factories import task_record


class RecordingBackend:
    """httpx transport handler that records requests and replies from a canned response"""

    def __init__(self, status_code=200, payload=None, content=None, headers=None):
        self.status_code = status_code
        self.payload = payload
        self.content = content
        self.headers = headers
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content, headers=self.headers)
        return httpx.Response(self.status_code, json=self.payload)

    def service(self, access_token="token-123") -> TaskApiService:
        return TaskApiService(
            access_token=access_token,
            base_url="https://backend.test",
            transport=httpx.MockTransport(self),
        )


class TestTaskApiService(unittest.IsolatedAsyncioTestCase):
    async def test_list_accepted_tasks(self) -> None:
        backend = RecordingBackend(
            payload={"data": [task_record("a", "2025-01-15T10:00:00"), task_record("b")]}
        )

        tasks = await backend.service().list_accepted_tasks({"date": "2025-01-15"})

        self.assertEqual([task.id for task in tasks], ["a", "b"])
        request = backend.requests[0]
        self.assertEqual(request.method, "POST")
        self.assertEqual(str(request.url), "https://backend.test/api/listAcceptedCleaningTasks")
        self.assertEqual(request.headers["user-access-token"], "token-123")
        self.assertEqual(json.loads(request.content), {"date": "2025-01-15"})

    async def test_no_token_header_without_token(self) -> None:
        backend = RecordingBackend(payload={"data": []})
        await backend.service(access_token=None).list_pending_tasks()

        self.assertNotIn("user-access-token", backend.requests[0].headers)
        self.assertTrue(str(backend.requests[0].url).endswith("/api/listPendingCleaningTasks"))

    async def test_malformed_records_are_dropped(self) -> None:
        backend = RecordingBackend(payload={"data": [{"status": "PENDING"}, task_record("ok"), "junk"]})
        tasks = await backend.service().list_accepted_tasks()
        self.assertEqual([task.id for task in tasks], ["ok"])

    async def test_missing_data_field_yields_empty_list(self) -> None:
        backend = RecordingBackend(payload={"success": True})
        self.assertEqual(await backend.service().list_accepted_tasks(), [])

    async def test_unauthorized_raises_session_expired(self) -> None:
        backend = RecordingBackend(status_code=401, payload={"message": "Unauthorized"})
        with self.assertRaises(SessionExpiredError):
            await backend.service().list_accepted_tasks()

    async def test_expired_message_raises_session_expired(self) -> None:
        backend = RecordingBackend(status_code=403, payload={"message": "Token expired."})
        with self.assertRaises(SessionExpiredError) as ctx:
            await backend.service().list_accepted_tasks()
        self.assertEqual(ctx.exception.status_code, 401)

    async def test_server_error_raises_task_api_error(self) -> None:
        backend = RecordingBackend(status_code=500, payload={"error": {"message": "boom"}})
        with self.assertRaises(TaskApiError) as ctx:
            await backend.service().list_accepted_tasks()

        self.assertNotIsInstance(ctx.exception, SessionExpiredError)
        self.assertEqual(ctx.exception.message, "boom")
        self.assertEqual(ctx.exception.status_code, 500)

    async def test_non_json_response(self) -> None:
        backend = RecordingBackend(content=b"<html>bad gateway</html>", headers={"content-type": "text/html"})
        with self.assertRaises(TaskApiError) as ctx:
            await backend.service().list_accepted_tasks()
        self.assertEqual(ctx.exception.message, "Invalid response format")

    async def test_task_details(self) -> None:
        backend = RecordingBackend(payload={"success": True, "data": {"_id": "a", "status": "COMPLETED"}})
        details = await backend.service().get_task_details("a")

        self.assertEqual(details["status"], "COMPLETED")
        self.assertEqual(json.loads(backend.requests[0].content), {"taskId": "a"})

    async def test_task_details_failure(self) -> None:
        backend = RecordingBackend(payload={"success": False, "message": "Task not found"})
        with self.assertRaises(TaskApiError) as ctx:
            await backend.service().get_task_details("missing")
        self.assertEqual(ctx.exception.message, "Task not found")

    async def test_update_task_merges_task_id(self) -> None:
        backend = RecordingBackend(payload={"success": True})
        await backend.service().update_task("a", {"status": "COMPLETED"})
        self.assertEqual(json.loads(backend.requests[0].content), {"taskId": "a", "status": "COMPLETED"})


if __name__ == "__main__":
    unittest.main()
