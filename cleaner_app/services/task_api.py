import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from .. import config
from ..domain.tasks.schemas import Task
from ..exceptions import SessionExpiredError, TaskApiError

logger = logging.getLogger(__name__)

SESSION_EXPIRED_MARKERS = ("Token expired.", "expired", "access denied")


class TaskApiService:
    """Service for the remote cleaning task backend"""

    def __init__(
        self,
        access_token: Optional[str] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        self.access_token = access_token
        self.base_url = f"{(base_url or config.API_URL).rstrip('/')}/api"
        self.transport = transport
        self.timeout = timeout or config.API_TIMEOUT_SECONDS

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.access_token:
            headers["user-access-token"] = self.access_token
        return headers

    async def _post(self, endpoint: str, body: dict[str, Any]) -> dict[str, Any]:
        """POST a JSON body and return the decoded JSON response"""
        endpoint = endpoint if endpoint.startswith("/") else f"/{endpoint}"

        async with httpx.AsyncClient(
            base_url=self.base_url, transport=self.transport, timeout=self.timeout
        ) as client:
            response = await client.post(endpoint, json=body, headers=self._headers())

        content_type = response.headers.get("content-type", "")
        if "application/json" not in content_type:
            logger.warning(f"⚠️ Non-JSON response from {endpoint}: {response.text[:100]}")
            raise TaskApiError("Invalid response format", response.status_code)

        try:
            data = response.json()
        except ValueError:
            logger.error(f"❌ Failed to parse response from {endpoint}")
            raise TaskApiError("Failed to parse server response", response.status_code)

        message = ""
        if isinstance(data, dict):
            error = data.get("error")
            message = data.get("message") or (error.get("message") if isinstance(error, dict) else "") or ""

        if response.status_code == 401 or any(marker in message for marker in SESSION_EXPIRED_MARKERS):
            logger.info(f"🔒 Session rejected by backend on {endpoint}")
            raise SessionExpiredError("Session has expired. Please login again.", 401)

        if response.is_error:
            logger.error(f"❌ API error {response.status_code} on {endpoint}: {message}")
            raise TaskApiError(message or f"Request failed with status {response.status_code}", response.status_code)

        if not isinstance(data, dict):
            raise TaskApiError("Invalid response format", response.status_code)
        return data

    @staticmethod
    def _parse_tasks(data: dict[str, Any]) -> list[Task]:
        """Validate the `data` list; records that are not tasks are logged and dropped"""
        records = data.get("data") or []
        if not isinstance(records, list):
            logger.warning("⚠️ Task list response has a non-list `data` field")
            return []

        tasks = []
        for record in records:
            try:
                tasks.append(Task.model_validate(record))
            except ValidationError as e:
                logger.warning(f"⚠️ Dropping malformed task record: {e.error_count()} errors")
        return tasks

    async def list_accepted_tasks(self, body: Optional[dict[str, Any]] = None) -> list[Task]:
        """Accepted cleaning tasks; body may carry `date`, `month` or `status`"""
        data = await self._post("/listAcceptedCleaningTasks", body or {})
        tasks = self._parse_tasks(data)
        logger.info(f"📥 Fetched {len(tasks)} accepted tasks for {body or 'all dates'}")
        return tasks

    async def list_pending_tasks(self, body: Optional[dict[str, Any]] = None) -> list[Task]:
        data = await self._post("/listPendingCleaningTasks", body or {})
        return self._parse_tasks(data)

    async def get_task_details(self, task_id: str) -> dict[str, Any]:
        data = await self._post("/detailTask", {"taskId": task_id})
        if not data.get("success"):
            raise TaskApiError(data.get("message") or "Failed to fetch task details")
        return data.get("data") or {}

    async def update_task(self, task_id: str, updates: dict[str, Any]) -> dict[str, Any]:
        return await self._post("/updateTaskCleaner", {"taskId": task_id, **updates})
