"""
Per-cleaner session state
Each access token gets its own task cache and calendar selection
"""

import hashlib
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

import httpx
from fastapi import Header, HTTPException, Request, status

from . import config
from .domain.calendar.persistence import SelectedDateStore
from .domain.calendar.service import CalendarService
from .domain.tasks.service import TaskService
from .services.task_api import TaskApiService

logger = logging.getLogger(__name__)


@dataclass
class CleanerSession:
    tasks: TaskService
    calendar: CalendarService
    last_seen: float = 0.0


def _token_fingerprint(access_token: str) -> str:
    return hashlib.sha256(access_token.encode()).hexdigest()[:16]


class SessionRegistry:
    """
    Creates sessions lazily and drops them on logout, backend expiry or
    after `idle_timeout` seconds without a request.
    """

    def __init__(
        self,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        store_factory: Optional[Callable[[str], Optional[SelectedDateStore]]] = None,
        calendar_factory: Optional[Callable[[Optional[SelectedDateStore]], CalendarService]] = None,
        idle_timeout: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.transport = transport
        self.store_factory = store_factory or (lambda fingerprint: SelectedDateStore(namespace=fingerprint))
        self.calendar_factory = calendar_factory or (lambda store: CalendarService(store=store))
        self.idle_timeout = config.SESSION_IDLE_TIMEOUT_SECONDS if idle_timeout is None else idle_timeout
        self.clock = clock
        self._sessions: dict[str, CleanerSession] = {}

    def get(self, access_token: str) -> CleanerSession:
        now = self.clock()
        self.evict_idle(now)

        fingerprint = _token_fingerprint(access_token)
        session = self._sessions.get(fingerprint)
        if session is None:
            logger.info(f"🆕 Opening cleaner session {fingerprint}")
            api = TaskApiService(access_token=access_token, transport=self.transport)
            calendar = self.calendar_factory(self.store_factory(fingerprint))
            calendar.load_persisted_date()
            session = CleanerSession(tasks=TaskService(api), calendar=calendar)
            self._sessions[fingerprint] = session
        session.last_seen = now
        return session

    def close(self, access_token: str) -> bool:
        """Clear and forget a session; returns False if none was open"""
        session = self._sessions.pop(_token_fingerprint(access_token), None)
        if session is None:
            return False
        session.tasks.logout()
        return True

    def evict_idle(self, now: Optional[float] = None) -> int:
        """Drop sessions idle for longer than `idle_timeout`; returns how many were dropped"""
        now = self.clock() if now is None else now
        idle = [
            fingerprint
            for fingerprint, session in self._sessions.items()
            if now - session.last_seen > self.idle_timeout
        ]
        for fingerprint in idle:
            self._sessions.pop(fingerprint).tasks.logout()
            logger.info(f"⏰ Closed idle cleaner session {fingerprint}")
        return len(idle)

    def __len__(self) -> int:
        return len(self._sessions)


def get_session(
    request: Request,
    user_access_token: Optional[str] = Header(default=None, alias="user-access-token"),
) -> CleanerSession:
    """FastAPI dependency resolving the caller's session from its access token"""
    if not user_access_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing user-access-token header",
        )
    registry: SessionRegistry = request.app.state.sessions
    return registry.get(user_access_token)
