"""Persisted "last selected date" for the calendar"""

import logging
from datetime import date
from typing import Callable, Optional

import redis

from ... import config
from ...redis_client import get_redis_client
from .dates import normalize

logger = logging.getLogger(__name__)


class SelectedDateStore:
    """
    Stores the selected calendar date under a fixed Redis key.

    Storage is best effort: a missing or failing Redis is logged and the
    calendar falls back to today (fail-open).
    """

    def __init__(
        self,
        namespace: Optional[str] = None,
        client_factory: Callable[[], "redis.Redis"] = get_redis_client,
    ):
        self.key = config.SELECTED_DATE_KEY if not namespace else f"{config.SELECTED_DATE_KEY}:{namespace}"
        self._client_factory = client_factory

    def _get_client(self):
        try:
            return self._client_factory()
        except Exception as e:
            logger.warning(f"⚠️ Selected date storage unavailable: {e}")
            return None

    def load(self, today: date) -> Optional[date]:
        """The stored date if it parses and is within the allowed age, else None"""
        client = self._get_client()
        if client is None:
            return None

        try:
            saved = client.get(self.key)
        except redis.RedisError as e:
            logger.warning(f"⚠️ Failed to read selected date: {e}")
            return None

        if not saved:
            return None

        saved_date = normalize(saved)
        if saved_date is None:
            logger.debug(f"Ignoring unparseable stored date: {saved!r}")
            return None

        if abs((today - saved_date).days) > config.SELECTED_DATE_MAX_AGE_DAYS:
            logger.debug(f"Ignoring stored date {saved_date}: older than {config.SELECTED_DATE_MAX_AGE_DAYS} days")
            return None
        return saved_date

    def save(self, day: date) -> bool:
        client = self._get_client()
        if client is None:
            return False

        try:
            client.set(self.key, day.isoformat())
            return True
        except redis.RedisError as e:
            logger.warning(f"⚠️ Failed to persist selected date: {e}")
            return False
