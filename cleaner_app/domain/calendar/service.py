"""Calendar service - selected date/month state and calendar view models"""

import logging
from datetime import date
from typing import Callable, Optional

from ... import config
from ..tasks.partition import partition_tasks
from ..tasks.schemas import Task
from .aggregator import aggregate_month, week_view
from .dates import local_today, normalize
from .persistence import SelectedDateStore
from .schemas import MonthView, WeekView

logger = logging.getLogger(__name__)


class CalendarService:
    """Tracks which day and month the cleaner is looking at"""

    def __init__(
        self,
        store: Optional[SelectedDateStore] = None,
        today_provider: Callable[[], date] = local_today,
    ):
        self.store = store
        self._today_provider = today_provider
        today = self.today
        self.selected_date: date = today
        self.selected_month: date = today

    @property
    def today(self) -> date:
        return self._today_provider()

    def _persist(self, day: date) -> None:
        if self.store is not None:
            self.store.save(day)

    def load_persisted_date(self) -> date:
        """Restore the last selected date, or today when none is usable"""
        today = self.today
        saved = self.store.load(today) if self.store is not None else None
        day = saved or today

        self.selected_date = day
        self.selected_month = day
        return day

    def select_date(self, day: date) -> date:
        new_date = normalize(day)
        self.selected_date = new_date
        self._persist(new_date)

        if (new_date.year, new_date.month) != (self.selected_month.year, self.selected_month.month):
            self.selected_month = new_date
        return new_date

    def select_month(self, month: int) -> Optional[date]:
        """Jump to the 1st of `month` (1-12) in the selected year; invalid months are ignored"""
        if not isinstance(month, int) or isinstance(month, bool) or not 1 <= month <= 12:
            logger.debug(f"Ignoring invalid month: {month!r}")
            return None

        new_month = date(self.selected_month.year, month, 1)
        self.selected_month = new_month
        self.selected_date = new_month
        self._persist(new_month)
        return new_month

    def navigate_year(self, direction: int) -> Optional[date]:
        """Move the selected month by `direction` years within the supported range"""
        new_year = self.selected_month.year + direction
        if new_year < config.CALENDAR_MIN_YEAR or new_year > config.CALENDAR_MAX_YEAR:
            return None

        current = self.selected_month
        # Feb 29 has no counterpart in a common year
        day = min(current.day, 28) if current.month == 2 else current.day
        new_date = date(new_year, current.month, day)

        self.selected_month = new_date
        self.selected_date = new_date
        self._persist(new_date)
        return new_date

    def go_to_today(self) -> date:
        today = self.today
        self.selected_date = today
        self.selected_month = today
        self._persist(today)
        return today

    def find_next_date_with_tasks(
        self, tasks: list[Task], from_date: Optional[date] = None
    ) -> Optional[date]:
        """Earliest task day strictly after `from_date` (default: the selected date)"""
        current = normalize(from_date) if from_date else self.selected_date
        future_days = [day for day, _ in partition_tasks(tasks).dated if day > current]
        return min(future_days) if future_days else None

    def week_view(self, tasks: list[Task], center: Optional[date] = None) -> WeekView:
        return week_view(center or self.selected_date, tasks, self.today)

    def month_view(self, tasks: list[Task], month_date: Optional[date] = None) -> MonthView:
        return aggregate_month(month_date or self.selected_month, tasks, self.today)
