"""Timeline domain schemas"""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from ..tasks.schemas import SkippedTaskInfo, Task


class ViewMode(str, Enum):
    ALL_UPCOMING = "all_upcoming"
    DATE_FILTER = "date_filter"
    TODAY_ONLY = "today_only"


class DateGroup(BaseModel):
    """Tasks sharing one calendar day, as listed on the timeline"""

    date: date
    dateKey: str
    tasks: list[Task] = Field(default_factory=list)
    isToday: bool
    isTomorrow: bool


class TimelineResponse(BaseModel):
    viewMode: ViewMode
    title: str
    emptyMessage: Optional[str] = None
    groups: list[DateGroup]
    skipped: list[SkippedTaskInfo] = Field(default_factory=list)
