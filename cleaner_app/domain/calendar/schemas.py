"""Calendar domain schemas - view models for week and month calendars"""

from datetime import date
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

from ..tasks.schemas import SkippedTaskInfo, Task


class DotConfig(BaseModel):
    """How the task indicator dot under a calendar day is drawn"""

    showDot: bool
    showCount: bool
    dotSize: int
    dotColor: str
    displayCount: str
    priority: Literal["high", "medium", "normal"]


class HiddenDot(BaseModel):
    showDot: bool = False


class DayBucket(BaseModel):
    """Per-day summary of task presence, rebuilt on every calendar pass"""

    empty: Literal[False] = False
    date: int
    fullDate: date
    dayName: str
    isToday: bool
    isTomorrow: bool
    hasTask: bool
    tasksCount: int
    dotConfig: DotConfig
    tasks: list[Task] = Field(default_factory=list)


class EmptyDay(BaseModel):
    """Leading placeholder that aligns the 1st of the month to its weekday column"""

    empty: Literal[True] = True
    day: str = ""
    dotConfig: HiddenDot = Field(default_factory=HiddenDot)


class MonthView(BaseModel):
    year: int
    month: int
    monthName: str
    days: list[Union[DayBucket, EmptyDay]]
    skipped: list[SkippedTaskInfo] = Field(default_factory=list)


class WeekView(BaseModel):
    centerDate: date
    days: list[DayBucket]
    skipped: list[SkippedTaskInfo] = Field(default_factory=list)


class SelectDateRequest(BaseModel):
    date: date


class SelectedDateResponse(BaseModel):
    selectedDate: date
    selectedMonth: date
    headerText: str
    nextDateWithTasks: Optional[date] = None
