"""Task domain schemas - Pydantic models for backend task records"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class TaskStatus(str, Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class TaskType(str, Enum):
    CLEANING = "CLEANING"
    MAINTENANCE = "MAINTENANCE"


class ReservationDetails(BaseModel):
    """Reservation attached to a task; checkOut is the fallback task date"""

    model_config = ConfigDict(extra="allow")

    checkIn: Optional[str] = None
    checkOut: Optional[str] = None


class PropertyRef(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = Field(default=None, alias="_id")
    name: Optional[str] = None
    address: Optional[str] = None
    type: Optional[str] = None


class Task(BaseModel):
    """
    A cleaning or maintenance task as returned by the backend.

    The backend owns these records; the client only holds read-only copies.
    Dates stay raw strings so a malformed timestamp never fails validation;
    it is resolved (or skipped) later by the calendar and timeline code.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(alias="_id")
    status: Optional[str] = None
    type: Optional[str] = None
    checkInDate: Optional[str] = None
    checkOutDate: Optional[str] = None
    reservationDetails: Optional[ReservationDetails] = None
    propertyId: Optional[PropertyRef] = None
    description: Optional[str] = None
    price: Optional[Any] = None
    paymentStatus: Optional[str] = None


def task_date_value(task: Task) -> Optional[str]:
    """
    Canonical date of a task: checkOutDate, falling back to the
    reservation's checkOut. Every calendar, timeline and cache path uses this.
    """
    if task.checkOutDate:
        return task.checkOutDate
    if task.reservationDetails and task.reservationDetails.checkOut:
        return task.reservationDetails.checkOut
    return None


class SkippedTaskInfo(BaseModel):
    """A task left out of calendar/timeline results, and why"""

    taskId: str
    reason: str
