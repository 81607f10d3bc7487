"""
Task Routes
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..domain.tasks.schemas import Task
from ..sessions import CleanerSession, get_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])


class CachedTasksResponse(BaseModel):
    dates: list[str]
    tasks: list[Task]
    stats: dict[str, int]


@router.get("/cached", response_model=CachedTasksResponse)
async def get_cached_tasks(session: CleanerSession = Depends(get_session)):
    """Everything fetched so far, ordered by date"""
    cache = session.tasks.cache
    return CachedTasksResponse(dates=cache.keys(), tasks=cache.get_all(), stats=cache.stats())


@router.post("/refresh")
async def refresh_tasks(session: CleanerSession = Depends(get_session)):
    """Drop cached tasks and reload the selected day"""
    session.tasks.refresh()
    tasks = await session.tasks.select_date(session.calendar.selected_date)
    return {"message": "Tasks refreshed", "count": len(tasks or [])}


@router.get("/{task_id}")
async def get_task_details(task_id: str, session: CleanerSession = Depends(get_session)):
    return await session.tasks.get_task_details(task_id)


@router.patch("/{task_id}")
async def update_task(
    task_id: str,
    updates: dict[str, Any],
    session: CleanerSession = Depends(get_session),
):
    response = await session.tasks.update_task(task_id, updates)
    # cached copies of this task may be outdated now
    session.tasks.refresh()
    return response
