"""
Timeline Routes
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..domain.tasks.partition import partition_tasks
from ..domain.timeline.grouper import (
    build_timeline,
    determine_view_mode,
    get_empty_state_message,
    get_view_mode_text,
)
from ..domain.timeline.schemas import TimelineResponse, ViewMode
from ..sessions import CleanerSession, get_session
from ..shared.validators import parse_date_key

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/timeline", tags=["timeline"])


@router.get("", response_model=TimelineResponse)
async def get_timeline(
    date_param: Optional[str] = Query(default=None, alias="date"),
    session: CleanerSession = Depends(get_session),
):
    """
    Grouped task timeline.

    Without `date` every upcoming task is listed; with `date` only that day
    (shown as "today" when it is today).
    """
    try:
        selected = parse_date_key(date_param)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    today = session.calendar.today
    view_mode = determine_view_mode(selected, today)

    if view_mode == ViewMode.ALL_UPCOMING:
        tasks = await session.tasks.fetch_all_tasks()
    else:
        tasks = await session.tasks.fetch_tasks_for_date(selected)

    partition = partition_tasks(tasks)
    groups = build_timeline(partition, view_mode, selected, today)

    return TimelineResponse(
        viewMode=view_mode,
        title=get_view_mode_text(view_mode, selected),
        emptyMessage=None if groups else get_empty_state_message(view_mode, selected),
        groups=groups,
        skipped=partition.skipped_info(),
    )
