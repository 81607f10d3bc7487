"""
Calendar Routes
Week strip and month grid view models with task indicator dots
"""

import logging
from datetime import date, timedelta
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..domain.calendar.aggregator import WEEK_RADIUS
from ..domain.calendar.schemas import MonthView, SelectDateRequest, SelectedDateResponse, WeekView
from ..domain.calendar.task_colors import generate_date_header_text
from ..sessions import CleanerSession, get_session
from ..shared.validators import parse_date_key

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/calendar", tags=["calendar"])


def _parse_date_param(value: Optional[str]) -> Optional[date]:
    try:
        return parse_date_key(value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/week", response_model=WeekView)
async def get_week(
    date_param: Optional[str] = Query(default=None, alias="date"),
    session: CleanerSession = Depends(get_session),
):
    """Seven days centered on `date` (default: the selected date)"""
    center = _parse_date_param(date_param) or session.calendar.selected_date

    # the strip can straddle two months
    await session.tasks.ensure_month_loaded(center - timedelta(days=WEEK_RADIUS))
    await session.tasks.ensure_month_loaded(center + timedelta(days=WEEK_RADIUS))

    return session.calendar.week_view(session.tasks.get_all_cached_tasks(), center)


@router.get("/month", response_model=MonthView)
async def get_month(
    year: Optional[int] = Query(default=None, ge=1, le=9999),
    month: Optional[int] = Query(default=None, ge=1, le=12),
    session: CleanerSession = Depends(get_session),
):
    selected = session.calendar.selected_month
    month_date = date(year or selected.year, month or selected.month, 1)

    await session.tasks.ensure_month_loaded(month_date)
    return session.calendar.month_view(session.tasks.get_all_cached_tasks(), month_date)


def _selection_response(session: CleanerSession) -> SelectedDateResponse:
    calendar = session.calendar
    return SelectedDateResponse(
        selectedDate=calendar.selected_date,
        selectedMonth=calendar.selected_month,
        headerText=generate_date_header_text(calendar.selected_date, today=calendar.today),
        nextDateWithTasks=calendar.find_next_date_with_tasks(session.tasks.get_all_cached_tasks()),
    )


@router.get("/selected-date", response_model=SelectedDateResponse)
async def get_selected_date(session: CleanerSession = Depends(get_session)):
    return _selection_response(session)


@router.post("/selected-date", response_model=SelectedDateResponse)
async def select_date(
    data: SelectDateRequest,
    session: CleanerSession = Depends(get_session),
):
    """Select and persist a date, then load its tasks"""
    day = session.calendar.select_date(data.date)
    await session.tasks.select_date(day)
    return _selection_response(session)


@router.post("/today", response_model=SelectedDateResponse)
async def go_to_today(session: CleanerSession = Depends(get_session)):
    day = session.calendar.go_to_today()
    await session.tasks.select_date(day)
    return _selection_response(session)


@router.post("/month/{month}", response_model=SelectedDateResponse)
async def select_month(month: int, session: CleanerSession = Depends(get_session)):
    if session.calendar.select_month(month) is None:
        raise HTTPException(status_code=400, detail="Month must be between 1 and 12")
    return _selection_response(session)


@router.post("/year/{direction}", response_model=SelectedDateResponse)
async def navigate_year(direction: int, session: CleanerSession = Depends(get_session)):
    if session.calendar.navigate_year(direction) is None:
        raise HTTPException(status_code=400, detail="Year is outside the supported range")
    return _selection_response(session)
