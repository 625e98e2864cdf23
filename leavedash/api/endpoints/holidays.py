"""
Holiday Calendar Endpoints

Holiday lists come from the leave backend; weekend/holiday classification
is done here so the request form can warn before anything is submitted.
"""

from fastapi import APIRouter, Depends, HTTPException, status, Query
from typing import List, Optional
from datetime import date
import asyncio
import httpx

from leavedash.api.dependencies import get_backend_client
from leavedash.client.holidays import get_holidays_for_year, get_upcoming_holidays
from leavedash.core.holiday_calendar import (
    get_weekend_and_holiday_dates_in_range,
    is_weekend_or_holiday,
    years_in_range,
)
from leavedash.schemas import Holiday, HolidayConflict, HolidayConflictsResponse

router = APIRouter(prefix="/holidays", tags=["Holidays"])

# Longest range the conflict check walks day by day
MAX_RANGE_DAYS = 366


@router.get("", response_model=List[Holiday])
async def list_holidays(
    year: Optional[int] = Query(None, ge=1900, le=9999, description="Defaults to the current year"),
    client: httpx.AsyncClient = Depends(get_backend_client)
):
    """All holidays for one year."""
    return await get_holidays_for_year(client, year or date.today().year)


@router.get("/upcoming", response_model=List[Holiday])
async def list_upcoming_holidays(
    limit: int = Query(5, ge=1, le=50),
    client: httpx.AsyncClient = Depends(get_backend_client)
):
    return await get_upcoming_holidays(client, limit)


@router.get("/conflicts", response_model=HolidayConflictsResponse)
async def check_range(
    start_date: date = Query(...),
    end_date: date = Query(...),
    client: httpx.AsyncClient = Depends(get_backend_client)
):
    """
    Weekends and holidays inside [start_date, end_date].

    - **start_date**: first day of the leave (inclusive)
    - **end_date**: last day of the leave (inclusive)

    An inverted range has no conflicts.
    """
    if (end_date - start_date).days > MAX_RANGE_DAYS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Date range cannot exceed {MAX_RANGE_DAYS} days"
        )

    holiday_lists = await asyncio.gather(
        *(get_holidays_for_year(client, year) for year in years_in_range(start_date, end_date))
    )
    holidays = [holiday for holiday_list in holiday_lists for holiday in holiday_list]
    conflicts = get_weekend_and_holiday_dates_in_range(start_date, end_date, holidays)

    return HolidayConflictsResponse(
        start_date=start_date,
        end_date=end_date,
        has_conflicts=bool(conflicts),
        conflicts=[
            HolidayConflict(
                date=day.date,
                is_weekend=day.is_weekend,
                is_holiday=day.is_holiday,
                holiday_name=day.holiday_name
            )
            for day in conflicts
        ]
    )


@router.get("/check/{check_date}", response_model=dict)
async def classify_date(
    check_date: date,
    client: httpx.AsyncClient = Depends(get_backend_client)
):
    """Classify a single date as working day, weekend or holiday."""
    holidays = await get_holidays_for_year(client, check_date.year)
    result = is_weekend_or_holiday(check_date, holidays)

    if result.is_holiday:
        message = f"{check_date} is a holiday: {result.holiday_name}"
    elif result.is_weekend:
        message = f"{check_date} is a weekend"
    else:
        message = f"{check_date} is a working day"

    return {
        "date": check_date.isoformat(),
        "is_weekend_or_holiday": result.is_weekend_or_holiday,
        "is_weekend": result.is_weekend,
        "is_holiday": result.is_holiday,
        "holiday_name": result.holiday_name,
        "message": message
    }
