"""
Holiday client.

Holidays are reference data scoped by year; the backend is the only source.
"""

from typing import List

import httpx

from leavedash.client.base import request_json
from leavedash.schemas import Holiday, HolidayListResponse


async def get_upcoming_holidays(client: httpx.AsyncClient, limit: int = 5) -> List[Holiday]:
    data = await request_json(
        client, "GET", "/holidays/upcoming",
        action="fetch upcoming holidays",
        params={"limit": limit}
    )
    return HolidayListResponse.model_validate(data).holidays


async def get_holidays_for_year(client: httpx.AsyncClient, year: int) -> List[Holiday]:
    data = await request_json(
        client, "GET", "/holidays",
        action=f"fetch holidays for {year}",
        params={"year": year}
    )
    return HolidayListResponse.model_validate(data).holidays
