"""
Weekend and holiday classification for leave date ranges.

A leave request may not span a weekend or a public holiday, so the new
request form asks these helpers for every conflicting day in the range.
Holidays are compared on their ISO ``YYYY-MM-DD`` date only.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Iterable, List, Optional, Union

DateLike = Union[date, datetime]


@dataclass(frozen=True)
class DayClassification:
    is_weekend_or_holiday: bool
    is_weekend: bool
    is_holiday: bool
    holiday_name: Optional[str] = None


@dataclass(frozen=True)
class NonWorkingDay:
    date: date
    is_weekend: bool
    is_holiday: bool
    holiday_name: Optional[str] = None


def _iso_day(value: DateLike) -> str:
    # datetime is a subclass of date; drop the time part without touching tz
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def _holiday_date(holiday: Any) -> str:
    raw = holiday["date"] if isinstance(holiday, dict) else holiday.date
    return raw if isinstance(raw, str) else _iso_day(raw)


def _holiday_name(holiday: Any) -> Optional[str]:
    return holiday.get("name") if isinstance(holiday, dict) else holiday.name


def _find_holiday(day: DateLike, holidays: Iterable[Any]) -> Optional[Any]:
    day_string = _iso_day(day)
    for holiday in holidays:
        if _holiday_date(holiday) == day_string:
            return holiday
    return None


def is_weekend(day: DateLike) -> bool:
    """Saturday (5) or Sunday (6)."""
    return day.weekday() >= 5


def is_holiday(day: DateLike, holidays: Iterable[Any]) -> bool:
    return _find_holiday(day, holidays) is not None


def is_weekend_or_holiday(day: DateLike, holidays: Iterable[Any]) -> DayClassification:
    weekend = is_weekend(day)
    holiday = _find_holiday(day, holidays)

    return DayClassification(
        is_weekend_or_holiday=weekend or holiday is not None,
        is_weekend=weekend,
        is_holiday=holiday is not None,
        holiday_name=_holiday_name(holiday) if holiday is not None else None,
    )


def get_weekend_and_holiday_dates_in_range(
    start: DateLike,
    end: DateLike,
    holidays: Iterable[Any]
) -> List[NonWorkingDay]:
    """
    Returns every weekend or holiday in [start, end], in date order.

    Both bounds are inclusive. An inverted range (start after end) yields an
    empty list rather than an error.
    """
    holidays = list(holidays)
    current = start.date() if isinstance(start, datetime) else start
    last = end.date() if isinstance(end, datetime) else end

    dates = []
    while current <= last:
        result = is_weekend_or_holiday(current, holidays)
        if result.is_weekend_or_holiday:
            dates.append(NonWorkingDay(
                date=current,
                is_weekend=result.is_weekend,
                is_holiday=result.is_holiday,
                holiday_name=result.holiday_name
            ))
        current += timedelta(days=1)

    return dates


def years_in_range(start: date, end: date) -> List[int]:
    """Calendar years touched by [start, end]; empty for an inverted range."""
    if start > end:
        return []
    return list(range(start.year, end.year + 1))
