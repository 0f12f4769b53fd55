from __future__ import annotations

import calendar
import re
from datetime import date, datetime, time, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

from pydantic import BaseModel

from src.core.config import get_settings
from src.core.errors import (
    ConflictingFiltersError,
    InvalidDateFormatError,
    InvalidPeriodError,
    InvalidRangeError,
    ValidationError,
)

SUMMARY_PERIODS = ("today", "this_week", "this_month", "last_month", "this_year")
DEFAULT_PERIOD = "today"

_DATE_ONLY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class DateRange(BaseModel):
    start: datetime
    end: datetime
    label: str


def local_now() -> datetime:
    zone = ZoneInfo(get_settings().report_timezone)
    return datetime.now(zone).replace(tzinfo=None, microsecond=0)


def start_of_day(value: date) -> datetime:
    return datetime.combine(value, time.min)


def end_of_day(value: date) -> datetime:
    return datetime.combine(value, time(23, 59, 59))


def parse_date_only(value: Optional[str]) -> Optional[date]:
    if not isinstance(value, str):
        return None
    trimmed = value.strip()
    if not _DATE_ONLY_PATTERN.match(trimmed):
        return None
    try:
        return date.fromisoformat(trimmed)
    except ValueError:
        return None


def _period_bounds(period: str, today: date) -> tuple[date, date]:
    if period == "today":
        return today, today
    if period == "this_week":
        monday = today - timedelta(days=today.weekday())
        return monday, monday + timedelta(days=6)
    if period == "this_month":
        last_day = calendar.monthrange(today.year, today.month)[1]
        return today.replace(day=1), today.replace(day=last_day)
    if period == "last_month":
        previous_month_end = today.replace(day=1) - timedelta(days=1)
        return previous_month_end.replace(day=1), previous_month_end
    if period == "this_year":
        return date(today.year, 1, 1), date(today.year, 12, 31)
    raise InvalidPeriodError()


def resolve_date_range(
    period: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    now: Optional[datetime] = None,
) -> DateRange:
    if start_date and end_date:
        parsed_start = parse_date_only(start_date)
        parsed_end = parse_date_only(end_date)
        if parsed_start is None or parsed_end is None:
            raise InvalidDateFormatError()
        if parsed_start > parsed_end:
            raise InvalidRangeError()
        return DateRange(
            start=start_of_day(parsed_start),
            end=end_of_day(parsed_end),
            label=f"{parsed_start.isoformat()}..{parsed_end.isoformat()}",
        )

    effective_period = period or DEFAULT_PERIOD
    today = (now or local_now()).date()
    first_day, last_day = _period_bounds(effective_period, today)
    return DateRange(start=start_of_day(first_day), end=end_of_day(last_day), label=effective_period)


def resolve_report_window(
    period: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    now: Optional[datetime] = None,
) -> DateRange:
    normalized_period = period.strip().lower() if isinstance(period, str) and period.strip() else None
    normalized_start = start_date.strip() if isinstance(start_date, str) and start_date.strip() else None
    normalized_end = end_date.strip() if isinstance(end_date, str) and end_date.strip() else None
    has_custom_range = bool(normalized_start or normalized_end)

    if normalized_period and has_custom_range:
        raise ConflictingFiltersError()
    if has_custom_range and not (normalized_start and normalized_end):
        raise ValidationError("Both startDate and endDate are required for custom ranges.")
    if normalized_period and normalized_period not in SUMMARY_PERIODS:
        raise InvalidPeriodError()

    return resolve_date_range(
        period=normalized_period,
        start_date=normalized_start,
        end_date=normalized_end,
        now=now,
    )
