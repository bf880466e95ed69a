# ABOUTME: Calendar helpers for the dashboard: enclosing week, axis labels, and the forecast horizon.
# ABOUTME: All functions work on plain dates with no time component.

from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from weather_archive.config import WEATHER_TIMEZONE
from weather_archive.models import WeekRange

FORECAST_HORIZON_DAYS = 16

# Monday-first to match date.weekday()
_WEEKDAY_LABELS = ("月", "火", "水", "木", "金", "土", "日")


def week_range(anchor: date) -> WeekRange:
    """Return the Sunday that starts and the Saturday that ends the week containing anchor."""
    days_since_sunday = (anchor.weekday() + 1) % 7
    start = anchor - timedelta(days=days_since_sunday)
    return WeekRange(start=start, end=start + timedelta(days=6))


def day_label(day: date) -> str:
    """Short Japanese weekday plus day of month, e.g. '日 (9)'."""
    return f"{_WEEKDAY_LABELS[day.weekday()]} ({day.day})"


def today_in_japan() -> date:
    return datetime.now(ZoneInfo(WEATHER_TIMEZONE)).date()


def max_forecast_date(today: date) -> date:
    return today + timedelta(days=FORECAST_HORIZON_DAYS)


def is_beyond_forecast_horizon(day: date, today: date) -> bool:
    """True when no source can serve this date yet."""
    return day > max_forecast_date(today)
