# ABOUTME: Folds hourly weather records into per-day summaries and day-filtered subsets.
# ABOUTME: Also maps WMO weather codes to the coarse condition categories used for icons.

from collections.abc import Iterable, Sequence
from datetime import date
from enum import Enum

from weather_archive.models import DailySummary, HourlyRecord

# Hour index used as the representative (local noon) record of a day
REPRESENTATIVE_HOUR_INDEX = 12


class ConditionCategory(str, Enum):
    CLEAR = "clear"
    CLOUDY = "cloudy"
    RAIN = "rain"
    SNOW = "snow"
    OTHER = "other"


def group_by_day(records: Iterable[HourlyRecord]) -> dict[date, list[HourlyRecord]]:
    """Partition records by calendar date, keeping input order within each day."""
    days: dict[date, list[HourlyRecord]] = {}
    for record in records:
        days.setdefault(record.time.date(), []).append(record)
    return days


def representative_code(day_records: Sequence[HourlyRecord]) -> int | None:
    """Weather code at local noon, or the first record's code for a short day."""
    if not day_records:
        return None
    if len(day_records) > REPRESENTATIVE_HOUR_INDEX:
        noon_code = day_records[REPRESENTATIVE_HOUR_INDEX].weather_code
        if noon_code is not None:
            return noon_code
    return day_records[0].weather_code


def summarize(day_records: Sequence[HourlyRecord]) -> DailySummary | None:
    """Summarize one day's records; returns None for an empty group."""
    if not day_records:
        return None

    temps = [r.temperature_2m for r in day_records if r.temperature_2m is not None]
    return DailySummary(
        date=day_records[0].time.date(),
        max_temperature=max(temps) if temps else None,
        min_temperature=min(temps) if temps else None,
        precipitation=sum(r.precipitation for r in day_records if r.precipitation is not None),
        weather_code=representative_code(day_records),
    )


def summarize_days(records: Iterable[HourlyRecord]) -> list[DailySummary]:
    """Daily summaries for every day present in records, sorted by date."""
    summaries = (summarize(day_records) for _, day_records in sorted(group_by_day(records).items()))
    return [s for s in summaries if s is not None]


def filter_for_day(records: Iterable[HourlyRecord], day: date) -> list[HourlyRecord]:
    return [r for r in records if r.time.date() == day]


def condition_category(code: int | None) -> ConditionCategory:
    """Group a WMO weather interpretation code into an icon category."""
    if code is None:
        return ConditionCategory.OTHER
    if code <= 1:
        return ConditionCategory.CLEAR
    if code <= 3 or code in (45, 48):
        return ConditionCategory.CLOUDY
    if 51 <= code <= 67 or 80 <= code <= 82:
        return ConditionCategory.RAIN
    if 71 <= code <= 77 or 85 <= code <= 86:
        return ConditionCategory.SNOW
    return ConditionCategory.OTHER
