# ABOUTME: Service layer for Open-Meteo hourly weather retrieval and response parsing.
# ABOUTME: Chooses between the forecast and archive endpoints for a date range and normalises hourly columns.

import logging
from datetime import date, datetime, timedelta

import httpx
from pydantic import BaseModel, ConfigDict

from weather_archive.config import WEATHER_TIMEZONE
from weather_archive.dates import max_forecast_date, today_in_japan
from weather_archive.models import Coordinate, HourlyRecord

logger = logging.getLogger(__name__)

FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
ARCHIVE_URL = "https://archive-api.open-meteo.com/v1/archive"

# The archive lags real time by about two days
ARCHIVE_LAG_DAYS = 2

CORE_HOURLY_FIELDS = (
    "temperature_2m",
    "apparent_temperature",
    "precipitation",
    "relative_humidity_2m",
    "surface_pressure",
    "visibility",
    "cloud_cover",
    "wind_speed_10m",
    "wind_direction_10m",
    "wind_gusts_10m",
    "snowfall",
    "snow_depth",
    "weather_code",
)

FORECAST_ONLY_FIELDS = ("precipitation_probability", "uv_index", "cape")


class SourceError(Exception):
    """Upstream weather source failed with something other than a bad request."""

    def __init__(self, reason: str, status_code: int | None = None):
        super().__init__(reason)
        self.reason = reason
        self.status_code = status_code


class SourcePlan(BaseModel):
    """Which endpoint to query, for which dates, with which hourly fields."""

    model_config = ConfigDict(frozen=True)

    url: str
    start_date: date
    end_date: date
    fields: tuple[str, ...]

    @property
    def is_forecast(self) -> bool:
        return self.url == FORECAST_URL


def select_source(start_date: date, end_date: date, today: date) -> SourcePlan | None:
    """Decide which upstream serves a date range, or None when nothing can.

    Ranges ending on or after today minus the archive lag go to the forecast
    endpoint, clamped to the forecast horizon; older ranges go to the archive.
    """
    horizon = max_forecast_date(today)
    if start_date > horizon:
        return None

    recent_cutoff = today - timedelta(days=ARCHIVE_LAG_DAYS)
    if end_date >= recent_cutoff:
        return SourcePlan(
            url=FORECAST_URL,
            start_date=start_date,
            end_date=min(end_date, horizon),
            fields=CORE_HOURLY_FIELDS + FORECAST_ONLY_FIELDS,
        )
    return SourcePlan(url=ARCHIVE_URL, start_date=start_date, end_date=end_date, fields=CORE_HOURLY_FIELDS)


async def fetch_range(
    client: httpx.AsyncClient,
    coordinate: Coordinate,
    start_date: date,
    end_date: date,
    today: date | None = None,
) -> list[HourlyRecord]:
    """Fetch hourly weather for a coordinate and inclusive date range.

    Returns an empty list when the range is beyond the forecast horizon or the
    upstream rejects the request as bad. Raises SourceError for any other failure.
    """
    plan = select_source(start_date, end_date, today or today_in_japan())
    if plan is None:
        logger.info("Skipping fetch: %s is beyond the forecast horizon", start_date)
        return []

    logger.info(
        "Fetching %s hourly data for (%.4f, %.4f) %s..%s",
        "forecast" if plan.is_forecast else "archive",
        coordinate.latitude,
        coordinate.longitude,
        plan.start_date,
        plan.end_date,
    )
    try:
        resp = await client.get(
            plan.url,
            params={
                "latitude": coordinate.latitude,
                "longitude": coordinate.longitude,
                "start_date": plan.start_date.isoformat(),
                "end_date": plan.end_date.isoformat(),
                "hourly": ",".join(plan.fields),
                "timezone": WEATHER_TIMEZONE,
            },
        )
    except httpx.HTTPStatusError as e:
        raise SourceError(_error_reason(e.response), e.response.status_code) from e
    except httpx.HTTPError as e:
        raise SourceError(f"Weather API request failed: {e}") from e

    if resp.status_code == 400:
        logger.warning("Weather API rejected the request: %s", _error_reason(resp))
        return []
    if not resp.is_success:
        raise SourceError(_error_reason(resp), resp.status_code)

    # ValidationError is a ValueError; non-object bodies surface as AttributeError
    try:
        data = resp.json()
        return parse_hourly_data(data.get("hourly") or {})
    except (ValueError, TypeError, AttributeError) as e:
        raise SourceError("Weather API returned a malformed response", resp.status_code) from e


def parse_hourly_data(raw: dict) -> list[HourlyRecord]:
    """Parse Open-Meteo column-oriented hourly data into row-oriented HourlyRecord objects.

    Each column is aligned to the time column by index. Columns the source did
    not return produce None for every record.
    """
    times = raw.get("time", [])
    if not times:
        return []

    fields = CORE_HOURLY_FIELDS + FORECAST_ONLY_FIELDS
    return [
        HourlyRecord(time=datetime.fromisoformat(t), **{name: _get_at(raw, name, i) for name in fields})
        for i, t in enumerate(times)
    ]


def _get_at(data: dict, key: str, index: int):
    """Safely get value at index from a column array, returning None if missing."""
    col = data.get(key)
    if col is None or index >= len(col):
        return None
    return col[index]


def _error_reason(resp: httpx.Response) -> str:
    """Prefer the upstream's own 'reason' field over the HTTP reason phrase."""
    try:
        reason = resp.json().get("reason")
    except (ValueError, AttributeError, httpx.ResponseNotRead):
        reason = None
    return reason or f"Weather API Error: {resp.reason_phrase}"
