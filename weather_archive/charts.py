# ABOUTME: Chart-ready series for the hourly detail chart and the weekly summary chart.
# ABOUTME: Plain dicts shaped for a JS charting widget; no rendering happens here.

from collections.abc import Iterable

from weather_archive.aggregation import condition_category
from weather_archive.dates import day_label
from weather_archive.models import DailySummary, HourlyRecord

# Metric toggles offered above the hourly chart, with their default visibility
HOURLY_METRICS = {
    "temperature_2m": {"label": "気温", "unit": "°C", "color": "#ef4444", "visible": True},
    "precipitation": {"label": "降水", "unit": "mm", "color": "#0ea5e9", "visible": True},
    "relative_humidity_2m": {"label": "湿度", "unit": "%", "color": "#3b82f6", "visible": True},
    "wind_speed_10m": {"label": "風速", "unit": "km/h", "color": "#10b981", "visible": False},
}


def hourly_series(records: Iterable[HourlyRecord]) -> dict:
    """One point per hour with an HH:MM axis label."""
    points = [
        {"time": r.time.strftime("%H:%M"), **{metric: getattr(r, metric) for metric in HOURLY_METRICS}}
        for r in records
    ]
    return {"metrics": HOURLY_METRICS, "points": points}


def weekly_series(summaries: Iterable[DailySummary]) -> dict:
    """Bars for max/min temperature and a line for precipitation, one point per day."""
    points = [
        {
            "date": s.date.isoformat(),
            "label": day_label(s.date),
            "max_temperature": s.max_temperature,
            "min_temperature": s.min_temperature,
            "precipitation": round(s.precipitation, 1),
            "weather_code": s.weather_code,
            "condition": condition_category(s.weather_code).value,
        }
        for s in summaries
    ]
    return {
        "axes": {"left": "気温 (°C)", "right": "降水量 (mm)"},
        "points": points,
    }
