# ABOUTME: Explicit dashboard session state and the pure reducer that applies user and fetch actions to it.
# ABOUTME: Request tokens make late responses from superseded fetches or analyses no-ops.

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict

from weather_archive.aggregation import filter_for_day, summarize, summarize_days
from weather_archive.dates import is_beyond_forecast_horizon
from weather_archive.models import DailySummary, HourlyRecord, Location


class DashboardState(BaseModel):
    """Everything the dashboard renders from. Replaced, never mutated."""

    model_config = ConfigDict(frozen=True)

    location: Location
    selected_date: date
    records: tuple[HourlyRecord, ...] = ()
    status: Literal["idle", "loading", "ready", "error"] = "idle"
    error: str | None = None
    request_token: int = 0
    analysis_status: Literal["idle", "analyzing"] = "idle"
    analysis: str | None = None
    analysis_token: int = 0


class _Action(BaseModel):
    model_config = ConfigDict(frozen=True)


class SelectLocation(_Action):
    location: Location


class SelectDate(_Action):
    date: date


class FetchStarted(_Action):
    pass


class FetchSucceeded(_Action):
    token: int
    records: tuple[HourlyRecord, ...]


class FetchFailed(_Action):
    token: int
    message: str


class AnalysisStarted(_Action):
    pass


class AnalysisFinished(_Action):
    token: int
    text: str


Action = SelectLocation | SelectDate | FetchStarted | FetchSucceeded | FetchFailed | AnalysisStarted | AnalysisFinished


def reduce(state: DashboardState, action: Action) -> DashboardState:
    """Return the state that results from applying action to state."""
    if isinstance(action, SelectLocation):
        return state.model_copy(update={"location": action.location})

    if isinstance(action, SelectDate):
        return state.model_copy(update={"selected_date": action.date})

    if isinstance(action, FetchStarted):
        # A new load also invalidates whatever analysis was running for the old data
        return state.model_copy(
            update={
                "status": "loading",
                "error": None,
                "request_token": state.request_token + 1,
                "analysis_status": "idle",
                "analysis": None,
                "analysis_token": state.analysis_token + 1,
            }
        )

    if isinstance(action, FetchSucceeded):
        if action.token != state.request_token:
            return state
        return state.model_copy(update={"status": "ready", "records": action.records, "error": None})

    if isinstance(action, FetchFailed):
        if action.token != state.request_token:
            return state
        return state.model_copy(update={"status": "error", "records": (), "error": action.message})

    if isinstance(action, AnalysisStarted):
        if state.analysis_status == "analyzing" or not selected_day_records(state):
            return state
        return state.model_copy(update={"analysis_status": "analyzing", "analysis_token": state.analysis_token + 1})

    if isinstance(action, AnalysisFinished):
        if state.analysis_status != "analyzing" or action.token != state.analysis_token:
            return state
        return state.model_copy(update={"analysis_status": "idle", "analysis": action.text})

    raise TypeError(f"Unknown action: {action!r}")


def daily_summaries(state: DashboardState) -> list[DailySummary]:
    return summarize_days(state.records)


def selected_day_records(state: DashboardState) -> list[HourlyRecord]:
    return filter_for_day(state.records, state.selected_date)


def selected_day_summary(state: DashboardState) -> DailySummary | None:
    return summarize(selected_day_records(state))


class DateFlags(BaseModel):
    is_future: bool
    is_beyond_forecast_horizon: bool


def date_flags(state: DashboardState, today: date) -> DateFlags:
    """Flags shown next to the date picker; far-future dates stay selectable."""
    return DateFlags(
        is_future=state.selected_date > today,
        is_beyond_forecast_horizon=is_beyond_forecast_horizon(state.selected_date, today),
    )
