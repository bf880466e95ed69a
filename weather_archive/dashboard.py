# ABOUTME: Session controller that turns user intents into reducer actions and runs the async fetch/analysis calls.
# ABOUTME: Holds the single DashboardState for the local user and renders it into a JSON-ready view.

import logging
from collections.abc import Callable
from datetime import date, timedelta

import httpx

from weather_archive.charts import hourly_series, weekly_series
from weather_archive.config import DEFAULT_CITY, DEFAULT_DAYS_BACK
from weather_archive.dates import max_forecast_date, today_in_japan, week_range
from weather_archive.locations import JAPANESE_CITIES, find_city, location_for_point
from weather_archive.models import AnalysisRequest
from weather_archive.narrative import narrate
from weather_archive.state import (
    Action,
    AnalysisFinished,
    AnalysisStarted,
    DashboardState,
    FetchFailed,
    FetchStarted,
    FetchSucceeded,
    SelectDate,
    SelectLocation,
    daily_summaries,
    date_flags,
    reduce,
    selected_day_records,
    selected_day_summary,
)
from weather_archive.weather_service import SourceError, fetch_range

logger = logging.getLogger(__name__)

FETCH_FAILED_MESSAGE = "データの取得に失敗しました。"


def initial_state(today: date) -> DashboardState:
    city = find_city(DEFAULT_CITY) or JAPANESE_CITIES[0]
    return DashboardState(location=city, selected_date=today - timedelta(days=DEFAULT_DAYS_BACK))


class Dashboard:
    """One user's dashboard session.

    All state changes go through dispatch(), which applies the pure reducer.
    Weather loads and analyses capture the token issued when they start, so a
    slow response that lands after a newer request is dropped by the reducer.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        state: DashboardState | None = None,
        today: Callable[[], date] = today_in_japan,
    ):
        self.http_client = http_client
        self._today = today
        self.state = state or initial_state(today())

    def dispatch(self, action: Action) -> DashboardState:
        self.state = reduce(self.state, action)
        return self.state

    async def load_weather(self) -> None:
        """Fetch the week around the selected date for the current location."""
        started = self.dispatch(FetchStarted())
        token = started.request_token
        week = week_range(started.selected_date)
        try:
            records = await fetch_range(
                self.http_client, started.location.coordinate, week.start, week.end, today=self._today()
            )
        except SourceError as e:
            logger.warning("Weather load %d failed: %s", token, e.reason)
            self.dispatch(FetchFailed(token=token, message=e.reason or FETCH_FAILED_MESSAGE))
            return
        self.dispatch(FetchSucceeded(token=token, records=tuple(records)))

    async def select_city(self, name: str) -> None:
        city = find_city(name)
        if city is None:
            raise ValueError(f"Unknown city: {name}")
        self.dispatch(SelectLocation(location=city))
        await self.load_weather()

    async def pick_point(self, latitude: float, longitude: float) -> None:
        """Select a map-clicked or marker-dragged point."""
        self.dispatch(SelectLocation(location=location_for_point(latitude, longitude)))
        await self.load_weather()

    async def select_date(self, day: date) -> None:
        self.dispatch(SelectDate(date=day))
        await self.load_weather()

    async def reload(self) -> None:
        await self.load_weather()

    async def analyze(self) -> bool:
        """Run the narrative for the selected day. Returns False if an analysis could not start."""
        before = self.state
        started = self.dispatch(AnalysisStarted())
        if started is before:
            return False

        request = AnalysisRequest(
            location=started.location, date=started.selected_date, records=selected_day_records(started)
        )
        text = await narrate(request.location, request.date, request.records)
        self.dispatch(AnalysisFinished(token=started.analysis_token, text=text))
        return True

    def view(self) -> dict:
        """Everything the page needs, JSON-serialisable."""
        state = self.state
        today = self._today()
        summaries = daily_summaries(state)
        day_records = selected_day_records(state)
        day_summary = selected_day_summary(state)
        week = week_range(state.selected_date)
        return {
            "location": {**state.location.model_dump(mode="json"), "is_custom": state.location.is_custom},
            "selected_date": state.selected_date.isoformat(),
            "week": week.model_dump(mode="json"),
            "max_forecast_date": max_forecast_date(today).isoformat(),
            "flags": date_flags(state, today).model_dump(),
            "status": state.status,
            "error": state.error,
            "day_summary": day_summary.model_dump(mode="json") if day_summary else None,
            "daily_summaries": [s.model_dump(mode="json") for s in summaries],
            "hourly": [r.model_dump(mode="json") for r in day_records],
            "charts": {"hourly": hourly_series(day_records), "weekly": weekly_series(summaries)},
            "analysis": {
                "status": state.analysis_status,
                "text": state.analysis,
                "available": bool(day_records) and state.analysis_status != "analyzing",
            },
        }
