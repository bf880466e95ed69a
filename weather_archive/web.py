# ABOUTME: ASGI web entry point for the weather archive dashboard.
# ABOUTME: Exposes the single local dashboard session as JSON endpoints on a Starlette app.

import contextlib
import logging
from datetime import date

import uvicorn
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from weather_archive.config import HOST, LOG_LEVEL, PORT
from weather_archive.dashboard import Dashboard
from weather_archive.deps import create_http_client
from weather_archive.locations import JAPANESE_CITIES

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def _bad_request(detail: str) -> JSONResponse:
    return JSONResponse({"detail": detail}, status_code=400)


async def _json_object(request: Request) -> dict:
    """Read the request body as a JSON object, raising ValueError otherwise."""
    body = await request.json()
    if not isinstance(body, dict):
        raise ValueError("Request body must be a JSON object")
    return body


async def list_locations(request: Request) -> JSONResponse:
    return JSONResponse([city.model_dump(mode="json") for city in JAPANESE_CITIES])


async def get_dashboard(request: Request) -> JSONResponse:
    dashboard: Dashboard = request.app.state.dashboard
    return JSONResponse(dashboard.view())


async def select_location(request: Request) -> JSONResponse:
    """Select a named city, or an arbitrary map point when latitude/longitude are given."""
    dashboard: Dashboard = request.app.state.dashboard
    try:
        body = await _json_object(request)
        if "name" in body:
            await dashboard.select_city(str(body["name"]))
        elif "latitude" in body and "longitude" in body:
            await dashboard.pick_point(float(body["latitude"]), float(body["longitude"]))
        else:
            raise ValueError("Provide either 'name' or 'latitude' and 'longitude'")
    except (ValueError, TypeError) as e:
        return _bad_request(str(e))
    return JSONResponse(dashboard.view())


async def select_date(request: Request) -> JSONResponse:
    dashboard: Dashboard = request.app.state.dashboard
    try:
        body = await _json_object(request)
        day = date.fromisoformat(str(body["date"]))
    except KeyError:
        return _bad_request("Missing 'date'")
    except (ValueError, TypeError) as e:
        return _bad_request(str(e))
    await dashboard.select_date(day)
    return JSONResponse(dashboard.view())


async def reload_weather(request: Request) -> JSONResponse:
    """Manual retry after a failed load."""
    dashboard: Dashboard = request.app.state.dashboard
    await dashboard.reload()
    return JSONResponse(dashboard.view())


async def run_analysis(request: Request) -> JSONResponse:
    dashboard: Dashboard = request.app.state.dashboard
    if not await dashboard.analyze():
        detail = (
            "An analysis is already running"
            if dashboard.state.analysis_status == "analyzing"
            else "No hourly data for the selected day"
        )
        return JSONResponse({"detail": detail}, status_code=409)
    return JSONResponse(dashboard.view())


routes = [
    Route("/api/locations", list_locations, methods=["GET"]),
    Route("/api/dashboard", get_dashboard, methods=["GET"]),
    Route("/api/location", select_location, methods=["POST"]),
    Route("/api/date", select_date, methods=["POST"]),
    Route("/api/reload", reload_weather, methods=["POST"]),
    Route("/api/analysis", run_analysis, methods=["POST"]),
]


def create_app(dashboard: Dashboard | None = None) -> Starlette:
    """Build the ASGI app. Without a dashboard, one is created on startup and loaded once."""

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette):
        if dashboard is not None:
            yield
            return
        async with create_http_client() as client:
            app.state.dashboard = Dashboard(client)
            await app.state.dashboard.load_weather()
            yield

    app = Starlette(routes=routes, lifespan=lifespan)
    if dashboard is not None:
        app.state.dashboard = dashboard
    return app


app = create_app()


def main() -> None:
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    logger.info("Starting weather archive dashboard on %s:%d", HOST, PORT)
    uvicorn.run(app, host=HOST, port=PORT)
