# ABOUTME: Shared test fixtures for the weather archive test suite.
# ABOUTME: Blocks real LLM calls and provides hourly record and mock HTTP client builders.

from datetime import datetime, timedelta
from unittest.mock import AsyncMock

import httpx
import pydantic_ai.models

from weather_archive.models import HourlyRecord

# Prevent accidental LLM calls during testing
pydantic_ai.models.ALLOW_MODEL_REQUESTS = False


def make_hours(start: datetime, count: int, **fields) -> list[HourlyRecord]:
    """Build count consecutive hourly records starting at start.

    Field values may be constants or callables taking the hour index.
    """
    records = []
    for i in range(count):
        values = {name: (value(i) if callable(value) else value) for name, value in fields.items()}
        records.append(HourlyRecord(time=start + timedelta(hours=i), **values))
    return records


def mock_client(json_data=None, status_code: int = 200) -> httpx.AsyncClient:
    """Create a mock httpx.AsyncClient that returns the given JSON response."""
    mock = AsyncMock(spec=httpx.AsyncClient)
    response = httpx.Response(status_code=status_code, json=json_data, request=httpx.Request("GET", "https://test"))
    mock.get.return_value = response
    return mock
