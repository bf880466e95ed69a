# ABOUTME: HTTP client construction for the Open-Meteo calls.
# ABOUTME: Wraps httpx.AsyncClient in a tenacity retry transport for transient failures.

import httpx
from pydantic_ai.retries import AsyncTenacityTransport, RetryConfig, wait_retry_after
from tenacity import retry_if_exception_type, stop_after_attempt

REQUEST_TIMEOUT_SECONDS = 30.0


class BufferedTransport(httpx.AsyncBaseTransport):
    """Reads each response body before handing it on.

    The retry transport closes a response it rejects, so the body has to be in
    memory already for the caller to read the upstream's error reason.
    """

    def __init__(self, wrapped: httpx.AsyncBaseTransport):
        self.wrapped = wrapped

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        response = await self.wrapped.handle_async_request(request)
        await response.aread()
        return response

    async def aclose(self) -> None:
        await self.wrapped.aclose()


def _raise_for_transient_status(response: httpx.Response) -> None:
    """Raise only for statuses worth retrying; other errors reach the caller untouched."""
    if response.status_code == 429 or response.status_code >= 500:
        response.raise_for_status()


def create_http_client(transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    """Create an httpx client with tenacity retry on transient HTTP errors.

    Retries connection errors, timeouts, and 429/5xx responses with exponential backoff.
    A 400 is passed through so the weather service can treat it as "no data".
    """
    retrying = AsyncTenacityTransport(
        RetryConfig(
            retry=retry_if_exception_type((httpx.ConnectError, httpx.ReadTimeout, httpx.HTTPStatusError)),
            wait=wait_retry_after(max_wait=30),
            stop=stop_after_attempt(3),
            reraise=True,
        ),
        wrapped=BufferedTransport(transport or httpx.AsyncHTTPTransport()),
        validate_response=_raise_for_transient_status,
    )
    return httpx.AsyncClient(transport=retrying, timeout=REQUEST_TIMEOUT_SECONDS)
