# ABOUTME: Tests for the HTTP client factory and its retry predicate.
# ABOUTME: Checks which upstream statuses are retried and which are handed back to the service.

import httpx
import pytest

from weather_archive.deps import _raise_for_transient_status, create_http_client


def _response(status_code: int) -> httpx.Response:
    return httpx.Response(status_code, request=httpx.Request("GET", "https://test"))


class TestTransientStatus:
    @pytest.mark.parametrize("status_code", [429, 500, 502, 503])
    def test_transient_statuses_raise(self, status_code):
        """Rate limits and server errors raise so the transport retries them.

        Implementation: Runs the predicate on 429 and 5xx responses.
        Passing implies: Transient failures get exponential backoff.
        """
        with pytest.raises(httpx.HTTPStatusError):
            _raise_for_transient_status(_response(status_code))

    @pytest.mark.parametrize("status_code", [200, 400, 404])
    def test_other_statuses_pass_through(self, status_code):
        """Success and client errors are returned untouched.

        Implementation: Runs the predicate on 200/400/404 responses.
        Passing implies: A 400 reaches the weather service, which treats it as no data.
        """
        _raise_for_transient_status(_response(status_code))


class TestCreateHttpClient:
    @pytest.mark.asyncio
    async def test_builds_async_client(self):
        async with create_http_client() as client:
            assert isinstance(client, httpx.AsyncClient)

    @pytest.mark.asyncio
    async def test_rejected_response_body_is_still_readable(self):
        """After retries run out, the final error response still carries its streamed body.

        Implementation: Serves an unread streamed 502 through the client and reads the
        response attached to the raised HTTPStatusError.
        Passing implies: Closing the rejected response does not discard the upstream's reason.
        """

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                502,
                headers={"Retry-After": "0"},
                stream=httpx.ByteStream(b'{"error": true, "reason": "Gateway unavailable"}'),
            )

        async with create_http_client(httpx.MockTransport(handler)) as client:
            with pytest.raises(httpx.HTTPStatusError) as exc_info:
                await client.get("https://archive-api.open-meteo.com/v1/archive")
        assert exc_info.value.response.json()["reason"] == "Gateway unavailable"

    @pytest.mark.asyncio
    async def test_success_after_transient_failure(self):
        """A 503 followed by a 200 returns the 200 body.

        Implementation: Serves one streamed 503, then a streamed 200.
        Passing implies: Transient failures are retried transparently.
        """
        statuses = iter([503, 200])

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                next(statuses), headers={"Retry-After": "0"}, stream=httpx.ByteStream(b'{"hourly": {}}')
            )

        async with create_http_client(httpx.MockTransport(handler)) as client:
            resp = await client.get("https://api.open-meteo.com/v1/forecast")
        assert resp.status_code == 200
        assert resp.json() == {"hourly": {}}
