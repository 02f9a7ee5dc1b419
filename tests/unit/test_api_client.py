"""Tests for ApiClient."""

import httpx
import pytest

from tasklist.client.api_client import ApiClient, ApiError


def _recording_transport(requests, status_code=200, body=None):
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status_code, json=body if body is not None else {})

    return httpx.MockTransport(handler)


@pytest.mark.unit
class TestApiClient:
    """Tests for ApiClient request handling."""

    async def test_sends_json_to_base_url(self):
        requests = []
        async with ApiClient("http://api.test/api/v1", transport=_recording_transport(requests)) as api:
            await api.request("POST", "/tasks", json={"title": "t"})

        assert str(requests[0].url) == "http://api.test/api/v1/tasks"
        assert requests[0].headers["content-type"] == "application/json"
        assert "authorization" not in requests[0].headers

    async def test_attaches_bearer_token(self):
        requests = []

        async def token_getter():
            return "abc"

        async with ApiClient("http://api.test", transport=_recording_transport(requests)) as api:
            api.set_token_getter(token_getter)
            await api.request("GET", "/tasks")

        assert requests[0].headers["authorization"] == "Bearer abc"

    async def test_token_getter_failure_sends_without_token(self):
        requests = []

        async def token_getter():
            raise RuntimeError("login required")

        async with ApiClient("http://api.test", transport=_recording_transport(requests)) as api:
            api.set_token_getter(token_getter)
            response = await api.request("GET", "/tasks")

        assert response.status_code == 200
        assert "authorization" not in requests[0].headers

    async def test_empty_token_is_not_sent(self):
        requests = []

        async def token_getter():
            return None

        async with ApiClient("http://api.test", transport=_recording_transport(requests)) as api:
            api.set_token_getter(token_getter)
            await api.request("GET", "/tasks")

        assert "authorization" not in requests[0].headers

    async def test_error_status_raises_api_error(self):
        transport = _recording_transport([], status_code=404, body={"error": "Task not found"})

        async with ApiClient("http://api.test", transport=transport) as api:
            with pytest.raises(ApiError) as exc_info:
                await api.request("GET", "/tasks/x")

        assert exc_info.value.status_code == 404
        assert exc_info.value.server_error == "Task not found"

    async def test_non_json_error_body(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(502, text="Bad Gateway"))

        async with ApiClient("http://api.test", transport=transport) as api:
            with pytest.raises(ApiError) as exc_info:
                await api.request("GET", "/tasks")

        assert exc_info.value.body == "Bad Gateway"
        assert exc_info.value.server_error is None
