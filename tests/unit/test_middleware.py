"""Unit tests for middleware."""
import pytest
from unittest.mock import Mock

from campusvibe.middleware.logging import LoggingMiddleware


def make_request(path="/api/v1/events", headers=None):
    request = Mock()
    request.state = Mock(spec=[])
    request.method = "GET"
    request.url = Mock()
    request.url.path = path
    request.client = Mock()
    request.client.host = "127.0.0.1"
    request.query_params = {}
    request.headers = headers or {}
    return request


def make_response(status_code=200):
    response = Mock()
    response.headers = {}
    response.status_code = status_code
    return response


@pytest.mark.unit
class TestLoggingMiddleware:
    """Test logging middleware."""

    @pytest.mark.asyncio
    async def test_request_id_added_to_state_and_response(self):
        request = make_request()
        response = make_response()

        async def call_next(req):
            assert isinstance(req.state.request_id, str)
            return response

        result = await LoggingMiddleware(Mock()).dispatch(request, call_next)

        assert result.headers["X-Request-ID"] == request.state.request_id
        assert len(request.state.request_id) > 0

    @pytest.mark.asyncio
    async def test_upstream_request_id_reused(self):
        request = make_request(headers={"X-Request-ID": "proxy-123"})

        async def call_next(req):
            return make_response()

        result = await LoggingMiddleware(Mock()).dispatch(request, call_next)

        assert request.state.request_id == "proxy-123"
        assert result.headers["X-Request-ID"] == "proxy-123"

    @pytest.mark.asyncio
    async def test_unique_ids_per_request(self):
        middleware = LoggingMiddleware(Mock())
        ids = set()

        async def call_next(req):
            return make_response()

        for _ in range(5):
            request = make_request()
            await middleware.dispatch(request, call_next)
            ids.add(request.state.request_id)

        assert len(ids) == 5

    @pytest.mark.asyncio
    async def test_exception_propagates(self):
        async def call_next(req):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            await LoggingMiddleware(Mock()).dispatch(make_request(), call_next)

    @pytest.mark.asyncio
    async def test_health_check_passes_through(self):
        async def call_next(req):
            return make_response()

        result = await LoggingMiddleware(Mock()).dispatch(make_request(path="/health"), call_next)
        assert result.status_code == 200
