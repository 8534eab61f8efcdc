"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import copy
import json
from typing import TYPE_CHECKING, Any
from unittest.mock import AsyncMock

import pytest
from aiohttp import ClientSession, web

from pylifxhttp.client import LifxClient


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable

    from aiohttp.test_utils import TestClient


TEST_TOKEN = "test-access-token"
TEST_USER_AGENT = "pylifxhttp-tests/1.0"

# Sample API responses
SAMPLE_LIGHT = {
    "id": "abcd",
    "power": "on",
    "brightness": 0.5,
    "color": {"hue": 120, "saturation": 1.0, "kelvin": 3500},
    "label": "Lamp",
    "connected": True,
}

SAMPLE_LIGHTS = [
    SAMPLE_LIGHT,
    {
        "id": "efgh",
        "power": "off",
        "brightness": 1.0,
        "color": {"hue": 0.0, "saturation": 0.0, "kelvin": 2700},
        "label": "Desk",
        "connected": False,
    },
]

SAMPLE_RESULTS = [
    {"id": "abcd", "status": "ok"},
    {"id": "efgh", "status": "offline"},
]


@pytest.fixture
async def mock_session() -> AsyncGenerator[ClientSession]:
    """Create a mock aiohttp ClientSession.

    Yields:
        Mock ClientSession for testing.
    """
    session = AsyncMock(spec=ClientSession)
    session.closed = False

    async def mock_close() -> None:
        session.closed = True

    session.close = mock_close

    yield session

    if not session.closed:
        await session.close()


@pytest.fixture
def sample_light() -> dict[str, Any]:
    """Create a valid light JSON object."""
    return copy.deepcopy(SAMPLE_LIGHT)


@pytest.fixture
def sample_lights() -> list[dict[str, Any]]:
    """Create a valid array of light JSON objects."""
    return copy.deepcopy(SAMPLE_LIGHTS)


@pytest.fixture
def sample_results() -> list[dict[str, Any]]:
    """Create a valid array of result JSON objects."""
    return copy.deepcopy(SAMPLE_RESULTS)


@pytest.fixture
def recorded_requests() -> list[dict[str, Any]]:
    """Requests received by the fake LIFX API, in arrival order."""
    return []


@pytest.fixture
def app(recorded_requests: list[dict[str, Any]]) -> web.Application:
    """Create a fake LIFX HTTP API application."""
    app = web.Application()

    async def record(request: web.Request) -> None:
        body = await request.read()
        recorded_requests.append(
            {
                "method": request.method,
                "path": request.path,
                "raw_path": request.raw_path,
                "selector": request.match_info.get("selector"),
                "headers": dict(request.headers),
                "body": body,
                "json": json.loads(body) if body else None,
            }
        )

    async def list_lights(request: web.Request) -> web.Response:
        """Mock GET /v1beta1/lights/{selector} endpoint."""
        await record(request)
        if request.match_info["selector"] == "id:abcd":
            # Single-light selectors answer with a bare object
            return web.json_response(SAMPLE_LIGHT)
        return web.json_response(SAMPLE_LIGHTS)

    async def set_power(request: web.Request) -> web.Response:
        """Mock PUT /v1beta1/lights/{selector}/power endpoint."""
        await record(request)
        return web.json_response(SAMPLE_RESULTS)

    async def set_color(request: web.Request) -> web.Response:
        """Mock PUT /v1beta1/lights/{selector}/color endpoint."""
        await record(request)
        return web.json_response({"id": "abcd", "status": "timed_out"})

    app.router.add_get("/v1beta1/lights/{selector}", list_lights)
    app.router.add_put("/v1beta1/lights/{selector}/power", set_power)
    app.router.add_put("/v1beta1/lights/{selector}/color", set_color)

    return app


@pytest.fixture
def make_client(aiohttp_client: Any) -> Callable[..., Awaitable[LifxClient]]:
    """Factory creating a LifxClient pointed at a test server for an application.

    The client shares the test server's session, so it does not own it.
    """

    async def factory(application: web.Application, **kwargs: Any) -> LifxClient:
        server: TestClient = await aiohttp_client(application)
        return LifxClient(
            access_token=TEST_TOKEN,
            base_url=str(server.make_url("/v1beta1/")),
            user_agent=TEST_USER_AGENT,
            session=server.session,
            **kwargs,
        )

    return factory


@pytest.fixture
async def lifx_client(
    make_client: Callable[..., Awaitable[LifxClient]],
    app: web.Application,
) -> AsyncGenerator[LifxClient]:
    """Create a LifxClient talking to the fake LIFX API."""
    client = await make_client(app)

    async with client:
        yield client
