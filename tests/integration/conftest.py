"""Pytest configuration and fixtures for integration tests."""

from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from dotenv import load_dotenv

from pylifxhttp import ClientConfig, LifxClient


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator


# Load .env file from project root
env_path = Path(__file__).parents[2] / ".env"
load_dotenv(env_path)


@pytest.fixture(scope="session")
def integration_config() -> ClientConfig:
    """Load integration test configuration from environment.

    Returns:
        ClientConfig built from LIFX_* variables.
    """
    if not os.getenv("LIFX_ACCESS_TOKEN"):
        pytest.skip("LIFX_ACCESS_TOKEN not set; create a .env file to run integration tests")

    return ClientConfig.from_env()


@pytest.fixture(scope="session")
def test_selector() -> str:
    """Get the selector of the lights integration tests may control."""
    return os.getenv("LIFX_TEST_SELECTOR", "all")


@pytest.fixture
async def client(integration_config: ClientConfig) -> AsyncGenerator[LifxClient]:
    """Create a client against the real LIFX API."""
    async with LifxClient(config=integration_config) as client:
        yield client


@pytest.fixture(autouse=True)
async def rate_limit_delay(request: pytest.FixtureRequest) -> AsyncGenerator[None]:
    """Add delay between integration tests to stay under the API rate limit."""
    yield
    if "integration" in request.keywords:
        await asyncio.sleep(1.0)
