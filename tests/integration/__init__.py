"""Integration tests for pylifxhttp library.

These tests use a real LIFX access token from the .env file and make actual API
calls against the lights on that account. They are marked with
@pytest.mark.integration and skipped by default.

To run integration tests:
    pytest tests/integration -v -m integration

Environment variables read from .env:
    LIFX_ACCESS_TOKEN: Personal access token (tests skip when missing)
    LIFX_BASE_URL: API base URL (optional, defaults to production)
    LIFX_TEST_SELECTOR: Selector of the lights to control (optional, defaults to "all")
"""
