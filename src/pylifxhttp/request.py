"""Request construction for the LIFX HTTP API."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from pylifxhttp.models import LightsRequest


if TYPE_CHECKING:
    from pylifxhttp.models import ClientConfig


__all__ = ["build_request", "join_url"]

# Characters LIFX selectors use that must survive path encoding
_SAFE_PATH_CHARS = "/:,|"


def join_url(base_url: str, path_component: str) -> str:
    """Append a path component to a base URL with exactly one separator.

    Example:
        >>> join_url("https://api.lifx.com/v1beta1/", "/lights/all")
        'https://api.lifx.com/v1beta1/lights/all'
    """
    path = quote(path_component.lstrip("/"), safe=_SAFE_PATH_CHARS)
    return f"{base_url.rstrip('/')}/{path}"


def build_request(
    config: ClientConfig,
    path_component: str,
    *,
    method: str = "GET",
    parameters: dict[str, Any] | None = None,
) -> LightsRequest:
    """Build an authenticated request for an API path.

    Args:
        config: Client configuration providing base URL, token and user agent.
        path_component: Path relative to the base URL (e.g., "/lights/all").
        method: HTTP method.
        parameters: Optional JSON body parameters for writes.

    Returns:
        LightsRequest with authentication headers and serialized body.
    """
    headers = {
        "Authorization": f"Bearer {config.access_token}",
        "Accept": "application/json",
        "User-Agent": config.user_agent,
    }

    body = None
    if parameters is not None:
        body = json.dumps(parameters, separators=(",", ":")).encode("utf-8")
        headers["Content-Type"] = "application/json"

    return LightsRequest(
        method=method,
        url=join_url(config.base_url, path_component),
        headers=headers,
        body=body,
    )
