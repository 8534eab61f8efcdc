"""Python async client library for the LIFX cloud HTTP API.

This package turns light control operations into authenticated HTTP requests
and turns the API's JSON responses into validated, immutable records.

The library is organized into three layers:
1. **Request Layer** (pylifxhttp.request): Authenticated request construction
2. **Decode Layer** (pylifxhttp.decoder): JSON parsing and schema validation
3. **Client Layer** (pylifxhttp.client): aiohttp transport and serial completion delivery

Example:
    Basic usage:

    ```python
    from pylifxhttp import LifxClient

    async with LifxClient(access_token="c87c73a8...") as client:
        completion = await client.list_lights()
        if completion.error is not None:
            raise completion.error

        for light in completion.records:
            print(f"{light.label}: {light.brightness:.0%}")

        await client.set_lights_color("all", "hue:120 saturation:1.0", duration=1.0)
    ```
"""

from __future__ import annotations

from pylifxhttp.client import LifxClient
from pylifxhttp.const import VERSION
from pylifxhttp.decoder import LIGHT_SCHEMA, RESULT_SCHEMA, RecordSchema, decode, decode_lights, decode_results
from pylifxhttp.dispatcher import CompletionDispatcher
from pylifxhttp.exceptions import (
    DecodeError,
    InvalidParameterError,
    LifxError,
    LifxTimeoutError,
    ParseError,
    SchemaError,
    TransportError,
)
from pylifxhttp.models import (
    ClientConfig,
    Color,
    Completion,
    Light,
    LightsRequest,
    ResponseInfo,
    Result,
    ResultStatus,
    Selector,
    SelectorType,
)
from pylifxhttp.request import build_request


__version__ = VERSION

__all__ = [
    "LIGHT_SCHEMA",
    "RESULT_SCHEMA",
    "ClientConfig",
    "Color",
    "Completion",
    "CompletionDispatcher",
    "DecodeError",
    "InvalidParameterError",
    "LifxClient",
    "LifxError",
    "LifxTimeoutError",
    "Light",
    "LightsRequest",
    "ParseError",
    "RecordSchema",
    "ResponseInfo",
    "Result",
    "ResultStatus",
    "SchemaError",
    "Selector",
    "SelectorType",
    "TransportError",
    "__version__",
    "build_request",
    "decode",
    "decode_lights",
    "decode_results",
]
