"""Async client for the LIFX cloud HTTP API.

This module turns light control operations into authenticated HTTP requests,
sends them with aiohttp, decodes the responses and hands each result to the
caller through the client's serial completion dispatcher.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from aiohttp import ClientError, ClientSession, ClientTimeout
from multidict import CIMultiDict, CIMultiDictProxy

from pylifxhttp.const import DEFAULT_BASE_URL, DEFAULT_DURATION, DEFAULT_SELECTOR, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from pylifxhttp.decoder import LIGHT_SCHEMA, RESULT_SCHEMA, decode
from pylifxhttp.dispatcher import CompletionDispatcher
from pylifxhttp.exceptions import LifxTimeoutError, TransportError
from pylifxhttp.models import ClientConfig, Color, Completion, ResponseInfo
from pylifxhttp.request import build_request


if TYPE_CHECKING:
    from types import TracebackType

    from pylifxhttp.decoder import RecordSchema
    from pylifxhttp.dispatcher import CompletionHandler
    from pylifxhttp.models import Light, LightsRequest, Result, Selector

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class LifxClient:
    """Async client for the LIFX cloud HTTP API.

    Every operation returns a single ``Completion`` carrying the request, the
    response, the decoded records and an error. Operations never raise for
    transport or decode failures; those are reported in ``Completion.error``
    with an empty record tuple.

    An optional ``on_complete`` handler (sync or async) is invoked with the
    completion before the awaiting caller resumes. Handlers of one client run
    one at a time on the client's dispatcher, even when many operations are in
    flight concurrently.

    Example:
        Basic usage with automatic session management:

        ```python
        from pylifxhttp import LifxClient

        async with LifxClient(access_token="c87c73a8...") as client:
            completion = await client.list_lights()
            for light in completion.records:
                print(f"{light.label}: {'on' if light.power else 'off'}")

            await client.set_lights_power("all", True, duration=2.0)
            await client.set_lights_color("label:Kitchen", "blue saturation:0.5")
        ```

        Session injection and completion handlers:

        ```python
        from aiohttp import ClientSession
        from pylifxhttp import LifxClient, Selector

        def on_complete(completion):
            if completion.error is not None:
                print(f"Failed: {completion.error}")

        async with ClientSession() as session:
            async with LifxClient(access_token="c87c73a8...", session=session) as client:
                await asyncio.gather(
                    client.set_lights_power(Selector.group("Office"), False, on_complete=on_complete),
                    client.set_lights_power(Selector.group("Hall"), True, on_complete=on_complete),
                )
        ```

    Attributes:
        config: Immutable connection configuration.
    """

    def __init__(
        self,
        access_token: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        config: ClientConfig | None = None,
        session: ClientSession | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            access_token: LIFX cloud access token. Ignored when config is given.
            base_url: Base URL for the API. Defaults to the LIFX v1beta1 API.
            user_agent: User-Agent header value. Defaults to pylifxhttp/<version>.
            timeout: Per-request timeout in seconds.
            config: Optional pre-built ClientConfig, replacing the arguments above.
            session: Optional aiohttp ClientSession. If not provided, one will be
                created when entering the context manager.

        Raises:
            ValueError: If neither an access token nor a config is provided.
        """
        if config is None:
            if access_token is None:
                msg = "Either access_token or config must be provided"
                raise ValueError(msg)
            config = ClientConfig(
                access_token=access_token,
                base_url=base_url,
                user_agent=user_agent,
                timeout=timeout,
            )

        self._config = config
        self._session = session
        self._owns_session = session is None
        self._closed = False
        self._dispatcher = CompletionDispatcher(name=config.base_url)

    @classmethod
    def from_env(cls, *, session: ClientSession | None = None) -> LifxClient:
        """Create a client configured from LIFX_* environment variables.

        Raises:
            ValueError: If LIFX_ACCESS_TOKEN is not set.
        """
        return cls(config=ClientConfig.from_env(), session=session)

    @property
    def config(self) -> ClientConfig:
        """Get the connection configuration."""
        return self._config

    @property
    def dispatcher(self) -> CompletionDispatcher:
        """Get the serial completion dispatcher owned by this client."""
        return self._dispatcher

    async def __aenter__(self) -> LifxClient:
        """Enter the context manager.

        Creates session if needed.

        Returns:
            Self for use in async with statements.
        """
        if self._session is None:
            self._session = ClientSession()
            self._owns_session = True
        self._closed = False
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the context manager.

        Args:
            exc_type: Exception type if an exception occurred.
            exc_val: Exception value if an exception occurred.
            exc_tb: Exception traceback if an exception occurred.
        """
        await self.close()

    async def close(self) -> None:
        """Stop completion delivery and close the session if this client created it.

        Operations still in flight return their completion without invoking
        their handler.
        """
        self._closed = True
        await self._dispatcher.shutdown()

        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    # -------------------------------------------------------------------------
    # Light Endpoints
    # -------------------------------------------------------------------------

    async def list_lights(
        self,
        selector: str | Selector = DEFAULT_SELECTOR,
        *,
        on_complete: CompletionHandler | None = None,
    ) -> Completion[Light]:
        """Get the state of the selected lights.

        Args:
            selector: Which lights to list (default "all").
            on_complete: Optional handler invoked with the completion.

        Returns:
            Completion whose records are Light snapshots in API order.
        """
        request = build_request(self._config, f"/lights/{selector}", method="GET")
        return await self._perform(request, LIGHT_SCHEMA, on_complete)

    async def set_lights_power(
        self,
        selector: str | Selector,
        power: bool,
        duration: float = DEFAULT_DURATION,
        *,
        on_complete: CompletionHandler | None = None,
    ) -> Completion[Result]:
        """Turn the selected lights on or off.

        Args:
            selector: Which lights to control.
            power: True to turn on, False to turn off.
            duration: Transition time in seconds.
            on_complete: Optional handler invoked with the completion.

        Returns:
            Completion whose records are per-light Results.
        """
        parameters = {"state": "on" if power else "off", "duration": float(duration)}
        request = build_request(self._config, f"/lights/{selector}/power", method="PUT", parameters=parameters)
        return await self._perform(request, RESULT_SCHEMA, on_complete)

    async def set_lights_color(
        self,
        selector: str | Selector,
        color: str | Color,
        duration: float = DEFAULT_DURATION,
        power_on: bool = True,
        *,
        on_complete: CompletionHandler | None = None,
    ) -> Completion[Result]:
        """Change the color of the selected lights.

        Args:
            selector: Which lights to control.
            color: LIFX color expression (e.g., "red", "hue:120 saturation:1.0") or a Color.
            duration: Transition time in seconds.
            power_on: Whether to turn the lights on if they are off.
            on_complete: Optional handler invoked with the completion.

        Returns:
            Completion whose records are per-light Results.
        """
        expression = color.to_query() if isinstance(color, Color) else color
        parameters = {"color": expression, "duration": float(duration), "power_on": power_on}
        request = build_request(self._config, f"/lights/{selector}/color", method="PUT", parameters=parameters)
        return await self._perform(request, RESULT_SCHEMA, on_complete)

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    async def _perform(
        self,
        request: LightsRequest,
        schema: RecordSchema[T],
        on_complete: CompletionHandler | None,
    ) -> Completion[T]:
        """Send a request, decode its body and deliver the completion."""
        response, body, transport_error = await self._send(request)

        completion: Completion[Any]
        if transport_error is not None:
            completion = Completion(request=request, response=response, error=transport_error)
        else:
            records, decode_error = decode(body, schema)
            completion = Completion(
                request=request,
                response=response,
                records=tuple(records),
                error=decode_error,
            )

        if self._closed:
            # Deliveries after close must not restart the dispatcher worker
            _LOGGER.debug("Client closed, skipping delivery for %s", request.url)
            return completion

        return await self._dispatcher.deliver(completion, on_complete)

    async def _send(self, request: LightsRequest) -> tuple[ResponseInfo | None, bytes, TransportError | None]:
        """Send a request over the aiohttp session.

        Returns:
            Tuple of (response, body, error). On transport failure the response is
            None and the body is empty.

        Raises:
            RuntimeError: If session is not initialized or is closed.
        """
        if self._session is None:
            msg = "Session not initialized. Use 'async with' or provide a session."
            raise RuntimeError(msg)

        if self._session.closed:
            msg = "Session is closed. Cannot make request."
            raise RuntimeError(msg)

        timeout = ClientTimeout(total=self._config.timeout)
        _LOGGER.debug("%s %s", request.method, request.url)

        try:
            async with self._session.request(
                request.method,
                request.url,
                headers=request.headers,
                data=request.body,
                timeout=timeout,
            ) as response:
                body = await response.read()
                info = ResponseInfo(
                    status=response.status,
                    reason=response.reason,
                    headers=CIMultiDictProxy(CIMultiDict(response.headers)),
                    url=str(response.url),
                )

        except TimeoutError as err:
            _LOGGER.warning("Request to %s timed out after %.1fs", request.url, self._config.timeout)
            error: TransportError = LifxTimeoutError(
                f"Request timed out after {self._config.timeout}s",
                cause=err,
            )
            error.__cause__ = err
            return None, b"", error

        except ClientError as err:
            _LOGGER.warning("Connection error for %s: %s", request.url, err)
            error = TransportError(str(err) or type(err).__name__, cause=err)
            error.__cause__ = err
            return None, b"", error

        _LOGGER.debug("Received HTTP %d from %s (%d bytes)", info.status, request.url, len(body))
        return info, body, None
