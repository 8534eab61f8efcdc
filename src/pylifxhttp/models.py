"""Data models for LIFX HTTP API requests and responses."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pylifxhttp.const import (
    DEFAULT_BASE_URL,
    DEFAULT_KELVIN,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    ENV_ACCESS_TOKEN,
    ENV_BASE_URL,
    ENV_TIMEOUT,
    ENV_USER_AGENT,
    HUE_MAX,
    HUE_MIN,
    KELVIN_MAX,
    KELVIN_MIN,
    SATURATION_MAX,
    SATURATION_MIN,
)
from pylifxhttp.exceptions import InvalidParameterError, LifxError


if TYPE_CHECKING:
    from multidict import CIMultiDictProxy


__all__ = [
    "ClientConfig",
    "Color",
    "Completion",
    "Light",
    "LightsRequest",
    "ResponseInfo",
    "Result",
    "ResultStatus",
    "Selector",
    "SelectorType",
]

T = TypeVar("T")


@dataclass(frozen=True)
class Color:
    """Color reported by a light.

    Attributes:
        hue: Hue in degrees (0-360).
        saturation: Saturation as a fraction (0-1).
        kelvin: Color temperature in Kelvin.
    """

    hue: float
    saturation: float
    kelvin: int

    @classmethod
    def color(cls, hue: float, saturation: float, kelvin: int = DEFAULT_KELVIN) -> Color:
        """Create a validated hue/saturation color.

        Raises:
            InvalidParameterError: If hue or saturation is outside its valid range.
        """
        if not HUE_MIN <= hue <= HUE_MAX:
            msg = f"Hue must be {HUE_MIN}-{HUE_MAX}, got {hue}"
            raise InvalidParameterError(msg, parameter_name="hue", value=hue)
        if not SATURATION_MIN <= saturation <= SATURATION_MAX:
            msg = f"Saturation must be {SATURATION_MIN}-{SATURATION_MAX}, got {saturation}"
            raise InvalidParameterError(msg, parameter_name="saturation", value=saturation)
        return cls(hue=float(hue), saturation=float(saturation), kelvin=kelvin)

    @classmethod
    def white(cls, kelvin: int, saturation: float = 0.0) -> Color:
        """Create a validated white color at the given temperature.

        Raises:
            InvalidParameterError: If kelvin or saturation is outside its valid range.
        """
        if not KELVIN_MIN <= kelvin <= KELVIN_MAX:
            msg = f"Kelvin must be {KELVIN_MIN}-{KELVIN_MAX}, got {kelvin}"
            raise InvalidParameterError(msg, parameter_name="kelvin", value=kelvin)
        return cls.color(0.0, saturation, kelvin)

    @property
    def is_white(self) -> bool:
        """Check if the color has no saturation."""
        return self.saturation == 0.0

    def to_query(self) -> str:
        """Render the color as a LIFX color expression.

        Example:
            >>> Color.color(120, 1.0).to_query()
            'hue:120.0 saturation:1.0 kelvin:3500'
        """
        return f"hue:{float(self.hue)} saturation:{float(self.saturation)} kelvin:{int(self.kelvin)}"


@dataclass(frozen=True)
class Light:
    """Snapshot of one light's reported state.

    Attributes:
        id: Unique device identifier.
        power: Whether the light is on.
        brightness: Brightness as a fraction (0-1).
        color: Current color.
        label: Human-readable device name.
        connected: Whether the light is reachable by the cloud.
    """

    id: str
    power: bool
    brightness: float
    color: Color
    label: str
    connected: bool


class ResultStatus(Enum):
    """Outcome of a control command for one device."""

    OK = "ok"
    TIMED_OUT = "timed_out"
    OFFLINE = "offline"
    UNKNOWN = "unknown"

    @classmethod
    def from_api(cls, value: Any) -> ResultStatus:
        """Map an API status string, falling back to UNKNOWN."""
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
        return cls.UNKNOWN


@dataclass(frozen=True)
class Result:
    """Per-device outcome of a power or color command.

    Attributes:
        id: Target device identifier.
        status: Command outcome.
    """

    id: str
    status: ResultStatus

    @property
    def is_ok(self) -> bool:
        """Check if the command succeeded on this device."""
        return self.status is ResultStatus.OK


class SelectorType(Enum):
    """Kinds of LIFX selectors."""

    ALL = "all"
    ID = "id"
    LABEL = "label"
    GROUP_ID = "group_id"
    GROUP = "group"
    LOCATION_ID = "location_id"
    LOCATION = "location"


@dataclass(frozen=True)
class Selector:
    """Typed selector identifying which lights a command targets.

    Example:
        >>> str(Selector.label("Kitchen"))
        'label:Kitchen'
        >>> str(Selector.all())
        'all'
    """

    type: SelectorType
    value: str = ""

    @classmethod
    def all(cls) -> Selector:
        """Select every light on the account."""
        return cls(SelectorType.ALL)

    @classmethod
    def id(cls, light_id: str) -> Selector:
        """Select a single light by id."""
        return cls(SelectorType.ID, light_id)

    @classmethod
    def label(cls, label: str) -> Selector:
        """Select lights by label."""
        return cls(SelectorType.LABEL, label)

    @classmethod
    def group(cls, name: str) -> Selector:
        """Select lights in a group by group name."""
        return cls(SelectorType.GROUP, name)

    @classmethod
    def location(cls, name: str) -> Selector:
        """Select lights in a location by location name."""
        return cls(SelectorType.LOCATION, name)

    def __str__(self) -> str:
        if self.type is SelectorType.ALL:
            return SelectorType.ALL.value
        return f"{self.type.value}:{self.value}"


@dataclass(frozen=True)
class ClientConfig:
    """Connection configuration, fixed for the lifetime of a client.

    Attributes:
        access_token: LIFX cloud personal access token.
        base_url: Root URL of the HTTP API (default: https://api.lifx.com/v1beta1/).
        user_agent: User-Agent header value (default: pylifxhttp/<version>).
        timeout: Per-request timeout in seconds (default: 5.0).
    """

    access_token: str
    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        """Validate the configuration.

        Raises:
            ValueError: If the access token is empty or the timeout is not positive.
        """
        if not self.access_token:
            msg = "Access token cannot be empty"
            raise ValueError(msg)
        if self.timeout <= 0:
            msg = f"Timeout must be positive, got {self.timeout}"
            raise ValueError(msg)

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> ClientConfig:
        """Build a configuration from LIFX_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ.

        Raises:
            ValueError: If LIFX_ACCESS_TOKEN is missing or LIFX_TIMEOUT is not a number.
        """
        env = os.environ if environ is None else environ
        token = env.get(ENV_ACCESS_TOKEN)
        if not token:
            msg = f"Missing required environment variable {ENV_ACCESS_TOKEN}"
            raise ValueError(msg)

        return cls(
            access_token=token,
            base_url=env.get(ENV_BASE_URL) or DEFAULT_BASE_URL,
            user_agent=env.get(ENV_USER_AGENT) or DEFAULT_USER_AGENT,
            timeout=float(env.get(ENV_TIMEOUT) or DEFAULT_TIMEOUT),
        )


@dataclass(frozen=True)
class LightsRequest:
    """Fully built HTTP request.

    Attributes:
        method: HTTP method (GET, PUT).
        url: Absolute request URL.
        headers: Request headers.
        body: Serialized JSON body for writes.
    """

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None


@dataclass(frozen=True)
class ResponseInfo:
    """Snapshot of an HTTP response, detached from the connection.

    Attributes:
        status: HTTP status code.
        reason: HTTP reason phrase.
        headers: Response headers, case-insensitive. Repeated headers such as
            Set-Cookie keep every value.
        url: Final response URL.
    """

    status: int
    reason: str | None
    headers: CIMultiDictProxy[str]
    url: str


@dataclass(frozen=True)
class Completion(Generic[T]):
    """Single result message of a LIFX operation.

    ``records`` and ``error`` are mutually exclusive: when ``error`` is set,
    ``records`` is always empty.

    Attributes:
        request: The request that was sent.
        response: The HTTP response, or None when the transport failed.
        records: Decoded records (Light or Result).
        error: TransportError or DecodeError, or None on success.
    """

    request: LightsRequest
    response: ResponseInfo | None
    records: tuple[T, ...] = ()
    error: LifxError | None = None

    @property
    def ok(self) -> bool:
        """Check if the operation produced records without error."""
        return self.error is None
