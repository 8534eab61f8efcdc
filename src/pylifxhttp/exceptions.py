"""Custom exceptions for pylifxhttp library.

Every failure of a LIFX operation is one of two kinds:

- ``TransportError``: the request never produced a response body (connection
  failure, timeout).
- ``DecodeError``: a body arrived but could not be turned into records, either
  because it is not JSON (``ParseError``) or because a record is missing a
  required property (``SchemaError``).
"""

from __future__ import annotations

from typing import Any


class LifxError(Exception):
    """Base exception for all LIFX errors."""


class TransportError(LifxError):
    """Exception raised for network failures from the underlying transport.

    Attributes:
        cause: The original transport exception, if any.
    """

    def __init__(self, message: str = "", cause: BaseException | None = None) -> None:
        """Initialize TransportError.

        Args:
            message: Error message.
            cause: The original transport exception, if any.
        """
        super().__init__(message)
        self.cause = cause


class LifxTimeoutError(TransportError):
    """Exception raised when a request exceeds the configured timeout."""


class DecodeError(LifxError):
    """Exception raised when a response body cannot be decoded."""


class ParseError(DecodeError):
    """Exception raised when a response body is not valid JSON."""


class SchemaError(DecodeError):
    """Exception raised when a JSON record fails required-field validation.

    Attributes:
        fields: Paths of the missing or mistyped properties (e.g. "color.kelvin").
    """

    def __init__(self, message: str = "", fields: tuple[str, ...] = ()) -> None:
        """Initialize SchemaError.

        Args:
            message: Error message.
            fields: Paths of the missing or mistyped properties.
        """
        super().__init__(message)
        self.fields = fields


class InvalidParameterError(LifxError):
    """Exception raised for invalid parameter values.

    Attributes:
        parameter_name: Optional name of the invalid parameter.
        value: Optional value that was invalid.
    """

    def __init__(
        self,
        message: str = "",
        parameter_name: str | None = None,
        value: Any = None,
    ) -> None:
        """Initialize InvalidParameterError.

        Args:
            message: Error message.
            parameter_name: Optional name of the invalid parameter.
            value: Optional value that was invalid.
        """
        super().__init__(message)
        self.parameter_name = parameter_name
        self.value = value
