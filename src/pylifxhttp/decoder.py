"""Decoding of LIFX API responses into typed records.

Decoding runs in three separate steps:

1. **Parse**: the body must be JSON, otherwise the call fails with ``ParseError``.
2. **Validate**: the JSON root is normalized into a batch (a single object
   becomes a one-element batch) and every element is checked against a
   ``RecordSchema``. The first invalid element fails the whole batch with
   ``SchemaError``; partial batches are never returned.
3. **Build**: only a fully valid batch is turned into immutable records.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pylifxhttp.const import MISSING_PROPERTIES_MESSAGE
from pylifxhttp.exceptions import DecodeError, ParseError, SchemaError
from pylifxhttp.models import Color, Light, Result, ResultStatus


if TYPE_CHECKING:
    from collections.abc import Callable


__all__ = [
    "LIGHT_SCHEMA",
    "RESULT_SCHEMA",
    "FieldRule",
    "RecordSchema",
    "Validation",
    "decode",
    "decode_lights",
    "decode_results",
    "normalize_batch",
]

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


def _is_string(value: Any) -> bool:
    return isinstance(value, str)


def _is_number(value: Any) -> bool:
    # bool is a subclass of int but never a JSON number
    return isinstance(value, int | float) and not isinstance(value, bool)


def _is_integer(value: Any) -> bool:
    if isinstance(value, float):
        return value.is_integer()
    return isinstance(value, int) and not isinstance(value, bool)


def _is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def _is_object(value: Any) -> bool:
    return isinstance(value, dict)


@dataclass(frozen=True)
class FieldRule:
    """Required property of a JSON object.

    Attributes:
        name: Property name.
        check: Predicate the property value must satisfy.
        nested: Rules applied to the value when it is itself an object.
    """

    name: str
    check: Callable[[Any], bool]
    nested: tuple[FieldRule, ...] = ()


@dataclass(frozen=True)
class Validation:
    """Outcome of validating one JSON element.

    Attributes:
        invalid_fields: Paths of missing or mistyped properties. Empty when valid.
    """

    invalid_fields: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        """Check if the element passed validation."""
        return not self.invalid_fields


def _check_fields(obj: dict[str, Any], rules: tuple[FieldRule, ...], prefix: str = "") -> list[str]:
    invalid: list[str] = []
    for rule in rules:
        path = f"{prefix}{rule.name}"
        if rule.name not in obj or not rule.check(obj[rule.name]):
            invalid.append(path)
        elif rule.nested:
            invalid.extend(_check_fields(obj[rule.name], rule.nested, prefix=f"{path}."))
    return invalid


@dataclass(frozen=True)
class RecordSchema(Generic[T]):
    """Required-field schema and constructor for one record type.

    Attributes:
        name: Record type name used in log messages.
        fields: Required properties.
        build: Constructs the record from an already validated object.
    """

    name: str
    fields: tuple[FieldRule, ...]
    build: Callable[[dict[str, Any]], T]

    def validate(self, element: Any) -> Validation:
        """Check presence and type of every required property."""
        if not isinstance(element, dict):
            return Validation(invalid_fields=("<root>",))
        return Validation(invalid_fields=tuple(_check_fields(element, self.fields)))


def _build_light(obj: dict[str, Any]) -> Light:
    color = obj["color"]
    return Light(
        id=obj["id"],
        power=obj["power"] == "on",
        brightness=float(obj["brightness"]),
        color=Color(
            hue=float(color["hue"]),
            saturation=float(color["saturation"]),
            kelvin=int(color["kelvin"]),
        ),
        label=obj["label"],
        connected=obj["connected"],
    )


def _build_result(obj: dict[str, Any]) -> Result:
    # Status is lenient: missing or unrecognized values become UNKNOWN
    return Result(id=obj["id"], status=ResultStatus.from_api(obj.get("status")))


LIGHT_SCHEMA: RecordSchema[Light] = RecordSchema(
    name="light",
    fields=(
        FieldRule("id", _is_string),
        FieldRule("power", _is_string),
        FieldRule("brightness", _is_number),
        FieldRule(
            "color",
            _is_object,
            nested=(
                FieldRule("hue", _is_number),
                FieldRule("saturation", _is_number),
                FieldRule("kelvin", _is_integer),
            ),
        ),
        FieldRule("label", _is_string),
        FieldRule("connected", _is_boolean),
    ),
    build=_build_light,
)

RESULT_SCHEMA: RecordSchema[Result] = RecordSchema(
    name="result",
    fields=(FieldRule("id", _is_string),),
    build=_build_result,
)


def normalize_batch(root: Any) -> list[Any]:
    """Turn a JSON root into a decode batch.

    An object becomes a one-element batch, an array is used as is, and any
    other root yields an empty batch.
    """
    if isinstance(root, dict):
        return [root]
    if isinstance(root, list):
        return root
    return []


def decode(data: bytes | str, schema: RecordSchema[T]) -> tuple[list[T], DecodeError | None]:
    """Decode a response body into records.

    Args:
        data: Raw response body.
        schema: Schema of the expected record type.

    Returns:
        Tuple of (records, error). On error the record list is always empty.

    Example:
        >>> lights, error = decode(b'[]', LIGHT_SCHEMA)
        >>> lights, error
        ([], None)
    """
    try:
        root = json.loads(data)
    except (ValueError, RecursionError) as err:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors; RecursionError comes from deep nesting
        _LOGGER.warning("Failed to parse %s response: %s", schema.name, err)
        return [], ParseError(f"Response is not valid JSON: {err}")

    batch = normalize_batch(root)

    for index, element in enumerate(batch):
        validation = schema.validate(element)
        if not validation.ok:
            _LOGGER.warning(
                "Invalid %s at index %d, missing or mistyped: %s",
                schema.name,
                index,
                ", ".join(validation.invalid_fields),
            )
            return [], SchemaError(MISSING_PROPERTIES_MESSAGE, fields=validation.invalid_fields)

    records = [schema.build(element) for element in batch]
    _LOGGER.debug("Decoded %d %s record(s)", len(records), schema.name)
    return records, None


def decode_lights(data: bytes | str) -> tuple[list[Light], DecodeError | None]:
    """Decode a /lights response body."""
    return decode(data, LIGHT_SCHEMA)


def decode_results(data: bytes | str) -> tuple[list[Result], DecodeError | None]:
    """Decode a /power or /color response body."""
    return decode(data, RESULT_SCHEMA)
