"""Scalar codecs for the built-in GraphQL value types.

Each handler knows the textual form of a scalar (``parse``/``format``) and
its JSON form on the wire (``serialize``/``deserialize``). Malformed input
raises InvalidInputError.

The ``Boolean``, ``Int``, ``Float``, ``ID``, ``Date`` and ``DateTime``
aliases are pydantic annotated types enforcing the same wire rules when a
response is decoded into a model:

    class Bill(GraphQLModel):
        id: ID
        amount: Int
        issued: Date

Custom scalars are added to a registry:

    class MoneyHandler:
        wire_type = "Money"
        python_type = "Decimal"

        def parse(self, text): return Decimal(text)
        def format(self, value): return str(value)
        def serialize(self, value): return str(value)
        def deserialize(self, value): return Decimal(value)

    registry = ScalarRegistry()
    registry.register(MoneyHandler())
"""

import math
import re
from datetime import date, datetime, timedelta, timezone
from typing import Annotated, Any, Protocol, runtime_checkable

from pydantic import Field, PlainSerializer, PlainValidator

from .errors import InvalidInputError

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

_INT_TEXT = re.compile(r"[+-]?[0-9]+")
_FLOAT_TEXT = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*(?:[eE][+-]?[0-9]+)?|\.[0-9]+(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)
_DATE_TEXT = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_DATETIME_TEXT = re.compile(
    r"(?P<date>[0-9]{4}-[0-9]{2}-[0-9]{2})[Tt]"
    r"(?P<time>[0-9]{2}:[0-9]{2}:[0-9]{2})(?:\.(?P<fraction>[0-9]+))?"
    r"(?P<offset>[Zz]|[+-][0-9]{2}:[0-9]{2})"
)


@runtime_checkable
class ScalarHandler(Protocol):
    """Protocol for scalar codecs.

    Attributes:
        wire_type: The GraphQL type name (e.g., "Int", "Date")
        python_type: The Python type used for values (e.g., "int", "date")
    """

    wire_type: str
    python_type: str

    def parse(self, text: str) -> Any:
        """Parse the textual form of a value."""
        ...

    def format(self, value: Any) -> str:
        """Render a value in its textual form."""
        ...

    def serialize(self, value: Any) -> Any:
        """Convert a value to its JSON form."""
        ...

    def deserialize(self, value: Any) -> Any:
        """Convert a JSON value to a Python value."""
        ...


def _check_int(value: int) -> int:
    if not INT_MIN <= value <= INT_MAX:
        raise InvalidInputError(f"Int value out of 32-bit range: {value}")
    return value


class BooleanHandler:
    """Boolean: ``true``/``false`` text, JSON boolean on the wire."""

    wire_type = "Boolean"
    python_type = "bool"

    def parse(self, text: str) -> bool:
        if text == "true":
            return True
        if text == "false":
            return False
        raise InvalidInputError(f"Invalid Boolean value: {text!r}")

    def format(self, value: bool) -> str:
        return "true" if self.serialize(value) else "false"

    def serialize(self, value: bool) -> bool:
        if not isinstance(value, bool):
            raise InvalidInputError(f"Expected a bool, got {type(value).__name__}")
        return value

    def deserialize(self, value: Any) -> bool:
        if not isinstance(value, bool):
            raise InvalidInputError(f"Invalid Boolean value: {value!r}")
        return value


class IntHandler:
    """Int: signed 32-bit integer."""

    wire_type = "Int"
    python_type = "int"

    def parse(self, text: str) -> int:
        if not _INT_TEXT.fullmatch(text):
            raise InvalidInputError(f"Invalid Int value: {text!r}")
        return _check_int(int(text))

    def format(self, value: int) -> str:
        return str(self.serialize(value))

    def serialize(self, value: int) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidInputError(f"Expected an int, got {type(value).__name__}")
        return _check_int(value)

    def deserialize(self, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidInputError(f"Invalid Int value: {value!r}")
        return _check_int(value)


class FloatHandler:
    """Float: IEEE 754 double."""

    wire_type = "Float"
    python_type = "float"

    def parse(self, text: str) -> float:
        if not _FLOAT_TEXT.fullmatch(text):
            raise InvalidInputError(f"Invalid Float value: {text!r}")
        return float(text)

    def format(self, value: float) -> str:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidInputError(f"Expected a float, got {type(value).__name__}")
        return repr(float(value))

    def serialize(self, value: float) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidInputError(f"Expected a float, got {type(value).__name__}")
        if not math.isfinite(value):
            raise InvalidInputError(f"Float value has no JSON form: {value!r}")
        return float(value)

    def deserialize(self, value: Any) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidInputError(f"Invalid Float value: {value!r}")
        return float(value)


class IDHandler:
    """ID: opaque string identifier."""

    wire_type = "ID"
    python_type = "str"

    def parse(self, text: str) -> str:
        return text

    def format(self, value: str) -> str:
        return self.serialize(value)

    def serialize(self, value: str) -> str:
        if not isinstance(value, str):
            raise InvalidInputError(f"Expected a str, got {type(value).__name__}")
        return value

    def deserialize(self, value: Any) -> str:
        if not isinstance(value, str):
            raise InvalidInputError(f"Invalid ID value: {value!r}")
        return value


class DateHandler:
    """Date: calendar date as ``YYYY-MM-DD``."""

    wire_type = "Date"
    python_type = "date"

    def parse(self, text: str) -> date:
        if not _DATE_TEXT.fullmatch(text):
            raise InvalidInputError(f"Invalid Date value: {text!r}")
        try:
            return date.fromisoformat(text)
        except ValueError as e:
            raise InvalidInputError(f"Invalid Date value: {text!r}: {e}") from e

    def format(self, value: date) -> str:
        if isinstance(value, datetime) or not isinstance(value, date):
            raise InvalidInputError(f"Expected a date, got {type(value).__name__}")
        return value.isoformat()

    def serialize(self, value: date) -> str:
        return self.format(value)

    def deserialize(self, value: Any) -> date:
        if not isinstance(value, str):
            raise InvalidInputError(f"Invalid Date value: {value!r}")
        return self.parse(value)


class DateTimeHandler:
    """DateTime: RFC 3339 timestamp with an explicit offset."""

    wire_type = "DateTime"
    python_type = "datetime"

    def parse(self, text: str) -> datetime:
        match = _DATETIME_TEXT.fullmatch(text)
        if not match:
            raise InvalidInputError(f"Invalid DateTime value: {text!r}")
        fraction = (match["fraction"] or "").ljust(6, "0")[:6]
        offset = match["offset"].upper()
        if offset == "Z":
            offset = "+00:00"
        iso = f"{match['date']}T{match['time']}.{fraction}{offset}"
        try:
            return datetime.fromisoformat(iso)
        except ValueError as e:
            raise InvalidInputError(f"Invalid DateTime value: {text!r}: {e}") from e

    def format(self, value: datetime) -> str:
        if not isinstance(value, datetime):
            raise InvalidInputError(f"Expected a datetime, got {type(value).__name__}")
        offset = value.utcoffset()
        if offset is None:
            raise InvalidInputError(f"DateTime value has no UTC offset: {value!r}")

        text = value.replace(tzinfo=None, microsecond=0).isoformat()
        if value.microsecond:
            text += f".{value.microsecond:06d}".rstrip("0")
        if offset == timedelta(0):
            return text + "Z"
        sign = "-" if offset < timedelta(0) else "+"
        minutes = abs(offset) // timedelta(minutes=1)
        return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"

    def serialize(self, value: datetime) -> str:
        return self.format(value)

    def deserialize(self, value: Any) -> datetime:
        if not isinstance(value, str):
            raise InvalidInputError(f"Invalid DateTime value: {value!r}")
        return self.parse(value)

    @staticmethod
    def from_unix_timestamp(timestamp: float) -> datetime:
        """Return the UTC DateTime for a Unix timestamp."""
        return datetime.fromtimestamp(timestamp, tz=timezone.utc)


def as_decimal(value: int, decimals: int) -> str:
    """Render a fixed-point integer with ``decimals`` fractional digits.

    ``as_decimal(4212, 2) == "42.12"``, ``as_decimal(1, 2) == "0.01"``.
    """
    if decimals <= 0:
        return str(value)
    sign = "-" if value < 0 else ""
    digits = str(abs(value)).zfill(decimals + 1)
    return f"{sign}{digits[:-decimals]}.{digits[-decimals:]}"


class ScalarRegistry:
    """Registry of scalar handlers keyed by GraphQL type name.

    The built-in scalars are registered on construction.

    Example:
        registry = ScalarRegistry()
        registry.get("Date").parse("2024-04-05")  # date(2024, 4, 5)
    """

    def __init__(self):
        self._handlers: dict[str, ScalarHandler] = {}
        self._register_defaults()

    def _register_defaults(self):
        for handler in (
            BooleanHandler(),
            IntHandler(),
            FloatHandler(),
            IDHandler(),
            DateHandler(),
            DateTimeHandler(),
        ):
            self.register(handler)

    def register(self, handler: ScalarHandler, wire_type: str | None = None):
        """Register a handler under ``wire_type`` (default: its own)."""
        self._handlers[wire_type or handler.wire_type] = handler

    def get(self, wire_type: str) -> ScalarHandler | None:
        """Get the handler for a type name, or None if not registered.

        Non-null and list markers are ignored, so ``"[Int!]!"`` finds ``Int``.
        """
        return self._handlers.get(wire_type.strip("[]!"))

    def has(self, wire_type: str) -> bool:
        return self.get(wire_type) is not None

    def names(self) -> list[str]:
        return sorted(self._handlers)


def _validator(handler: ScalarHandler, accepts):
    def validate(value: Any) -> Any:
        if isinstance(value, str):
            return handler.deserialize(value)
        if accepts(value):
            return value
        raise InvalidInputError(f"Invalid {handler.wire_type} value: {value!r}")

    return validate


_DATE = DateHandler()
_DATETIME = DateTimeHandler()

Boolean = Annotated[bool, Field(strict=True)]
Int = Annotated[int, Field(strict=True, ge=INT_MIN, le=INT_MAX)]
Float = Annotated[float, Field(strict=True)]
ID = Annotated[str, Field(strict=True)]
Date = Annotated[
    date,
    PlainValidator(_validator(_DATE, lambda v: isinstance(v, date) and not isinstance(v, datetime))),
    PlainSerializer(_DATE.format, return_type=str, when_used="json"),
]
DateTime = Annotated[
    datetime,
    PlainValidator(_validator(_DATETIME, lambda v: isinstance(v, datetime) and v.utcoffset() is not None)),
    PlainSerializer(_DATETIME.format, return_type=str, when_used="json"),
]
