"""Accumulators used while rendering a request document.

A ParamBuffer collects the parenthesized parameter list of one document
level, a VariableBuffer collects the flattened variable payload of a whole
request. Both are created per render and consumed exactly once.
"""

import json
from typing import Any

from pydantic_core import PydanticSerializationError, to_jsonable_python

from .errors import BufferConsumedError, SerializationError, VariableCollisionError


def join_prefix(prefix: str, segment: str) -> str:
    """Extend a variable name prefix with one path segment.

    An empty segment leaves the prefix unchanged; otherwise the segment is
    appended followed by an underscore, e.g. ``join_prefix("account_", "bills")``
    gives ``"account_bills_"``.
    """
    if not segment:
        return prefix
    return f"{prefix}{segment}_"


class ParamBuffer:
    """Builds ``(a, b, c)`` style parameter lists.

    Example:
        buf = ParamBuffer()
        buf.push_formal("", "id", "ID!")
        buf.push_formal("bills_", "first", "Int")
        buf.consume()  # "($id: ID!, $bills_first: Int)"
    """

    def __init__(self):
        self._parts: list[str] = []
        self._consumed = False

    def _check(self):
        if self._consumed:
            raise BufferConsumedError("ParamBuffer has already been consumed")

    def push(self, fragment: str):
        """Append one rendered fragment."""
        self._check()
        self._parts.append(fragment)

    def push_formal(self, prefix: str, name: str, wire_type: str):
        """Append a declaration: ``$<prefix><name>: <wire_type>``."""
        self.push(f"${prefix}{name}: {wire_type}")

    def push_actual(self, prefix: str, name: str):
        """Append a binding: ``<name>: $<prefix><name>``."""
        self.push(f"{name}: ${prefix}{name}")

    def consume(self) -> str:
        """Return the finished list, or ``""`` if nothing was pushed."""
        self._check()
        self._consumed = True
        if not self._parts:
            return ""
        return "(" + ", ".join(self._parts) + ")"

    def __len__(self) -> int:
        return len(self._parts)


class VariableBuffer:
    """Collects the variables of one request under fully prefixed names."""

    def __init__(self):
        self._variables: dict[str, Any] = {}
        self._consumed = False

    def _check(self):
        if self._consumed:
            raise BufferConsumedError("VariableBuffer has already been consumed")

    def push_variable(self, prefix: str, name: str, value: Any):
        """Store ``value`` as JSON under ``prefix + name``.

        Raises:
            SerializationError: If the value has no JSON representation
            VariableCollisionError: If the name was already pushed
        """
        self._check()
        key = f"{prefix}{name}"
        if key in self._variables:
            raise VariableCollisionError(f"Variable ${key} is declared more than once")
        try:
            self._variables[key] = to_jsonable_python(value, by_alias=True)
        except PydanticSerializationError as e:
            raise SerializationError(f"Cannot serialize variable ${key}: {e}") from e

    def to_map(self) -> dict[str, Any]:
        """Return the accumulated variables and finalize the buffer."""
        self._check()
        self._consumed = True
        return self._variables

    def to_json_string(self) -> str:
        """Return the accumulated variables as pretty JSON and finalize."""
        return json.dumps(self.to_map(), indent=2)

    def __contains__(self, key: str) -> bool:
        return key in self._variables
