"""Query parameter trees.

A parameter tree describes the arguments of one request. Each node can
contribute three things under a name prefix: formal declarations for the
operation signature, actual bindings for a field, and variable values for
the request payload. Composite nodes delegate to their children with the
prefix extended by the child's field name, so the same parameter type can
be embedded at several places in one document without name collisions.

Example:
    class BillsParams(Params):
        first: Annotated[int | None, WireType("Int")] = None

    class AccountParams(Params):
        id: Annotated[str, WireType("ID!")]
        bills: BillsParams | None = None

    params = AccountParams(id="A1", bills=BillsParams(first=10))
    params.render_formal()        # "($id: ID!, $bills_first: Int)"
    params.render_actual()        # "(id: $id)"
    params.render_variable_map()  # {"id": "A1", "bills_first": 10}
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticSerializationError

from .buffers import ParamBuffer, VariableBuffer, join_prefix
from .errors import SerializationError
from .introspection import unwrap_annotation


@dataclass(frozen=True)
class WireType:
    """Marks a Params field as a leaf argument of the given GraphQL type."""
    name: str


class QueryParams(ABC):
    """A node of a parameter tree.

    Implementations provide the three ``contribute_*`` operations; the
    ``render_*`` helpers are built on top of them and are not meant to be
    overridden.
    """

    @abstractmethod
    def contribute_formal(self, buffer: ParamBuffer, prefix: str):
        """Push ``$name: Type`` declarations for this node and its children."""

    @abstractmethod
    def contribute_actual(self, buffer: ParamBuffer, prefix: str):
        """Push ``name: $name`` bindings for the arguments of this field."""

    @abstractmethod
    def contribute_variables(self, buffer: VariableBuffer, prefix: str):
        """Push the JSON values of this node and its children."""

    def param_children(self) -> dict[str, "QueryParams"]:
        """Return the composite children of this node by wire field name."""
        return {}

    def param_child(self, name: str) -> "QueryParams":
        """Return the child for ``name``, or an empty node if there is none."""
        child = self.param_children().get(name)
        return child if child is not None else NoParams()

    def render_formal(self) -> str:
        buffer = ParamBuffer()
        self.contribute_formal(buffer, "")
        return buffer.consume()

    def render_actual(self, prefix: str = "") -> str:
        buffer = ParamBuffer()
        self.contribute_actual(buffer, prefix)
        return buffer.consume()

    def render_variables(self) -> str:
        buffer = VariableBuffer()
        self.contribute_variables(buffer, "")
        return buffer.to_json_string()

    def render_variable_map(self) -> dict[str, Any]:
        buffer = VariableBuffer()
        self.contribute_variables(buffer, "")
        return buffer.to_map()


class NoParams(QueryParams):
    """A parameter tree with no arguments at all."""

    def contribute_formal(self, buffer: ParamBuffer, prefix: str):
        pass

    def contribute_actual(self, buffer: ParamBuffer, prefix: str):
        pass

    def contribute_variables(self, buffer: VariableBuffer, prefix: str):
        pass

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NoParams)

    def __hash__(self) -> int:
        return hash(NoParams)

    def __repr__(self) -> str:
        return "NoParams()"


@dataclass(frozen=True)
class _ParamField:
    attr: str
    wire_name: str
    wire_type: str | None  # None for composite children

    @property
    def is_leaf(self) -> bool:
        return self.wire_type is not None


class Params(BaseModel, QueryParams):
    """Declarative composite parameter node.

    Leaf fields are annotated with a ``WireType``; fields typed as another
    ``QueryParams`` are nested children. Wire names are camelCase, as for
    result models, unless an explicit alias is given.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, arbitrary_types_allowed=True, populate_by_name=True
    )

    _param_fields: ClassVar[tuple[_ParamField, ...]] = ()

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any):
        super().__pydantic_init_subclass__(**kwargs)
        fields = []
        for attr, info in cls.model_fields.items():
            wire_name = info.alias or attr
            marker = next((m for m in info.metadata if isinstance(m, WireType)), None)
            if marker is not None:
                fields.append(_ParamField(attr, wire_name, marker.name))
                continue
            target = unwrap_annotation(info.annotation)
            if isinstance(target, type) and issubclass(target, QueryParams):
                if unwrap_annotation(info.annotation, containers=False) is not target:
                    raise TypeError(
                        f"{cls.__name__}.{attr} must hold a single {target.__name__}, not a container"
                    )
                fields.append(_ParamField(attr, wire_name, None))
                continue
            raise TypeError(
                f"{cls.__name__}.{attr} must be annotated with a WireType "
                f"or typed as a QueryParams subclass"
            )
        cls._param_fields = tuple(fields)

    def _children(self):
        for f in self._param_fields:
            if not f.is_leaf:
                child = getattr(self, f.attr)
                if child is not None:
                    yield f, child

    def contribute_formal(self, buffer: ParamBuffer, prefix: str):
        for f in self._param_fields:
            if f.is_leaf:
                buffer.push_formal(prefix, f.wire_name, f.wire_type)
            else:
                child = getattr(self, f.attr)
                if child is not None:
                    child.contribute_formal(buffer, join_prefix(prefix, f.wire_name))

    def contribute_actual(self, buffer: ParamBuffer, prefix: str):
        # Children are bound at their own nested field by the selection renderer.
        for f in self._param_fields:
            if f.is_leaf:
                buffer.push_actual(prefix, f.wire_name)

    def contribute_variables(self, buffer: VariableBuffer, prefix: str):
        leaves = {f.attr for f in self._param_fields if f.is_leaf}
        try:
            values = self.model_dump(mode="json", include=leaves, by_alias=True) if leaves else {}
        except PydanticSerializationError as e:
            raise SerializationError(f"Cannot serialize {type(self).__name__}: {e}") from e

        for f in self._param_fields:
            if f.is_leaf:
                buffer.push_variable(prefix, f.wire_name, values[f.wire_name])
            else:
                child = getattr(self, f.attr)
                if child is not None:
                    child.contribute_variables(buffer, join_prefix(prefix, f.wire_name))

    def param_children(self) -> dict[str, QueryParams]:
        return {f.wire_name: child for f, child in self._children()}
