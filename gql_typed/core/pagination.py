"""Relay-style forward pagination envelope."""

from typing import Any, Generic, TypeVar

from .introspection import unwrap_annotation
from .params import NoParams, QueryParams
from .result import GraphQLModel, is_result_type

T = TypeVar("T")


class ForwardPageInfo(GraphQLModel):
    start_cursor: str
    has_next_page: bool


class EdgeOf(GraphQLModel, Generic[T]):
    node: T


class ForwardPageOf(GraphQLModel, Generic[T]):
    """One page of a connection: ``{ pageInfo { ... } edges { node { ... } } }``.

    The parameters of the connection field are passed straight through to
    the node type, so nested fields of the node bind to children of the
    same parameter node.
    """

    page_info: ForwardPageInfo
    edges: list[EdgeOf[T]]

    @classmethod
    def node_type(cls) -> Any:
        args = cls.__pydantic_generic_metadata__["args"]
        if not args:
            raise TypeError(f"{cls.__name__} must be parametrized, e.g. ForwardPageOf[Account]")
        return unwrap_annotation(args[0])

    @classmethod
    def selection_fields(cls) -> dict[str, Any]:
        node = cls.node_type()
        return node.selection_fields() if hasattr(node, "selection_fields") else {}

    @classmethod
    def render_selection_body(cls, params: QueryParams, prefix: str) -> str:
        page_info = ForwardPageInfo.render_selection_set(NoParams(), prefix)
        node = cls.node_type()
        node_part = "node"
        if is_result_type(node):
            node_part += " " + node.render_selection_set(params, prefix)
        return f"pageInfo {page_info} edges {{ {node_part} }}"

    @property
    def nodes(self) -> list[T]:
        return [edge.node for edge in self.edges]
