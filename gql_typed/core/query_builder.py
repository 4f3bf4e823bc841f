"""Query builder for typed GraphQL operations.

Assembles the request document and the variable payload from a parameter
tree and a result type:

    query <operationName>(<formals>) { <queryName>(<actuals>) { <selection> } }
"""

from typing import Any

from .envelope import GraphQLRequest
from .introspection import unwrap_annotation
from .params import QueryParams
from .result import check_shape, is_result_type

OPERATION_TYPES = ("query", "mutation")


class QueryBuilder:
    """Builds GraphQL documents from parameter trees and result types."""

    def __init__(self, check_shapes: bool = True):
        """Initialize the builder.

        Args:
            check_shapes: Reject parameter trees with nested children that the
                result type has no field for
        """
        self.check_shapes = check_shapes

    def build(
        self,
        operation_name: str,
        query_name: str,
        params: QueryParams,
        result_type: Any,
        operation_type: str = "query",
    ) -> str:
        """Build the document for one top-level field.

        Args:
            operation_name: Name of the operation, sent as ``operationName``
            query_name: The top-level field to select
            params: Parameter tree of the request
            result_type: The type the field's value decodes into
            operation_type: ``"query"`` or ``"mutation"``

        Returns:
            Complete GraphQL document
        """
        if operation_type not in OPERATION_TYPES:
            raise ValueError(f"Unsupported operation type: {operation_type}")
        if self.check_shapes:
            check_shape(params, result_type)

        target = unwrap_annotation(result_type)
        field = query_name + params.render_actual("")
        if is_result_type(target):
            field += " " + target.render_selection_set(params, "")

        return f"{operation_type} {operation_name}{params.render_formal()} {{ {field} }}"

    def build_request(
        self,
        operation_name: str,
        query_name: str,
        params: QueryParams,
        result_type: Any,
        operation_type: str = "query",
    ) -> GraphQLRequest:
        """Build the document together with its flattened variables.

        Raises:
            SerializationError: If a parameter value cannot be encoded
        """
        query = self.build(operation_name, query_name, params, result_type, operation_type)
        return GraphQLRequest(
            query=query,
            operation_name=operation_name,
            variables=params.render_variable_map(),
        )
