"""Result types and the selection sets they render.

A result type knows which fields to request for itself. Object fields
recurse into their own type, taking the matching child of the parameter
tree and the extended prefix, so the arguments bound at each nested field
use the same variable names the parameter tree declared.
"""

from typing import Any, Protocol, runtime_checkable

from .buffers import join_prefix
from .envelope import WireModel
from .errors import ShapeMismatchError
from .introspection import unwrap_annotation
from .params import QueryParams


@runtime_checkable
class ResultType(Protocol):
    """Protocol for types that render their own selection set."""

    @classmethod
    def render_selection_body(cls, params: QueryParams, prefix: str) -> str:
        """Return the space-separated field list for this type."""
        ...

    @classmethod
    def render_selection_set(cls, params: QueryParams, prefix: str) -> str:
        """Return the field list wrapped in braces."""
        ...


def is_result_type(tp: Any) -> bool:
    """Check whether ``tp`` is a class that renders a selection set."""
    return isinstance(tp, type) and isinstance(tp, ResultType)


def render_field(name: str, field_type: Any, params: QueryParams, prefix: str) -> str:
    """Render one selected field with its bindings and nested selection."""
    child = params.param_child(name)
    child_prefix = join_prefix(prefix, name)
    text = name + child.render_actual(child_prefix)
    target = unwrap_annotation(field_type)
    if is_result_type(target):
        text += " " + target.render_selection_set(child, child_prefix)
    return text


class GraphQLModel(WireModel):
    """Base class for object results.

    The selection set is derived from the model's fields; camelCase wire
    names are generated from the attribute names.

    Example:
        class Bill(GraphQLModel):
            id: ID
            amount_due: Int

        class Account(GraphQLModel):
            id: ID
            bills: ForwardPageOf[Bill]

        Account.render_selection_set(AccountParams(...), "")
        # "{ id bills(first: $bills_first) { pageInfo { ... } edges { node { id amountDue } } } }"
    """

    @classmethod
    def selection_fields(cls) -> dict[str, Any]:
        """Return wire field name -> element type for each selected field."""
        return {
            info.alias or name: unwrap_annotation(info.annotation)
            for name, info in cls.model_fields.items()
        }

    @classmethod
    def render_selection_body(cls, params: QueryParams, prefix: str) -> str:
        parts = [
            render_field(name, field_type, params, prefix)
            for name, field_type in cls.selection_fields().items()
        ]
        return " ".join(parts) if parts else "__typename"

    @classmethod
    def render_selection_set(cls, params: QueryParams, prefix: str) -> str:
        return "{ " + cls.render_selection_body(params, prefix) + " }"


def check_shape(params: QueryParams, result_type: Any, path: str = ""):
    """Verify that every nested parameter node has a field to bind to.

    A child of the parameter tree without a matching result field would
    declare variables the document never uses.

    Raises:
        ShapeMismatchError: On the first unmatched child
    """
    target = unwrap_annotation(result_type)
    children = params.param_children()
    if not children:
        return
    selection_fields = getattr(target, "selection_fields", None)
    if selection_fields is None:
        if is_result_type(target):
            # Custom result types do not expose their fields.
            return
        raise ShapeMismatchError(
            f"Parameters {', '.join(path + n for n in children)} are nested "
            f"under scalar result {getattr(target, '__name__', target)}"
        )

    fields = selection_fields()
    for name, child in children.items():
        if name not in fields:
            raise ShapeMismatchError(
                f"Parameter {path}{name} has no matching field on {target.__name__}"
            )
        check_shape(child, fields[name], f"{path}{name}.")
