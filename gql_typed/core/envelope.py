"""Wire shapes of GraphQL requests and responses."""

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for models whose wire field names are camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Location(WireModel):
    line: int
    column: int


class InputValidationError(WireModel):
    message: str
    input_path: list[str]


class ErrorExtensions(WireModel):
    error_type: str | None = None
    error_code: str | None = None
    error_description: str | None = None
    error_class: str | None = None
    validation_errors: list[InputValidationError] | None = None


class WireError(WireModel):
    """One entry of the ``errors`` list of a response."""

    message: str | None = None
    locations: list[Location]
    path: list[str | int]
    extensions: ErrorExtensions

    def __str__(self) -> str:
        text = self.message or "(no message)"
        if self.path:
            text += f" at {'.'.join(str(p) for p in self.path)}"
        return text


class ResponseEnvelope(WireModel):
    """Top level of a response: semantic errors or per-field data."""

    errors: list[WireError] | None = None
    data: dict[str, Any] | None = None


@dataclass
class GraphQLRequest:
    """A complete request: document, variables and operation name."""
    query: str
    operation_name: str
    variables: dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        return {
            "query": self.query,
            "variables": self.variables,
            "operationName": self.operation_name,
        }
