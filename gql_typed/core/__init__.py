"""Core modules for typed GraphQL requests."""

from .auth import Auth, BearerAuth, HeaderAuth, NoAuth, parse_header
from .buffers import ParamBuffer, VariableBuffer, join_prefix
from .envelope import (
    ErrorExtensions,
    GraphQLRequest,
    InputValidationError,
    Location,
    ResponseEnvelope,
    WireError,
)
from .errors import (
    BufferConsumedError,
    DecodeError,
    GraphQLClientError,
    GraphQLError,
    InternalError,
    InvalidInputError,
    NetworkError,
    SerializationError,
    ShapeMismatchError,
    TransportError,
    VariableCollisionError,
)
from .executor import GraphQLExecutor
from .pagination import EdgeOf, ForwardPageInfo, ForwardPageOf
from .params import NoParams, Params, QueryParams, WireType
from .query_builder import QueryBuilder
from .result import GraphQLModel, ResultType, check_shape
from .scalars import (
    ID,
    Boolean,
    BooleanHandler,
    Date,
    DateHandler,
    DateTime,
    DateTimeHandler,
    Float,
    FloatHandler,
    IDHandler,
    Int,
    IntHandler,
    ScalarHandler,
    ScalarRegistry,
    as_decimal,
)

__all__ = [
    # Auth
    "Auth",
    "BearerAuth",
    "HeaderAuth",
    "NoAuth",
    "parse_header",
    # Buffers
    "ParamBuffer",
    "VariableBuffer",
    "join_prefix",
    # Parameter trees
    "QueryParams",
    "NoParams",
    "Params",
    "WireType",
    # Result types
    "ResultType",
    "GraphQLModel",
    "check_shape",
    "ForwardPageInfo",
    "ForwardPageOf",
    "EdgeOf",
    # Scalars
    "ScalarHandler",
    "ScalarRegistry",
    "BooleanHandler",
    "IntHandler",
    "FloatHandler",
    "IDHandler",
    "DateHandler",
    "DateTimeHandler",
    "Boolean",
    "Int",
    "Float",
    "ID",
    "Date",
    "DateTime",
    "as_decimal",
    # Wire shapes
    "GraphQLRequest",
    "ResponseEnvelope",
    "WireError",
    "Location",
    "ErrorExtensions",
    "InputValidationError",
    # Errors
    "GraphQLClientError",
    "TransportError",
    "NetworkError",
    "DecodeError",
    "GraphQLError",
    "SerializationError",
    "InternalError",
    "VariableCollisionError",
    "ShapeMismatchError",
    "InvalidInputError",
    "BufferConsumedError",
    # Query Builder
    "QueryBuilder",
    # Executor
    "GraphQLExecutor",
]
