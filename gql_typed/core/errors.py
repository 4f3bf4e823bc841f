"""Exception types raised by the typed GraphQL client.

Every failure of a request surfaces as exactly one of these. None of them
are retried or swallowed by the client.
"""

from typing import Any


class GraphQLClientError(Exception):
    """Base class for all client errors."""


class TransportError(GraphQLClientError):
    """The endpoint answered with a non-success HTTP status."""

    def __init__(self, status_code: int | None, message: str | None = None):
        self.status_code = status_code
        super().__init__(message or f"HTTP error: status {status_code}")


class NetworkError(TransportError):
    """The request never produced an HTTP response (connect, timeout, ...)."""

    def __init__(self, message: str):
        super().__init__(None, message)


class DecodeError(GraphQLClientError):
    """The response body is not JSON, or not the expected shape."""


class GraphQLError(GraphQLClientError):
    """The endpoint executed the request and reported semantic errors."""

    def __init__(self, message: str, errors: list[Any]):
        self.message = message
        self.errors = errors
        super().__init__(message)


class SerializationError(GraphQLClientError):
    """A parameter value could not be converted to JSON."""


class InternalError(GraphQLClientError):
    """The caller's declarations and the server's answer disagree."""


class VariableCollisionError(InternalError):
    """Two parameter tree positions produced the same variable name."""


class ShapeMismatchError(InternalError):
    """A parameter tree has a child with no matching result field."""


class InvalidInputError(GraphQLClientError, ValueError):
    """Scalar text or JSON could not be parsed or formatted."""


class BufferConsumedError(RuntimeError):
    """A single-use buffer was used after it was consumed."""
