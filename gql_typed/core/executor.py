"""GraphQL executor for sending typed operations to a GraphQL endpoint.

Handles HTTP communication, response envelope parsing and decoding of the
selected field into the caller's result type.
"""

import logging
from typing import Any

import httpx
from pydantic import PydanticSchemaGenerationError, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from .auth import Auth, NoAuth
from .envelope import GraphQLRequest, ResponseEnvelope
from .errors import (
    DecodeError,
    GraphQLError,
    InternalError,
    NetworkError,
    SerializationError,
    TransportError,
)
from .params import QueryParams
from .query_builder import QueryBuilder

logger = logging.getLogger(__name__)


class GraphQLExecutor:
    """Executes GraphQL operations against an endpoint.

    The underlying ``httpx.AsyncClient`` may be supplied by the caller and
    shared between executors; it is then left open by ``close()``.

    Examples:
        async with GraphQLExecutor(url, auth=BearerAuth(token)) as executor:
            account = await executor.execute(
                "GetAccount", "account", AccountParams(id="A1"), Account
            )

        # Raw document, raw data
        data = await executor.call("Viewer", "query Viewer { viewer { id } }")
    """

    def __init__(
        self,
        url: str,
        auth: Auth | None = None,
        *,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
        query_builder: QueryBuilder | None = None,
    ):
        """Initialize the executor.

        Args:
            url: GraphQL endpoint URL
            auth: Authentication handler (implements Auth protocol)
            timeout: Request timeout in seconds, for a client created here
            client: Shared HTTP client to use instead of creating one
            query_builder: Builder for typed operations
        """
        if not url:
            raise ValueError("A GraphQL endpoint URL is required")
        self.url = url
        self.timeout = timeout
        self._auth = auth if auth is not None else NoAuth()
        self._client = client
        self._owns_client = client is None
        self._query_builder = query_builder or QueryBuilder()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self):
        """Close the HTTP client if this executor created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "GraphQLExecutor":
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    def _build_headers(self, headers: dict[str, str] | None) -> dict[str, str]:
        merged = {"Content-Type": "application/json"}
        merged.update(self._auth.get_headers())
        if headers:
            merged.update(headers)
        return merged

    async def execute(
        self,
        operation_name: str,
        query_name: str,
        params: QueryParams,
        result_type: Any,
        headers: dict[str, str] | None = None,
        *,
        operation_type: str = "query",
    ) -> Any:
        """Execute a typed operation and decode its single result field.

        Args:
            operation_name: Name of the operation
            query_name: Top-level field to select and return
            params: Parameter tree of the request
            result_type: Type to decode the field's value into
            headers: Extra request headers
            operation_type: ``"query"`` or ``"mutation"``

        Returns:
            The decoded value of ``data[query_name]``

        Raises:
            SerializationError: If a parameter cannot be encoded
            TransportError: On a non-success HTTP status or a failed request
            DecodeError: If the response or the field value has the wrong shape,
                or result_type is not a type pydantic can validate
            GraphQLError: If the response carries errors
            InternalError: If the response has no entry for ``query_name``
        """
        request = self._query_builder.build_request(
            operation_name, query_name, params, result_type, operation_type
        )
        envelope = await self._exchange(request, headers)

        if query_name not in envelope.data:
            raise InternalError(f"no response found for {query_name}")
        try:
            adapter = TypeAdapter(result_type)
        except PydanticSchemaGenerationError as e:
            raise DecodeError(f"Cannot decode {query_name} into {result_type!r}: {e}") from e
        try:
            return adapter.validate_python(envelope.data[query_name])
        except ValidationError as e:
            raise DecodeError(f"Cannot decode {query_name}: {e}") from e

    async def call(
        self,
        operation_name: str,
        query: str,
        variables: Any = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Execute a raw GraphQL document.

        Args:
            operation_name: Operation to run from the document
            query: GraphQL document
            variables: Variables; pydantic models are dumped by alias
            headers: Extra request headers

        Returns:
            The 'data' portion of the response
        """
        try:
            serialized = to_jsonable_python(variables or {}, by_alias=True)
        except PydanticSerializationError as e:
            raise SerializationError(f"Cannot serialize variables: {e}") from e

        request = GraphQLRequest(query=query, operation_name=operation_name, variables=serialized)
        envelope = await self._exchange(request, headers)
        return envelope.data

    async def _exchange(
        self,
        request: GraphQLRequest,
        headers: dict[str, str] | None,
    ) -> ResponseEnvelope:
        client = await self._get_client()
        payload = request.to_payload()
        logger.debug("POST %s payload %s", self.url, payload)

        try:
            response = await client.post(self.url, json=payload, headers=self._build_headers(headers))
        except httpx.RequestError as e:
            raise NetworkError(f"Request to {self.url} failed: {e}") from e

        logger.debug("Status %s for %s", response.status_code, request.operation_name)
        if not response.is_success:
            logger.warning(
                "%s failed with HTTP %s: %s",
                request.operation_name,
                response.status_code,
                response.text,
            )
            raise TransportError(response.status_code)

        try:
            body = response.json()
        except ValueError as e:
            raise DecodeError(f"Response is not valid JSON: {e}") from e
        logger.debug("Response %s", body)

        try:
            envelope = ResponseEnvelope.model_validate(body)
        except ValidationError as e:
            raise DecodeError(f"Unexpected response envelope: {e}") from e

        if envelope.errors:
            messages = "; ".join(str(err) for err in envelope.errors)
            logger.debug("%s returned errors: %s", request.operation_name, messages)
            raise GraphQLError(f"GraphQL errors: {messages}", envelope.errors)
        if envelope.data is None:
            raise DecodeError(f"Response to {request.operation_name} has no data")
        return envelope
