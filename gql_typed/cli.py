"""Command-line interface for gql-typed."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import click
from graphql import GraphQLSyntaxError, OperationDefinitionNode, parse

from .core.auth import BearerAuth, NoAuth, parse_header
from .core.errors import GraphQLClientError, GraphQLError, InvalidInputError
from .core.executor import GraphQLExecutor
from .core.scalars import ScalarRegistry


def first_operation_name(document: str) -> str | None:
    """Return the name of the first named operation in a document."""
    for definition in parse(document).definitions:
        if isinstance(definition, OperationDefinitionNode) and definition.name:
            return definition.name.value
    return None


async def _run_call(
    url: str,
    token: str | None,
    timeout: float,
    operation_name: str,
    document: str,
    variables: dict[str, Any],
    headers: dict[str, str],
) -> dict[str, Any]:
    auth = BearerAuth(token) if token else NoAuth()
    async with GraphQLExecutor(url, auth, timeout=timeout) as executor:
        return await executor.call(operation_name, document, variables, headers)


@click.group()
@click.version_option(package_name="gql-typed")
def main():
    """Typed GraphQL client tools.

    Send GraphQL documents and check scalar values from the shell.
    """
    pass


@main.command()
@click.option(
    "--url",
    "-u",
    required=True,
    envvar="GQL_TYPED_URL",
    help="GraphQL endpoint URL (env: GQL_TYPED_URL).",
)
@click.option("--query", "-q", help="GraphQL document text.")
@click.option(
    "--query-file",
    "-f",
    type=click.Path(exists=True, dir_okay=False),
    help="File containing the GraphQL document.",
)
@click.option("--variables", help="Variables as a JSON object.")
@click.option(
    "--operation-name",
    "-o",
    help="Operation to run (default: first named operation in the document).",
)
@click.option(
    "--header",
    "-H",
    "headers",
    multiple=True,
    help="Extra request header as 'Name: value'. May be repeated.",
)
@click.option("--token", envvar="GQL_TYPED_TOKEN", help="Bearer token (env: GQL_TYPED_TOKEN).")
@click.option("--timeout", default=30.0, show_default=True, help="Request timeout in seconds.")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Log requests and responses.",
)
def call(
    url: str,
    query: str | None,
    query_file: str | None,
    variables: str | None,
    operation_name: str | None,
    headers: tuple[str, ...],
    token: str | None,
    timeout: float,
    verbose: bool,
):
    """Send a GraphQL document and print the response data.

    Examples:

        gql-typed call -u https://api.example.com/graphql -q 'query Me { me { id } }'

        gql-typed call -f account.graphql --variables '{"id": "A1"}' -H 'X-Tenant: t1'
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if (query is None) == (query_file is None):
        raise click.UsageError("Pass exactly one of --query or --query-file.")
    document = query if query is not None else Path(query_file).read_text()

    try:
        name = operation_name or first_operation_name(document)
    except GraphQLSyntaxError as e:
        raise click.ClickException(f"Invalid GraphQL document: {e.message}")
    if not name:
        raise click.UsageError("The document has no named operation; pass --operation-name.")

    try:
        variable_map = json.loads(variables) if variables else {}
    except ValueError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="--variables")
    if not isinstance(variable_map, dict):
        raise click.BadParameter("must be a JSON object", param_hint="--variables")

    try:
        header_map = dict(parse_header(h) for h in headers)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--header")

    try:
        data = asyncio.run(
            _run_call(url, token, timeout, name, document, variable_map, header_map)
        )
    except GraphQLError as e:
        details = "\n".join(f"  - {err}" for err in e.errors)
        raise click.ClickException(f"{name} returned errors:\n{details}")
    except GraphQLClientError as e:
        raise click.ClickException(str(e))

    click.echo(json.dumps(data, indent=2))


@main.command()
@click.argument("wire_type")
@click.argument("text")
def scalar(wire_type: str, text: str):
    """Check TEXT against scalar WIRE_TYPE and print its canonical form.

    Examples:

        gql-typed scalar Date 2024-04-05

        gql-typed scalar DateTime 1970-01-01T00:00:00.0Z
    """
    registry = ScalarRegistry()
    handler = registry.get(wire_type)
    if handler is None:
        known = ", ".join(registry.names())
        raise click.BadParameter(f"unknown scalar (known: {known})", param_hint="WIRE_TYPE")

    try:
        value = handler.parse(text)
    except InvalidInputError as e:
        raise click.ClickException(str(e))
    click.echo(handler.format(value))


if __name__ == "__main__":
    main()
