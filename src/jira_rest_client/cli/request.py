"""Generic REST request command."""

import json
from pathlib import Path

import click
from rich.console import Console

from ..client import JiraClient, JiraConfig, JiraError
from .context import config_overrides, resource_path

console = Console()

METHODS = ["GET", "POST", "PUT", "DELETE"]


def parse_query(pairs: tuple[str, ...]) -> dict[str, str | list[str]]:
    """Turn repeated key=value options into query parameters.

    A key given more than once becomes a list, which is sent comma-joined.
    """
    params: dict[str, str | list[str]] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"Expected key=value, got '{pair}'", param_hint="--query")
        if key in params:
            existing = params[key]
            params[key] = [*existing, value] if isinstance(existing, list) else [existing, value]
        else:
            params[key] = value
    return params


def read_data(data: str | None) -> str | None:
    """Return the request body, reading it from a file when given as @path."""
    if data is None or not data.startswith("@"):
        return data
    path = Path(data[1:])
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise click.BadParameter(f"Cannot read {path}: {e}", param_hint="--data")


def print_body(result: str | bool, raw: bool) -> None:
    """Print a response body, pretty-printing JSON unless raw is set."""
    if result is True or result == "":
        console.print("[green]Request succeeded (no content)[/green]")
        return
    if raw:
        click.echo(result)
        return
    try:
        console.print_json(result)
    except json.JSONDecodeError:
        click.echo(result)


@click.command("request")
@click.argument("context")
@click.option(
    "-X", "--method", "custom_request",
    type=click.Choice(METHODS, case_sensitive=False),
    help="HTTP method (default: POST with --data, GET otherwise)",
)
@click.option("-d", "--data", help="Request body as JSON, or @file to read it from a file")
@click.option("-q", "--query", multiple=True, help="Query parameter as key=value (repeatable)")
@click.option("--v3", is_flag=True, help="Use the v3 REST API")
@click.option("--cookie-file", type=click.Path(dir_okay=False), help="Cookie jar file for this request")
@click.option("--raw", is_flag=True, help="Print the body without JSON formatting")
@click.pass_context
def request(
    ctx: click.Context,
    context: str,
    custom_request: str | None,
    data: str | None,
    query: tuple[str, ...],
    v3: bool,
    cookie_file: str | None,
    raw: bool,
):
    """Send a request to a REST resource.

    CONTEXT is the resource path under the API prefix; a missing leading
    "/" is added.

    \b
    Examples:
      jira request /issue/FOO-1 -q expand=names -q expand=schema
      jira request /issue -d @new-issue.json
      jira request /issue/FOO-1 -X PUT -d '{"fields": {"summary": "New"}}'
      jira request /issue/FOO-1 -X DELETE
    """
    context = resource_path(context)
    body = read_data(data)
    params = parse_query(query)

    try:
        client = JiraClient(JiraConfig(**config_overrides(ctx)))
    except ValueError as e:
        console.print(f"[red]Invalid configuration:[/red] {e}")
        raise click.Abort()

    try:
        if v3:
            client.set_rest_api_v3()
        if params:
            context += client.to_http_query_parameter(params)
        result = client.execute(context, body, custom_request.upper() if custom_request else None, cookie_file)
        print_body(result, raw)
    except JiraError as e:
        console.print(f"[red]Request failed:[/red] {e}")
        raise click.Abort()
    finally:
        client.close()
