"""Server info command."""

import json

import click
from rich.console import Console

from ..client import JiraClient, JiraConfig, JiraError
from .context import config_overrides

console = Console()


@click.command("server-info")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def server_info(ctx: click.Context, as_json: bool):
    """Check connectivity and show server version."""
    try:
        config = JiraConfig(**config_overrides(ctx))
        client = JiraClient(config)
    except ValueError as e:
        console.print(f"[red]Invalid configuration:[/red] {e}")
        raise click.Abort()

    if not as_json:
        console.print(f"[bold]Host:[/bold] {config.host}")
        console.print(f"[bold]API:[/bold] {client.api_uri}")
        if config.cookie_auth_enabled:
            auth = f"cookie ({config.cookie_file})"
        elif config.token_based_auth:
            auth = "bearer token"
        else:
            auth = f"basic ({config.user or 'anonymous'})"
        console.print(f"[bold]Auth:[/bold] {auth}")
        if config.proxy_enabled:
            console.print(f"[bold]Proxy:[/bold] {config.proxy_url}")
        console.print()

    try:
        body = client.execute("/serverInfo")
        result = json.loads(body) if isinstance(body, str) and body else {}

        if as_json:
            console.print_json(json.dumps(result))
            return

        console.print(f"[green]Server: {result.get('serverTitle', 'unknown')}[/green]")
        console.print(f"  Version: {result.get('version', 'unknown')}")
        console.print(f"  Deployment: {result.get('deploymentType', 'unknown')}")
        console.print(f"  Base URL: {result.get('baseUrl', config.host)}")

        if client.last_request_id:
            console.print(f"\n[dim]Request ID: {client.last_request_id}[/dim]")

    except (JiraError, ValueError) as e:
        console.print(f"[red]Server check failed:[/red] {e}")
        raise click.Abort()

    finally:
        client.close()
