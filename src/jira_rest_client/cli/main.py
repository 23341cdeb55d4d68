"""Main CLI entry point."""

from pathlib import Path

import click
from dotenv import load_dotenv

from jira_rest_client import __version__

from .context import enable_verbose_logging
from .files import download, upload
from .request import request
from .server_info import server_info


@click.group()
@click.version_option(version=__version__, prog_name="jira")
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False, exists=True, path_type=Path),
    help="Read settings from this file instead of ./.env",
)
@click.option("--host", help="Jira base URL (overrides JIRA_HOST)")
@click.option("-v", "--verbose", is_flag=True, help="Trace requests and responses to stderr")
@click.pass_context
def cli(ctx: click.Context, env_file: Path | None, host: str | None, verbose: bool):
    """Jira REST CLI - Send requests to a Jira server.

    Connection and credentials come from JIRA_* environment variables or a
    .env file (see JiraConfig).
    """
    env_file = env_file or Path.cwd() / ".env"
    if env_file.exists():
        load_dotenv(env_file)

    overrides = ctx.ensure_object(dict)
    if host:
        overrides["host"] = host
    if verbose:
        overrides["verbose"] = True
        overrides["log_level"] = "DEBUG"
        enable_verbose_logging()


cli.add_command(request)
cli.add_command(upload)
cli.add_command(download)
cli.add_command(server_info)


def main():
    """Entry point for jira CLI."""
    cli()


if __name__ == "__main__":
    main()
