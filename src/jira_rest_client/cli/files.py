"""Attachment upload and download commands."""

from pathlib import Path
from urllib.parse import urlparse

import click
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from ..client import JiraClient, JiraConfig, JiraError
from .context import config_overrides, resource_path

console = Console()


def default_filename(url: str) -> str:
    """Last path segment of a URL, used when no filename is given."""
    name = urlparse(url).path.rstrip("/").rsplit("/", 1)[-1]
    return name or "download"


@click.command("upload")
@click.argument("context")
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def upload(ctx: click.Context, context: str, files: tuple[str, ...]):
    """Upload one or more files to a resource.

    Files are sent one after another; the first failure stops the batch.

    \b
    Examples:
      jira upload /issue/FOO-1/attachments report.pdf screenshot.png
    """
    try:
        client = JiraClient(JiraConfig(**config_overrides(ctx)))
    except ValueError as e:
        console.print(f"[red]Invalid configuration:[/red] {e}")
        raise click.Abort()

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            progress.add_task(f"Uploading {len(files)} file(s)...", total=None)
            results = client.upload(resource_path(context), list(files))

        for path, result in zip(files, results):
            console.print(f"[green]✓[/green] {Path(path).name}")
            if result:
                console.print(f"[dim]{result[:200]}[/dim]")
    except JiraError as e:
        console.print(f"[red]✗[/red] Upload failed: {e}")
        raise click.Abort()
    finally:
        client.close()


@click.command("download")
@click.argument("url")
@click.option(
    "-o", "--out-dir",
    type=click.Path(file_okay=False, exists=True),
    default=".",
    help="Destination directory (default: current directory)",
)
@click.option("-f", "--filename", help="Destination file name (default: last URL segment)")
@click.option("--cookie-file", type=click.Path(dir_okay=False), help="Cookie jar file for this request")
@click.pass_context
def download(
    ctx: click.Context,
    url: str,
    out_dir: str,
    filename: str | None,
    cookie_file: str | None,
):
    """Download a URL (e.g. an attachment's content link) to a file.

    \b
    Examples:
      jira download https://jira.example.com/secure/attachment/10000/report.pdf
      jira download https://jira.example.com/secure/attachment/10001/a%20b.png -o ./out
    """
    filename = filename or default_filename(url)
    try:
        client = JiraClient(JiraConfig(**config_overrides(ctx)))
    except ValueError as e:
        console.print(f"[red]Invalid configuration:[/red] {e}")
        raise click.Abort()

    try:
        client.download(url, out_dir, filename, cookie_file)
        console.print(f"[green]✓[/green] Saved {Path(out_dir) / filename}")
    except JiraError as e:
        console.print(f"[red]✗[/red] Download failed: {e}")
        raise click.Abort()
    finally:
        client.close()
