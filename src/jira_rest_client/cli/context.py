"""Shared state for CLI commands."""

import logging
from typing import Any

import click

from ..client.logs import LOGGER_NAME

STDERR_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def config_overrides(ctx: click.Context) -> dict[str, Any]:
    """Settings given as global options, applied over environment values."""
    return dict(ctx.find_root().obj or {})


def enable_verbose_logging() -> None:
    """Send library debug output, including the HTTP trace, to stderr."""
    logging.basicConfig(level=logging.DEBUG, format=STDERR_LOG_FORMAT)
    logging.getLogger(LOGGER_NAME).setLevel(logging.DEBUG)


def resource_path(context: str) -> str:
    """Resource context with the leading "/" the client expects."""
    return context if context.startswith("/") else f"/{context}"
