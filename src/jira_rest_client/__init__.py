"""Jira REST Client - request execution engine and CLI for the Jira REST API."""

from jira_rest_client.client import JiraClient, Success
from jira_rest_client.client.config import JiraConfig
from jira_rest_client.client.exceptions import (
    JiraAuthError,
    JiraError,
    JiraHTTPError,
    JiraIOError,
    JiraNetworkError,
    JiraNotFoundError,
)

try:
    from importlib.metadata import version
    __version__ = version("jira-rest-client")
except Exception:
    __version__ = "0.1.0"  # Fallback for development

__all__ = [
    "JiraAuthError",
    "JiraClient",
    "JiraConfig",
    "JiraError",
    "JiraHTTPError",
    "JiraIOError",
    "JiraNetworkError",
    "JiraNotFoundError",
    "Success",
    "__version__",
]
