"""Jira REST API client.

This package provides the request execution engine for the Jira REST API:
URL construction, authentication selection, transport configuration and
response classification, plus multi-file upload and streamed download.

Authentication (per request, first match wins):
    Cookie jar when enabled and the jar file exists, then a bearer token
    when token auth is configured, then basic username/password.

Usage:
    from jira_rest_client.client import JiraClient, JiraConfig, filter_null_values

    # Configure from environment / .env
    client = JiraClient()
    body = client.execute("/issue/FOO-1" + client.to_http_query_parameter({"expand": ["names"]}))

    # Drop unset fields before sending
    client.execute("/issue", filter_null_values({"fields": {"summary": "S", "labels": []}}))

    # Explicit configuration against the v3 API
    config = JiraConfig(
        host="https://jira.example.com",
        token_based_auth=True,
        personal_access_token="...",
        use_v3_rest_api=True,
    )
    with JiraClient(config) as client:
        client.upload("/issue/FOO-1/attachments", ["report.pdf"])
"""

from .api import JiraClient
from .auth import AuthDecision, authorize
from .config import JiraConfig
from .exceptions import (
    JiraAuthError,
    JiraError,
    JiraHTTPError,
    JiraIOError,
    JiraNetworkError,
    JiraNotFoundError,
)
from .http import HTTPTransport
from .outcome import Success, is_benign_download_failure, is_benign_transport_failure
from .serialize import encode_body, filter_null_values
from .transport import JiraTransport, RawResponse, RequestSpec
from .urls import build_url, to_query_string

__all__ = [
    # Main API
    "JiraClient",
    "JiraConfig",
    "Success",
    # Transport protocol and implementation
    "JiraTransport",
    "HTTPTransport",
    "RequestSpec",
    "RawResponse",
    # Building blocks
    "AuthDecision",
    "authorize",
    "build_url",
    "to_query_string",
    "encode_body",
    "filter_null_values",
    "is_benign_transport_failure",
    "is_benign_download_failure",
    # Exceptions
    "JiraAuthError",
    "JiraError",
    "JiraHTTPError",
    "JiraIOError",
    "JiraNetworkError",
    "JiraNotFoundError",
]
