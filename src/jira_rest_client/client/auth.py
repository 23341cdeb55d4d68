"""Per-request authentication selection.

Three mechanisms are mutually exclusive for a single request:

Cookie jar:
    Enabled by cookie_auth_enabled. The jar file is read before and written
    after the request, so a session established once is reused.

Bearer token:
    Used when no usable cookie file exists and token_based_auth is set.

Basic:
    Username and password, used when neither of the above applies.
"""

import logging
import os
from dataclasses import dataclass

import httpx
from httpx_auth import Basic

from .config import JiraConfig

logger = logging.getLogger("jira-rest-client")


@dataclass(frozen=True)
class AuthDecision:
    """Authentication material chosen for one request."""

    auth: httpx.Auth | None = None
    cookie_file: str | None = None


def has_usable_cookie_file(cookie_file: str | None) -> bool:
    """Check whether a cookie file path is set and exists on disk."""
    return isinstance(cookie_file, str) and bool(cookie_file) and os.path.exists(cookie_file)


def authorize(
    config: JiraConfig,
    headers: list[tuple[str, str]],
    cookie_file: str | None = None,
    log: logging.Logger | None = None,
) -> AuthDecision:
    """Choose the authentication mechanism for a request.

    Args:
        config: Client configuration
        headers: Outgoing header list. A bearer Authorization header is
            appended in place when token auth applies.
        cookie_file: Per-request cookie jar path overriding the default

    Returns:
        AuthDecision with the jar path (cookie auth) and/or an httpx auth
        object (basic auth). Bearer auth is carried in headers only.
    """
    log = log or logger
    jar_path = None

    if config.cookie_auth_enabled:
        if cookie_file is None:
            cookie_file = config.cookie_file
        jar_path = cookie_file
        log.debug("Using cookie..")

    if has_usable_cookie_file(cookie_file):
        return AuthDecision(cookie_file=jar_path)

    if config.token_based_auth:
        headers.append(("Authorization", f"Bearer {config.personal_access_token}"))
        return AuthDecision(cookie_file=jar_path)

    return AuthDecision(
        auth=Basic(config.user or "", config.password or ""),
        cookie_file=jar_path,
    )
