"""httpx client construction from configuration.

This module turns the TLS, proxy, timeout and redirect settings of a
JiraConfig into a configured httpx.Client shared by execute, upload and
download.
"""

import logging
import ssl
from typing import Any, Callable

import httpx

from .config import JiraConfig


def create_ssl_context(config: JiraConfig) -> ssl.SSLContext:
    """Build the SSL context for peer/host verification and client certificates.

    Args:
        config: Client configuration

    Returns:
        SSL context. With ssl_verify_peer disabled no certificate checks are
        made; with only ssl_verify_host disabled the chain is verified but
        the hostname is not.

    Raises:
        OSError: If the client certificate or key cannot be read.
        ssl.SSLError: If the certificate/key pair is invalid.
    """
    context = ssl.create_default_context()
    if not config.ssl_verify_peer:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    elif not config.ssl_verify_host:
        context.check_hostname = False

    if config.ssl_cert:
        context.load_cert_chain(
            certfile=config.ssl_cert,
            keyfile=config.ssl_key,
            password=config.ssl_key_password or config.ssl_cert_password,
        )
    return context


def create_proxy(config: JiraConfig) -> httpx.Proxy | None:
    """Build the proxy for the configured server, port and credentials."""
    if not config.proxy_enabled:
        return None
    auth = None
    if config.proxy_user:
        auth = (config.proxy_user, config.proxy_password or "")
    return httpx.Proxy(config.proxy_url, auth=auth)


def create_timeout(config: JiraConfig) -> httpx.Timeout:
    """Connect timeout from config; read/write/pool use read_timeout (None waits)."""
    return httpx.Timeout(config.read_timeout, connect=config.timeout)


def _verbose_hooks(log: logging.Logger) -> dict[str, list[Callable[..., Any]]]:
    def log_request(request: httpx.Request) -> None:
        log.debug("> %s %s", request.method, request.url)
        for name, value in request.headers.items():
            if name.lower() in ("authorization", "proxy-authorization", "cookie"):
                value = "[redacted]"
            log.debug("> %s: %s", name, value)

    def log_response(response: httpx.Response) -> None:
        log.debug("< %s %s", response.status_code, response.reason_phrase)
        for name, value in response.headers.items():
            if name.lower() == "set-cookie":
                value = "[redacted]"
            log.debug("< %s: %s", name, value)

    return {"request": [log_request], "response": [log_response]}


def create_http_client(
    config: JiraConfig,
    transport: httpx.BaseTransport | None = None,
    log: logging.Logger | None = None,
) -> httpx.Client:
    """Create an httpx.Client carrying the connection policy from config.

    Environment proxies, .netrc credentials and CA overrides are not picked
    up; everything comes from config.

    Args:
        config: Client configuration
        transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        log: Logger for verbose request/response tracing

    Returns:
        Configured httpx.Client. Caller is responsible for closing it.
    """
    event_hooks = None
    if config.verbose:
        event_hooks = _verbose_hooks(log or logging.getLogger("jira-rest-client"))

    return httpx.Client(
        verify=create_ssl_context(config),
        proxy=create_proxy(config),
        timeout=create_timeout(config),
        follow_redirects=config.follow_redirects,
        headers={"User-Agent": config.user_agent},
        event_hooks=event_hooks,
        transport=transport,
        trust_env=False,
    )
