"""Custom exceptions for the Jira REST client."""

import json


class JiraError(Exception):
    """Base exception for all Jira client errors."""

    def __init__(self, message: str, request_id: str | None = None):
        self.message = message
        self.request_id = request_id
        super().__init__(message)

    def __str__(self) -> str:
        if self.request_id:
            return f"{self.message} (request_id: {self.request_id})"
        return self.message


class JiraNetworkError(JiraError):
    """No usable response from the server (DNS, connect, TLS, broken stream).

    status_code is the best-known HTTP status, 0 when nothing was received.
    """

    def __init__(self, message: str, status_code: int = 0, request_id: str | None = None):
        super().__init__(message, request_id)
        self.status_code = status_code


class JiraHTTPError(JiraError):
    """The server answered with a status code outside the success set."""

    def __init__(
        self,
        message: str,
        status_code: int,
        url: str = "",
        body: str = "",
        request_id: str | None = None,
    ):
        super().__init__(message, request_id)
        self.status_code = status_code
        self.url = url
        self.body = body

    def __str__(self) -> str:
        base = f"HTTP {self.status_code}: {self.message}"
        if self.request_id:
            return f"{base} (request_id: {self.request_id})"
        return base

    @property
    def error_messages(self) -> list[str]:
        """Messages from a Jira error payload ({"errorMessages": [...], "errors": {...}})."""
        try:
            data = json.loads(self.body)
        except ValueError:
            return []
        if not isinstance(data, dict):
            return []
        messages = [str(m) for m in data.get("errorMessages") or []]
        errors = data.get("errors") or {}
        if isinstance(errors, dict):
            messages.extend(f"{field}: {msg}" for field, msg in errors.items())
        return messages


class JiraAuthError(JiraHTTPError):
    """Authentication failed (401/403)."""
    pass


class JiraNotFoundError(JiraHTTPError):
    """Resource not found (404)."""
    pass


class JiraIOError(JiraError):
    """A local file could not be read or written."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path


def raise_for_status(
    status_code: int,
    message: str,
    url: str = "",
    body: str = "",
    request_id: str | None = None,
) -> None:
    """Raise the appropriate JiraHTTPError subclass for a status code."""
    if status_code == 401 or status_code == 403:
        raise JiraAuthError(message, status_code, url, body, request_id)
    elif status_code == 404:
        raise JiraNotFoundError(message, status_code, url, body, request_id)
    raise JiraHTTPError(message, status_code, url, body, request_id)
