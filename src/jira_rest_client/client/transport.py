"""Transport protocol and the values passed through it.

A RequestSpec is built fresh for every call and applied to the transport
at send time, so nothing about one request leaks into the next. The
transport answers with a RawResponse, which the client classifies.
"""

from dataclasses import dataclass, field
from typing import Any, BinaryIO, Protocol, runtime_checkable

import httpx


@dataclass(frozen=True)
class RequestSpec:
    """Everything needed to send one request.

    Attributes:
        method: HTTP verb
        url: Absolute request URL
        headers: Header pairs in send order
        content: Serialized body, or None
        files: Multipart files mapping (httpx format), or None
        auth: httpx auth object applied to this request only
        cookie_file: Cookie jar path to read before and write after sending
    """

    method: str
    url: str
    headers: tuple[tuple[str, str], ...] = ()
    content: str | bytes | None = None
    files: dict[str, Any] | None = field(default=None, compare=False)
    auth: httpx.Auth | None = field(default=None, compare=False)
    cookie_file: str | None = None


@dataclass(frozen=True)
class RawResponse:
    """Unclassified result of sending a request.

    status_code is 0 when no response was received. error holds the
    transport diagnostic when the exchange broke down, otherwise None.
    """

    url: str
    status_code: int = 0
    text: str = ""
    error: str | None = None
    request_id: str | None = None

    @property
    def failed(self) -> bool:
        """True if the transport reported a failure or returned no body."""
        return self.error is not None or self.text == ""


@runtime_checkable
class JiraTransport(Protocol):
    """Protocol implemented by the transport handle.

    A transport owns one connection handle. It is not safe to share
    between threads without external locking.
    """

    def reset(self) -> None:
        """Drop per-request state (cookies) left by the previous call."""
        ...

    def send(self, spec: RequestSpec, sink: BinaryIO | None = None) -> RawResponse:
        """Send a request.

        Args:
            spec: Request to send
            sink: If given, a 200/201 body is streamed into it instead of
                being returned in RawResponse.text

        Returns:
            RawResponse. Transport failures are reported in RawResponse.error,
            never raised.
        """
        ...

    def close(self) -> None:
        """Release the connection handle. Safe to call multiple times."""
        ...
