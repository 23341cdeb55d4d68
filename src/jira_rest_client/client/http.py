"""HTTP transport handle backed by httpx.

HTTPTransport wraps one httpx.Client. It applies a RequestSpec at send
time, manages the optional cookie jar file around each request and reports
transport failures as data instead of raising, so the caller can classify
them with the best-known status code.
"""

import logging
from http.cookiejar import LoadError, MozillaCookieJar
from typing import BinaryIO

import httpx

from .config import JiraConfig
from .exceptions import JiraIOError
from .factory import create_http_client
from .transport import RawResponse, RequestSpec

logger = logging.getLogger("jira-rest-client")

REQUEST_ID_HEADER = "X-AREQUESTID"
SINK_STATUS_CODES = (200, 201)


class HTTPTransport:
    """Reusable connection handle for Jira requests.

    Implements the JiraTransport protocol. Not thread safe: use one
    transport per concurrent caller.

    Usage:
        transport = HTTPTransport(config)
        raw = transport.send(RequestSpec("GET", url))
        transport.close()

    Or as context manager:
        with HTTPTransport(config) as transport:
            raw = transport.send(spec)
    """

    def __init__(
        self,
        config: JiraConfig,
        transport: httpx.BaseTransport | None = None,
        log: logging.Logger | None = None,
    ):
        """Initialize the transport.

        Args:
            config: Client configuration (TLS, proxy, timeouts, redirects)
            transport: Optional low-level httpx transport, mainly for tests
            log: Logger for cookie and verbose diagnostics
        """
        self.config = config
        self._log = log or logger
        self._http_transport = transport
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Lazy-initialize the httpx client."""
        if self._client is None:
            self._client = create_http_client(self.config, self._http_transport, self._log)
        return self._client

    def __enter__(self) -> "HTTPTransport":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - close client."""
        self.close()

    def close(self) -> None:
        """Close the httpx client and release connections."""
        if self._client:
            self._client.close()
            self._client = None

    def reset(self) -> None:
        """Clear cookies left from the previous request."""
        if self._client is not None:
            self._client.cookies.clear()

    def _load_cookie_jar(self, cookie_file: str) -> MozillaCookieJar:
        jar = MozillaCookieJar(cookie_file)
        try:
            jar.load(ignore_discard=True, ignore_expires=True)
        except FileNotFoundError:
            pass
        except (LoadError, OSError) as e:
            self._log.warning("Ignoring unreadable cookie file %s: %s", cookie_file, e)
        return jar

    def _save_cookie_jar(self, jar: MozillaCookieJar) -> None:
        try:
            jar.save(ignore_discard=True, ignore_expires=True)
        except OSError as e:
            self._log.warning("Could not write cookie file %s: %s", jar.filename, e)

    def _build_request(self, spec: RequestSpec) -> httpx.Request:
        return self.client.build_request(
            spec.method,
            spec.url,
            headers=list(spec.headers),
            content=spec.content,
            files=spec.files,
        )

    def send(self, spec: RequestSpec, sink: BinaryIO | None = None) -> RawResponse:
        """Send a request and collect the raw outcome.

        Args:
            spec: Request to send
            sink: Optional binary file. A 200/201 body is streamed into it
                chunk by chunk; other bodies are read into RawResponse.text.

        Returns:
            RawResponse. Connection failures, including a client certificate
            that cannot be loaded, give status_code 0. A failure while
            reading the body keeps the status already received.

        Raises:
            JiraIOError: If writing to sink fails.
        """
        try:
            client = self.client
        except OSError as e:
            # Unreadable or invalid client certificate/key (ssl.SSLError is an OSError)
            return RawResponse(url=spec.url, error=f"TLS setup failed: {e}")

        jar = None
        if spec.cookie_file:
            jar = self._load_cookie_jar(spec.cookie_file)
            # Response cookies land in this jar object
            client.cookies = jar

        request = self._build_request(spec)
        url = str(request.url)

        try:
            try:
                response = client.send(request, auth=spec.auth, stream=True)
            except httpx.TransportError as e:
                return RawResponse(url=url, error=str(e) or type(e).__name__)

            request_id = response.headers.get(REQUEST_ID_HEADER)
            try:
                if sink is not None and response.status_code in SINK_STATUS_CODES:
                    for chunk in response.iter_bytes():
                        try:
                            sink.write(chunk)
                        except OSError as e:
                            name = getattr(sink, "name", "")
                            raise JiraIOError(f"Cannot write {name}: {e}", str(name)) from e
                    text = ""
                else:
                    response.read()
                    text = response.text
            except httpx.TransportError as e:
                return RawResponse(
                    url=url,
                    status_code=response.status_code,
                    error=str(e) or type(e).__name__,
                    request_id=request_id,
                )
            finally:
                response.close()

            return RawResponse(
                url=url,
                status_code=response.status_code,
                text=text,
                request_id=request_id,
            )
        finally:
            if jar is not None:
                self._save_cookie_jar(jar)
