"""High-level client for the Jira REST API.

This module provides the request execution engine: it turns a resource
context into a URL, attaches authentication, sends the request over the
client's transport handle and classifies the outcome. Multi-file upload
and streamed download have their own execution paths built on the same
rules.
"""

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, BinaryIO
from urllib.parse import unquote

import httpx

from .auth import authorize
from .config import JiraConfig
from .exceptions import JiraError, JiraHTTPError, JiraIOError, JiraNetworkError
from .http import HTTPTransport
from .logs import create_logger
from .outcome import Success, classify_download, classify_response, classify_upload
from .serialize import DEFAULT_JSON_OPTIONS, encode_body
from .transport import JiraTransport, RawResponse, RequestSpec
from .urls import API_URI_V2, API_URI_V3, build_url, to_query_string

JSON_HEADERS = (
    ("Accept", "*/*"),
    ("Content-Type", "application/json"),
    ("X-Atlassian-Token", "no-check"),
)
# Content-Type for uploads is set by httpx as multipart/form-data with its boundary
UPLOAD_HEADERS = (
    ("Accept", "*/*"),
    ("X-Atlassian-Token", "no-check"),
)
FORCE_ACCOUNT_ID_HEADER = ("x-atlassian-force-account-id", "true")
UPLOAD_FIELD_NAME = "file"


def open_sink(path: Path) -> BinaryIO:
    """Open a download destination for writing, truncating any existing file."""
    return open(path, "wb")


def select_method(has_body: bool, custom_request: str | None) -> str:
    """Pick the HTTP verb for execute().

    DELETE wins over body presence (and drops the body). PUT keeps the
    body. Otherwise a body means POST and no body means GET.
    """
    verb = (custom_request or "").upper()
    if verb == "DELETE":
        return "DELETE"
    if has_body:
        return "PUT" if verb == "PUT" else "POST"
    return "GET"


class JiraClient:
    """Client for a Jira REST API namespace.

    Each instance owns one transport handle that is reset before every
    execute() call. Uploads and downloads open their own scoped handle.
    Instances are not thread safe; use one client per concurrent caller.

    Usage:
        client = JiraClient()
        body = client.execute("/issue/FOO-1")

        with JiraClient(JiraConfig(host="https://jira.example.com")) as client:
            client.set_rest_api_v3()
            client.execute("/issue", {"fields": {...}})

        # Inject a custom transport (for testing)
        client = JiraClient(config, http_transport=httpx.MockTransport(handler))
    """

    def __init__(
        self,
        config: JiraConfig | None = None,
        logger: logging.Logger | None = None,
        transport: JiraTransport | None = None,
        http_transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            config: Configuration (loads from environment and .env if None)
            logger: Logger to write to instead of the library logger
            transport: Pre-built transport handle for execute()
            http_transport: Low-level httpx transport used by every handle
                this client creates (execute, upload and download)
        """
        self.config = config or JiraConfig()
        self.config.validate_config()
        self._log = create_logger(self.config, logger)
        self._http_transport = http_transport
        if transport is None:
            transport = HTTPTransport(self.config, http_transport, self._log)
        self._transport = transport

        self._use_v3 = self.config.use_v3_rest_api
        self._api_uri = API_URI_V3 if self._use_v3 else API_URI_V2
        self._json_options: dict[str, Any] = dict(DEFAULT_JSON_OPTIONS)
        self._cookie_file: str | None = None
        self._last_request_id: str | None = None
        self.last_status_code = 0

    def __enter__(self) -> "JiraClient":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the transport handle and release resources."""
        self._transport.close()

    @property
    def last_request_id(self) -> str | None:
        """Get the X-AREQUESTID of the last response."""
        return self._last_request_id

    @property
    def api_uri(self) -> str:
        """API prefix joined in front of every resource context."""
        return self._api_uri

    def set_api_uri(self, api_uri: str) -> "JiraClient":
        """Use a custom API prefix (e.g. "/rest/agile/1.0") for subsequent calls."""
        self._api_uri = api_uri
        return self

    def set_rest_api_v3(self) -> "JiraClient":
        """Switch to the v3 REST API."""
        self._api_uri = API_URI_V3
        self._use_v3 = True
        return self

    def is_rest_api_v3(self) -> bool:
        """Check whether the client targets the v3 REST API."""
        return self._use_v3

    @property
    def json_options(self) -> dict[str, Any]:
        """Keyword arguments passed to json.dumps for request bodies."""
        return dict(self._json_options)

    def set_json_options(self, **options: Any) -> "JiraClient":
        """Replace the json.dumps options, e.g. set_json_options(ensure_ascii=True)."""
        self._json_options = options
        return self

    @property
    def cookie_file(self) -> str | None:
        """Cookie jar set with set_cookie_file(), or None."""
        return self._cookie_file

    def set_cookie_file(self, cookie_file: str) -> "JiraClient":
        """Set the cookie jar used when a call passes no cookie file of its own."""
        self._cookie_file = cookie_file
        return self

    def build_url(self, context: str) -> str:
        """Absolute URL for a resource context under the current API prefix."""
        return build_url(self.config.host, self._api_uri, context)

    def to_http_query_parameter(self, params: Mapping[str, Any]) -> str:
        """Render query parameters as "?k=v&...&" (see urls.to_query_string)."""
        return to_query_string(params)

    def _authorize(
        self,
        headers: list[tuple[str, str]],
        cookie_file: str | None,
    ):
        if cookie_file is None:
            cookie_file = self._cookie_file
        return authorize(self.config, headers, cookie_file, self._log)

    def _record(self, raw: RawResponse) -> None:
        self.last_status_code = raw.status_code
        self._last_request_id = raw.request_id

    def _logged(self, error: JiraError) -> JiraError:
        self._log.error(error.message)
        return error

    def execute(
        self,
        context: str,
        post_data: Any = None,
        custom_request: str | None = None,
        cookie_file: str | None = None,
    ) -> str | bool:
        """Execute a REST request.

        Args:
            context: Resource context (e.g. "/issue/FOO-1", "/search")
            post_data: Body; strings are sent as-is, other values are JSON encoded
            custom_request: "PUT" or "DELETE" to override the default verb
            cookie_file: Cookie jar path for this call

        Returns:
            Response body for 200/201, or True when the server reported
            success without a body.

        Raises:
            JiraNetworkError: No response was obtained
            JiraAuthError: 401/403
            JiraNotFoundError: 404
            JiraHTTPError: Any other non-success status
        """
        url = self.build_url(context)
        body = encode_body(post_data, self._json_options)
        method = select_method(body is not None, custom_request)

        self._log.info("%s %s JsonData=%s", method, url, body)

        self._transport.reset()

        headers = list(JSON_HEADERS)
        decision = self._authorize(headers, cookie_file)
        spec = RequestSpec(
            method=method,
            url=url,
            headers=tuple(headers),
            content=body if method != "DELETE" else None,
            auth=decision.auth,
            cookie_file=decision.cookie_file,
        )

        self._log.debug("exec=%s", url)
        raw = self._transport.send(spec)
        self._record(raw)

        try:
            return classify_response(raw)
        except JiraError as e:
            self._log.error(e.message)
            raise

    def try_execute(
        self,
        context: str,
        post_data: Any = None,
        custom_request: str | None = None,
        cookie_file: str | None = None,
    ) -> Success | JiraNetworkError | JiraHTTPError:
        """Like execute(), but return the failure instead of raising it.

        Example:
            match client.try_execute("/issue/FOO-1"):
                case Success(body=body):
                    ...
                case JiraNotFoundError():
                    ...
        """
        try:
            return Success(self.execute(context, post_data, custom_request, cookie_file))
        except (JiraNetworkError, JiraHTTPError) as e:
            return e

    def _new_transport(self) -> HTTPTransport:
        return HTTPTransport(self.config, self._http_transport, self._log)

    def upload(self, context: str, file_paths: Iterable[str | Path]) -> list[str]:
        """Upload files one after another as multipart requests to one URL.

        The batch shares a single handle which is not reset between files.
        Each file is sent in field "file" under its base name. The first
        failure aborts the batch; files already sent are not rolled back.

        Args:
            context: Resource context (e.g. "/issue/FOO-1/attachments")
            file_paths: Local files to send, in order

        Returns:
            Response bodies in input order

        Raises:
            JiraIOError: A file could not be opened
            JiraNetworkError: A transfer broke down
            JiraHTTPError: The server rejected a file
        """
        url = self.build_url(context)
        results: list[str] = []

        with self._new_transport() as transport:
            for file_path in file_paths:
                path = Path(file_path)
                try:
                    handle = open(path, "rb")
                except OSError as e:
                    raise self._logged(JiraIOError(f"Cannot open upload file {path}: {e}", str(path))) from e

                with handle:
                    headers = list(UPLOAD_HEADERS)
                    decision = self._authorize(headers, None)
                    spec = RequestSpec(
                        method="POST",
                        url=url,
                        headers=tuple(headers),
                        files={UPLOAD_FIELD_NAME: (path.name, handle)},
                        auth=decision.auth,
                        cookie_file=decision.cookie_file,
                    )
                    self._log.debug("upload exec=%s file=%s", url, path.name)
                    raw = transport.send(spec)
                self._record(raw)

                try:
                    results.append(classify_upload(raw))
                except JiraError as e:
                    self._log.error(e.message)
                    raise

        return results

    def download(
        self,
        url: str,
        out_dir: str | Path,
        filename: str,
        cookie_file: str | None = None,
    ) -> bool:
        """Stream a response body into out_dir/filename.

        The filename is URL-decoded. The destination is overwritten and is
        always closed before this method returns or raises.

        Args:
            url: Absolute URL (e.g. an attachment's content link)
            out_dir: Destination directory
            filename: Destination file name, possibly percent-encoded
            cookie_file: Cookie jar path for this call

        Returns:
            True once the body has been written

        Raises:
            JiraIOError: The destination could not be opened or written
            JiraNetworkError: The transfer broke down
            JiraHTTPError: The server answered outside 200/201
        """
        target = Path(out_dir) / unquote(filename)

        headers = list(JSON_HEADERS)
        decision = self._authorize(headers, cookie_file)
        if self.is_rest_api_v3():
            headers.append(FORCE_ACCOUNT_ID_HEADER)
        spec = RequestSpec(
            method="GET",
            url=url,
            headers=tuple(headers),
            auth=decision.auth,
            cookie_file=decision.cookie_file,
        )

        try:
            sink = open_sink(target)
        except OSError as e:
            raise self._logged(JiraIOError(f"Cannot open {target} for writing: {e}", str(target))) from e

        self._log.debug("download exec=%s", url)
        with self._new_transport() as transport, sink:
            try:
                raw = transport.send(spec, sink)
            except JiraIOError as e:
                self._log.error(e.message)
                raise
        self._record(raw)

        try:
            return classify_download(raw)
        except JiraError as e:
            self._log.error(e.message)
            raise
