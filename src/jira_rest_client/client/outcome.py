"""Response classification.

Every request ends in one of:
    - a success body (str)
    - True, when the server reported success without a body
    - JiraNetworkError, when no usable response was obtained
    - JiraHTTPError (or a subclass), when the server answered with an error
"""

from dataclasses import dataclass

from .exceptions import JiraNetworkError, raise_for_status
from .transport import RawResponse

SUCCESS_STATUS_CODES = frozenset({200, 201})
UPLOAD_SUCCESS_STATUS_CODES = frozenset({200, 201, 204})
BENIGN_TRANSPORT_FAILURE_CODES = frozenset({200, 201, 204})
BENIGN_DOWNLOAD_FAILURE_CODES = frozenset({201, 204})


@dataclass(frozen=True)
class Success:
    """A successful outcome. body is the response text, or True for an empty body."""

    body: str | bool


def is_benign_transport_failure(status_code: int) -> bool:
    """Check if a failed or bodiless exchange should still count as success.

    200, 201 and 204 mean the server already processed the request even
    though nothing usable came back.
    """
    return status_code in BENIGN_TRANSPORT_FAILURE_CODES


def is_benign_download_failure(status_code: int) -> bool:
    """Download variant of is_benign_transport_failure; 200 is not benign here."""
    return status_code in BENIGN_DOWNLOAD_FAILURE_CODES


def network_error_message(raw: RawResponse) -> str:
    return f"Transport error: http response={raw.status_code}, {raw.error or 'empty response'}"


def http_error_message(raw: RawResponse) -> str:
    return (
        f"HTTP Request Failed: Status Code : {raw.status_code}, URL:{raw.url}"
        f"\nError Message : {raw.text}"
    )


def _raise_http_error(raw: RawResponse) -> None:
    raise_for_status(
        raw.status_code,
        http_error_message(raw),
        url=raw.url,
        body=raw.text,
        request_id=raw.request_id,
    )


def classify_response(raw: RawResponse) -> str | bool:
    """Classify the result of a plain request.

    Returns:
        The body for 200/201, or True for a benign failure or empty body.

    Raises:
        JiraNetworkError: No response was received (connect, DNS, TLS) or
            the body could not be read.
        JiraHTTPError: Any other status.
    """
    if raw.failed:
        if is_benign_transport_failure(raw.status_code):
            return True
        if raw.error is not None:
            raise JiraNetworkError(network_error_message(raw), raw.status_code, raw.request_id)
        _raise_http_error(raw)

    if raw.status_code not in SUCCESS_STATUS_CODES:
        _raise_http_error(raw)
    return raw.text


def classify_upload(raw: RawResponse) -> str:
    """Classify one upload transfer.

    Returns:
        The response body ("" when the server sent none).

    Raises:
        JiraNetworkError: The transfer broke down with a non-benign status.
        JiraHTTPError: The server answered outside 200/201/204.
    """
    if raw.error is not None:
        if is_benign_transport_failure(raw.status_code):
            return ""
        raise JiraNetworkError(network_error_message(raw), raw.status_code, raw.request_id)
    if raw.status_code not in UPLOAD_SUCCESS_STATUS_CODES:
        _raise_http_error(raw)
    return raw.text


def classify_download(raw: RawResponse) -> bool:
    """Classify a streamed download.

    Returns:
        True; the body is already in the sink.

    Raises:
        JiraNetworkError: The transfer broke down and the status is not 201/204.
        JiraHTTPError: The server answered outside 200/201.
    """
    if raw.error is not None:
        if is_benign_download_failure(raw.status_code):
            return True
        raise JiraNetworkError(network_error_message(raw), raw.status_code, raw.request_id)
    if raw.status_code not in SUCCESS_STATUS_CODES:
        _raise_http_error(raw)
    return True

