"""Request body serialization."""

import json
from typing import Any

# Keyword arguments for json.dumps; non-ASCII text is sent as-is.
DEFAULT_JSON_OPTIONS: dict[str, Any] = {"ensure_ascii": False}


def encode_body(data: Any, json_options: dict[str, Any] | None = None) -> str | None:
    """Serialize a request body.

    Strings and bytes are assumed to be serialized already and pass through
    unchanged. Anything else is JSON encoded with json_options.

    Raises:
        TypeError: If data is not JSON serializable.
    """
    if data is None or isinstance(data, str):
        return data
    if isinstance(data, (bytes, bytearray)):
        return bytes(data).decode("utf-8")
    options = DEFAULT_JSON_OPTIONS if json_options is None else json_options
    return json.dumps(data, **options)


def _is_empty(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, (str, list, tuple, dict)):
        return len(value) == 0 or value == "0"
    if isinstance(value, (int, float)):
        return value == 0
    return False


def filter_null_values(haystack: dict[str, Any]) -> dict[str, Any]:
    """Drop empty entries from a mapping, recursing into nested values.

    None, False, 0, "", "0" and empty containers are removed so that
    unset fields are not sent to the server. Objects are converted via
    their attribute dictionary.
    """
    result = {}
    for key, value in haystack.items():
        if isinstance(value, dict):
            value = filter_null_values(value)
        elif hasattr(value, "__dict__") and not isinstance(value, type):
            value = filter_null_values(vars(value))
        if _is_empty(value):
            continue
        result[key] = value
    return result
