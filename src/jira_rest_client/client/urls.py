"""URL and query string construction."""

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

API_URI_V2 = "/rest/api/2"
API_URI_V3 = "/rest/api/3"


def build_url(host: str, api_uri: str, context: str) -> str:
    """Join host, API prefix and a resource context.

    Contexts start with "/". Only the first "/" in context is removed,
    wherever it occurs, so "issue/FOO-1" becomes "issueFOO-1".

    Example:
        >>> build_url("https://j.example.com", "/rest/api/2", "/issue/FOO-1")
        'https://j.example.com/rest/api/2/issue/FOO-1'
    """
    return f"{host}{api_uri}/{context.replace('/', '', 1)}"


def _format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_format_value(v) for v in value)
    return str(value)


def to_query_string(params: Mapping[str, Any]) -> str:
    """Render parameters as "?k=v&k=v&".

    List values are joined with ",". Keys and values are percent-encoded
    per RFC 3986. The result always starts with "?" and every pair ends
    with "&", so an empty mapping yields "?".

    Example:
        >>> to_query_string({"expand": ["a", "b"], "q": "x y"})
        '?expand=a%2Cb&q=x%20y&'
    """
    query = "?"
    for key, value in params.items():
        query += f"{quote(str(key), safe='')}={quote(_format_value(value), safe='')}&"
    return query
