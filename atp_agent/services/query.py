from typing import Any, Mapping
from urllib.parse import urlencode


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_query(params: Mapping[str, Any]) -> str:
    """
    Render optional filter parameters as a query string.
    Values that are None or "" are dropped; insertion order is kept.
    Returns "" when nothing remains, otherwise "?k=v&k2=v2".
    """
    pairs = [
        (key, _stringify(value))
        for key, value in params.items()
        if value is not None and value != ""
    ]
    if not pairs:
        return ""
    return "?" + urlencode(pairs)
