"""
Query string and form body serialization

Nested values are flattened with bracket notation, the way PHP-style form
parsers on the server read them back:

    {"a": {"b": "x"}, "ids": [1, 2]}  ->  a%5Bb%5D=x&ids%5B%5D=1&ids%5B%5D=2

Key order of the input is preserved.
"""

from collections.abc import Iterator, Mapping
from typing import Any
from urllib.parse import quote


def build(query: Any) -> str:
    """
    Build an RFC 3986 encoded query string

    Args:
        query: Mapping of name -> scalar, sequence or nested mapping.
               A bare scalar is just percent-encoded.

    Returns:
        Encoded query string without a leading "?"
    """
    if not _is_container(query):
        return raw_url_encode(query)

    return "&".join(
        f"{raw_url_encode(key)}={raw_url_encode(value)}" for key, value in flatten(query)
    )


def flatten(query: Mapping[str, Any] | list | tuple) -> list[tuple[str, str | bytes]]:
    """
    Flatten nested parameters into (key, value) pairs

    Values are text, except bytes values which are passed through unchanged.

    Example:
        >>> flatten({"a": {"b": "x"}, "c": [True, None]})
        [('a[b]', 'x'), ('c[]', '1'), ('c[]', '')]
    """
    return list(_flatten_items(query, None))


def is_indexed(value: Any) -> bool:
    """Whether a container's keys are exactly 0..n-1 in order"""
    if isinstance(value, Mapping):
        return list(value.keys()) == list(range(len(value)))
    return _is_container(value)


def raw_url_encode(value: Any) -> str:
    """Percent-encode a single value, leaving only unreserved characters"""
    return quote(to_text(value), safe="")


def to_text(value: Any) -> str | bytes:
    """Coerce a scalar parameter to the value sent on the wire; bytes pass through"""
    if value is None:
        return ""
    if value is True:
        return "1"
    if value is False:
        return "0"
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    return str(value)


def _flatten_items(value: Any, prefix: str | None) -> Iterator[tuple[str, str | bytes]]:
    indexed = prefix is not None and is_indexed(value)
    items = value.items() if isinstance(value, Mapping) else enumerate(value)

    for key, item in items:
        if prefix is None:
            name = str(key)
        elif indexed:
            name = f"{prefix}[]"
        else:
            name = f"{prefix}[{key}]"

        if _is_container(item):
            yield from _flatten_items(item, name)
        else:
            yield name, to_text(item)


def _is_container(value: Any) -> bool:
    return isinstance(value, (Mapping, list, tuple))
