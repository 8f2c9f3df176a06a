"""Query string helpers shared by every resource module."""
from __future__ import annotations
from typing import Mapping, Optional, Union
from urllib.parse import quote

Scalar = Union[str, int, float, bool]
QueryParameters = Mapping[str, Optional[Scalar]]


def _encode_value(key: str, value: Scalar) -> str:
    """Render a scalar query value the way the FusionAuth API expects it."""
    # bool before int: True is an int instance
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise TypeError(
        f"Query parameter '{key}' must be a str, int, float or bool, got {type(value).__name__}"
    )


def build_query_parameters(params: Optional[QueryParameters]) -> str:
    """Encode parameters as a query string, dropping ``None`` values.

    Keys and values are percent-escaped. Nested structures (dicts, lists,
    tuples, sets, bytes) are rejected rather than flattened.

    Args:
        params: Ordered mapping of parameter name to optional scalar

    Returns:
        ``"?key=value&..."`` or ``""`` when nothing is left to encode

    Raises:
        TypeError: If a value is not a scalar

    Example:
        >>> build_query_parameters({"applicationId": "a1", "userId": None})
        '?applicationId=a1'
    """
    if not params:
        return ""

    pairs = []
    for key, value in params.items():
        if value is None:
            continue
        encoded = _encode_value(key, value)
        pairs.append(f"{quote(str(key), safe='')}={quote(encoded, safe='')}")

    if not pairs:
        return ""
    return "?" + "&".join(pairs)


def merge_parameters(
    base: Optional[QueryParameters],
    overrides: Optional[QueryParameters],
) -> dict:
    """Merge two parameter sets; ``overrides`` wins on shared keys.

    Key order is the base order followed by keys only present in overrides.
    Neither input is modified.
    """
    merged = dict(base or {})
    merged.update(overrides or {})
    return merged
