"""
The in-memory representation of a recovered JSON document.

A JsonValue is one of the six JSON variants as produced by ``json.loads``:
``None``, ``bool``, ``int``/``float``, ``str``, ``list`` and ``dict``. Objects
keep insertion order, so the first declared field of a document is also the
first key of its dict.
"""

from typing import Callable, Union

JsonScalar = Union[None, bool, int, float, str]
JsonValue = Union[JsonScalar, list["JsonValue"], dict[str, "JsonValue"]]


def map_strings(value: JsonValue, func: Callable[[str], str]) -> JsonValue:
    """
    Rebuild value with func applied to every string leaf and object key.

    Args:
        value: Any JSON value
        func: Transformation applied to each string

    Returns:
        A new value with the same shape and key order
    """
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        return func(value)
    if isinstance(value, list):
        return [map_strings(item, func) for item in value]
    if isinstance(value, dict):
        return {func(key): map_strings(item, func) for key, item in value.items()}
    raise TypeError(f"Not a JSON value: {type(value).__name__}")