"""
Schema-tolerant field lookup on recovered documents.

Models name the same field differently from one run to the next ("context",
"Context", "CONTEXT") and sometimes wrap it in an extra object ("details",
"data"). The resolver looks a logical field up under a prioritized list of
candidate names so callers need no per-field fallback code.
"""

from collections.abc import Iterable, Mapping
from typing import Optional, Union

from .values import JsonValue

CandidateNames = Union[str, Iterable[str]]


def _normalize_candidates(candidate_names: CandidateNames) -> list[str]:
    if isinstance(candidate_names, str):
        return [candidate_names]
    return [name for name in candidate_names if isinstance(name, str)]


def _find_exact(obj: dict[str, JsonValue], candidates: list[str]) -> Optional[JsonValue]:
    for name in candidates:
        value = obj.get(name)
        if value is not None:
            return value
    return None


def _find_case_insensitive(
    obj: dict[str, JsonValue], candidates: list[str]
) -> Optional[JsonValue]:
    for name in candidates:
        folded = name.casefold()
        for key, value in obj.items():
            if value is not None and isinstance(key, str) and key.casefold() == folded:
                return value
    return None


def _find_at_level(obj: dict[str, JsonValue], candidates: list[str]) -> Optional[JsonValue]:
    value = _find_exact(obj, candidates)
    if value is None:
        value = _find_case_insensitive(obj, candidates)
    return value


def resolve_field(value: JsonValue, candidate_names: CandidateNames) -> Optional[JsonValue]:
    """
    Look up a field under several candidate names.

    Resolution order:
        1. Exact key match at the top level, candidates in the given order.
        2. Case-insensitive match at the top level, candidates in the given
           order.
        3. Rules 1 and 2 applied to each object-valued top-level field, in
           document order.

    A key holding JSON null counts as absent.

    Args:
        value: A recovered JSON value, normally an object
        candidate_names: Candidate key names, highest priority first, or a
            single name

    Returns:
        The first value found, or None when nothing matches or value is not
        an object
    """
    if not isinstance(value, dict):
        return None

    candidates = _normalize_candidates(candidate_names)
    if not candidates:
        return None

    found = _find_at_level(value, candidates)
    if found is not None:
        return found

    for nested in value.values():
        if isinstance(nested, dict):
            found = _find_at_level(nested, candidates)
            if found is not None:
                return found

    return None


def resolve_fields(
    value: JsonValue, aliases: Mapping[str, CandidateNames]
) -> dict[str, JsonValue]:
    """Resolve several logical fields at once, keeping only those found."""
    resolved = {}
    for logical_name, candidate_names in aliases.items():
        found = resolve_field(value, candidate_names)
        if found is not None:
            resolved[logical_name] = found
    return resolved
