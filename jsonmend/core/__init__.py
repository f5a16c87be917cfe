"""
jsonmend Core Recovery Engine.

This module provides the recovery entry points, the outcome types and the
schema-tolerant field resolver.
"""

from .engine import parse, parse_outcome, try_direct, try_repaired
from .outcome import FailureKind, ParseMethod, ParseOutcome
from .resolver import resolve_field, resolve_fields
from .values import JsonValue

__all__ = [
    'parse', 'parse_outcome', 'try_direct', 'try_repaired',
    'FailureKind', 'ParseMethod', 'ParseOutcome',
    'resolve_field', 'resolve_fields',
    'JsonValue',
]
