"""
Result values returned by the recovery pipeline.

A ParseOutcome is either a recovered JSON value or a failure described as
data. The public entry points never raise; callers inspect the outcome (or use
``parse`` and test for ``None``) and decide whether to retry the model call.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from .values import JsonValue


class ParseMethod(Enum):
    """How a value was obtained."""

    DIRECT = "direct"  # The extracted span was already valid JSON
    REPAIRED = "repaired"  # The span parsed only after the repair stages


class FailureKind(Enum):
    """Why no value could be recovered."""

    NO_JSON_OBJECT = "no_json_object"  # No "{" anywhere in the text
    INVALID_JSON = "invalid_json"  # Span is not JSON and repair is disabled
    REPAIR_FAILED = "repair_failed"  # Still not JSON after the repair stages
    LIMIT_EXCEEDED = "limit_exceeded"  # Input size or nesting over the limits


@dataclass(frozen=True)
class ParseOutcome:
    """Either a recovered value or a failure with a short diagnostic."""

    value: JsonValue = None
    method: Optional[ParseMethod] = None
    failure: Optional[FailureKind] = None
    diagnostic: str = ""

    @classmethod
    def success(cls, value: JsonValue, method: ParseMethod) -> "ParseOutcome":
        """Create a successful outcome."""
        return cls(value=value, method=method)

    @classmethod
    def failed(cls, failure: FailureKind, diagnostic: str = "") -> "ParseOutcome":
        """Create a failed outcome."""
        return cls(failure=failure, diagnostic=diagnostic)

    @property
    def ok(self) -> bool:
        """Whether a value was recovered."""
        return self.failure is None

    @property
    def repaired(self) -> bool:
        """Whether the value needed the repair stages."""
        return self.method is ParseMethod.REPAIRED

    def or_else(self, fallback: Callable[[], "ParseOutcome"]) -> "ParseOutcome":
        """Return self when successful, otherwise the outcome of fallback()."""
        if self.ok:
            return self
        return fallback()

    def unwrap_or(self, default: JsonValue = None) -> JsonValue:
        """Return the recovered value, or default on failure."""
        if self.ok:
            return self.value
        return default
