"""
Resource limits for untrusted model output.

A runaway generation can be megabytes long or open thousands of brackets, and
json.loads recurses once per nesting level. The validator rejects such input
before any parse is attempted.
"""

from ..preprocessing.repairers import StructureState, scan_structure
from ..utils.config import ParseLimits
from .exceptions import SecurityError


class LimitValidator:
    """Rejects model output that exceeds the configured ParseLimits."""

    def __init__(self, limits: ParseLimits):
        self.limits = limits

    def validate_input_size(self, text: str) -> None:
        """Raise SecurityError if text has more than max_input_size characters."""
        size = len(text)
        if size > self.limits.max_input_size:
            raise SecurityError(f"Input size {size} exceeds limit {self.limits.max_input_size}")

    def validate_nesting_depth(self, depth: int) -> None:
        """Raise SecurityError if depth is over max_nesting_depth."""
        if depth > self.limits.max_nesting_depth:
            raise SecurityError(
                f"Nesting depth {depth} exceeds limit {self.limits.max_nesting_depth}"
            )

    def validate_span(self, span: str) -> StructureState:
        """
        Scan a candidate object span and check how deeply it nests.

        Depth counts braces and brackets open at the same time outside string
        literals, so it also bounds spans that are still truncated.

        Returns:
            The structure state of the span
        """
        state = scan_structure(span)
        self.validate_nesting_depth(state.max_depth)
        return state
