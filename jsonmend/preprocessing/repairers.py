"""
Structure repair preprocessing steps.

This module closes JSON that a model stopped emitting halfway through, usually
because the completion hit its token budget: an open string literal is
terminated and every unbalanced brace and bracket gets its closer.
"""

from dataclasses import dataclass

from ..utils.config import PreprocessingConfig
from .base import PreprocessingStepBase
from .string_utils import StringStateTracker


@dataclass
class StructureState:
    """String and nesting state at the end of a scan."""

    in_string: bool = False
    escape_next: bool = False
    brace_depth: int = 0
    bracket_depth: int = 0
    max_depth: int = 0

    @property
    def balanced(self) -> bool:
        """Whether nothing needs closing."""
        return not self.in_string and self.brace_depth == 0 and self.bracket_depth == 0


def scan_structure(text: str) -> StructureState:
    """
    Scan text once, counting structural characters outside strings.

    Closers without a matching open counterpart are ignored. Braces and
    brackets are counted independently, so the state does not record in which
    order they were opened.
    """
    state = StructureState()
    tracker = StringStateTracker()

    for char in text:
        if tracker.update_state(char):
            continue
        if char == "{":
            state.brace_depth += 1
        elif char == "[":
            state.bracket_depth += 1
        elif char == "}":
            if state.brace_depth > 0:
                state.brace_depth -= 1
        elif char == "]":
            if state.bracket_depth > 0:
                state.bracket_depth -= 1
        else:
            continue
        state.max_depth = max(state.max_depth, state.brace_depth + state.bracket_depth)

    state.in_string = tracker.in_string
    state.escape_next = tracker.escape_next
    return state


class TruncationRepairer(PreprocessingStepBase):
    """Closes unterminated strings and unbalanced braces and brackets."""

    enabled_by = "repair_truncation"

    def process(self, text: str, config: PreprocessingConfig) -> str:
        """Repair truncated JSON text."""
        return self.repair(text, trim_separators=config.trim_dangling_separators)

    @staticmethod
    def repair(text: str, trim_separators: bool = True) -> str:
        """
        Append whatever text needs to become structurally complete.

        Pending brackets are always closed before pending braces. This is right
        for the common case of an array inside an object and wrong for an
        object inside an array: ``{"items": [{"a": 1`` becomes
        ``{"items": [{"a": 1]}}``, which does not parse.

        Args:
            text: Possibly truncated JSON
            trim_separators: Drop a dangling ',' and complete a dangling ':'

        Returns:
            The repaired text
        """
        state = scan_structure(text)
        result = text

        if state.in_string:
            if state.escape_next:
                result = result[:-1]
            result += '"'

        if trim_separators and not state.balanced:
            result = TruncationRepairer._trim_dangling_separator(result)

        return result + "]" * state.bracket_depth + "}" * state.brace_depth

    @staticmethod
    def _trim_dangling_separator(text: str) -> str:
        """Remove a trailing ',' and give a trailing ':' a null value."""
        stripped = text.rstrip()
        if stripped.endswith(","):
            return stripped[:-1]
        if stripped.endswith(":"):
            return stripped + " null"
        return text
