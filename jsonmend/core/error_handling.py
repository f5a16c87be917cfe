"""
Common error handling utilities for JSON recovery.

This module builds the bounded diagnostics attached to failed parse outcomes
and to log records, so that offending model output can be debugged offline
without dumping whole completions.
"""

from dataclasses import dataclass

ELLIPSIS = " ... "


@dataclass
class ErrorContext:
    """Context information for parsing errors."""

    position: int
    line: int
    column: int
    context_text: str


class ErrorContextBuilder:
    """Builds error context information from text."""

    @staticmethod
    def build_context(
        position: int, original_text: str, context_length: int = 50
    ) -> ErrorContext:
        """Build error context from position and original text."""
        if not original_text:
            return ErrorContext(
                position=position, line=1, column=position + 1, context_text=""
            )

        position = max(0, min(position, len(original_text)))
        line = original_text[:position].count("\n") + 1
        line_start = original_text.rfind("\n", 0, position) + 1
        column = position - line_start + 1

        start = max(0, position - context_length // 2)
        end = min(len(original_text), position + context_length // 2)
        return ErrorContext(
            position=position,
            line=line,
            column=column,
            context_text=original_text[start:end],
        )

    @staticmethod
    def build_excerpt(text: str, context_length: int = 50) -> str:
        """
        Keep the first and last context_length characters of text.

        Args:
            text: Text to shorten
            context_length: Characters kept from each end

        Returns:
            The text itself when short enough, otherwise head and tail joined
            by an ellipsis
        """
        if len(text) <= 2 * context_length + len(ELLIPSIS):
            return text
        if context_length == 0:
            return ELLIPSIS.strip()
        return text[:context_length] + ELLIPSIS + text[-context_length:]
