"""
Exception types raised inside jsonmend.

These never cross the public ``parse``/``parse_outcome`` boundary; the engine
converts them into failed ParseOutcome values.
"""

from typing import Optional


class ParseError(Exception):
    """Raised when text cannot be turned into a JSON value."""

    def __init__(self, message: str, excerpt: Optional[str] = None):
        self.message = message
        self.excerpt = excerpt
        if excerpt:
            super().__init__(f"{message}: {excerpt}")
        else:
            super().__init__(message)


class SecurityError(ParseError):
    """Raised when input exceeds the configured resource limits."""
