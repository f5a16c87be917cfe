"""
String state tracking shared by the preprocessing steps.

This module contains shared logic for tracking whether a position of JSON-like
text lies inside a double-quoted string literal.
"""


class StringStateTracker:
    """Helper class to track string state during text processing."""

    def __init__(self) -> None:
        self.in_string = False
        self.escape_next = False

    def update_state(self, char: str) -> bool:
        """
        Update string state based on current character.

        Args:
            char: Current character

        Returns:
            True if the character belongs to a string literal, quotes included
        """
        if self.in_string:
            if self.escape_next:
                self.escape_next = False
            elif char == "\\":
                self.escape_next = True
            elif char == '"':
                self.in_string = False
            return True

        if char == '"':
            self.in_string = True
            return True
        return False
