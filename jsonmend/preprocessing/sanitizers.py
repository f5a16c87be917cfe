"""
Control character sanitization.

Raw control characters cannot appear inside a JSON string, yet models emit
literal newlines and tabs in long text fields all the time.
"""

from ..core.constants import LINE_ESCAPE, TAB_ESCAPE
from ..utils.config import PreprocessingConfig
from .base import PreprocessingStepBase
from .string_utils import StringStateTracker


class ControlSanitizer(PreprocessingStepBase):
    """Makes literal control characters legal JSON."""

    enabled_by = "sanitize_control_chars"

    def process(self, text: str, _config: PreprocessingConfig) -> str:
        """Sanitize control characters in text."""
        return self.sanitize(text)

    @staticmethod
    def sanitize(text: str) -> str:
        """
        Escape line breaks and tabs inside strings, blank out other controls.

        Inside a string literal CRLF, CR and LF each become an escaped newline
        and a tab becomes an escaped tab. Outside strings those characters are
        JSON whitespace and are kept. Any other character below 0x20 becomes a
        single space wherever it occurs.
        """
        result = []
        tracker = StringStateTracker()
        skip_line_feed = False

        for char in text:
            # The LF of an in-string CRLF was already emitted with its CR
            if skip_line_feed:
                skip_line_feed = False
                if char == "\n":
                    continue

            in_string = tracker.update_state(char)

            if ord(char) >= 0x20:
                result.append(char)
            elif char in "\r\n":
                if in_string:
                    result.append(LINE_ESCAPE)
                    skip_line_feed = char == "\r"
                else:
                    result.append(char)
            elif char == "\t":
                result.append(TAB_ESCAPE if in_string else char)
            else:
                result.append(" ")

        return "".join(result)
