"""
Backslash neutralization and restoration.

Model output routinely carries LaTeX commands (``\\frac``, ``\\lambda``) inside
JSON strings with single backslashes, which a strict parser rejects as invalid
escapes. Before the repaired reparse every backslash is swapped for an inert
placeholder; after parsing, the placeholder is turned back into a backslash in
every string of the recovered value.
"""

from ..core.constants import BACKSLASH_PLACEHOLDER, QUOTE_PLACEHOLDER
from ..core.values import JsonValue, map_strings
from ..utils.config import PreprocessingConfig
from .base import PreprocessingStepBase


class EscapeNeutralizer(PreprocessingStepBase):
    """Replaces every backslash except those escaping a double quote."""

    enabled_by = "neutralize_escapes"

    def process(self, text: str, _config: PreprocessingConfig) -> str:
        """Neutralize backslashes in text."""
        return self.neutralize(text)

    @staticmethod
    def protect_escaped_quotes(text: str) -> str:
        """
        Replace each escaped quote with the quote placeholder.

        A quote is escaped when an odd run of backslashes precedes it; only the
        last backslash of the run belongs to the quote, the others stay put.
        """
        result = []
        i = 0
        length = len(text)

        while i < length:
            if text[i] != "\\":
                result.append(text[i])
                i += 1
                continue

            run_end = i
            while run_end < length and text[run_end] == "\\":
                run_end += 1
            run = run_end - i

            if run_end < length and text[run_end] == '"' and run % 2 == 1:
                result.append("\\" * (run - 1))
                result.append(QUOTE_PLACEHOLDER)
                i = run_end + 1
            else:
                result.append("\\" * run)
                i = run_end

        return "".join(result)

    @classmethod
    def neutralize(cls, text: str) -> str:
        """Leave only the backslashes of escaped quotes in text."""
        result = cls.protect_escaped_quotes(text)
        result = result.replace("\\", BACKSLASH_PLACEHOLDER)
        return result.replace(QUOTE_PLACEHOLDER, '\\"')


def restore_backslashes(text: str) -> str:
    """Turn backslash placeholders in a single string back into backslashes."""
    return text.replace(BACKSLASH_PLACEHOLDER, "\\")


def restore_placeholders(value: JsonValue) -> JsonValue:
    """
    Put the original backslashes back into a parsed value.

    Every string leaf and object key is rewritten; structure, key order and
    non-string leaves are left as they are. Must run exactly once per value.
    """
    return map_strings(value, restore_backslashes)
