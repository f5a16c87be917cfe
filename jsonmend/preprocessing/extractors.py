"""
Content extraction preprocessing steps.

This module contains preprocessing steps that isolate the JSON object from a
model completion: markdown code fences around it and prose before or after it.
"""

from typing import Optional

from ..core.regex_utils import safe_regex_sub
from ..utils.config import PreprocessingConfig
from .base import PreprocessingStepBase

# ```json / ```JSON / ``` with nothing else on the opening line
LEADING_FENCE_PATTERN = r"\A```[^\S\n]*[\w+.\-]*[^\S\n]*(?:\n|\Z)"
TRAILING_FENCE_PATTERN = r"(?:\A|\n)[^\S\n]*```[^\S\n]*\Z"


class FenceStripper(PreprocessingStepBase):
    """Removes the markdown code fence wrapped around a completion."""

    enabled_by = "strip_fences"

    def process(self, text: str, config: PreprocessingConfig) -> str:
        """Strip fences, or only surrounding whitespace when disabled."""
        if not config.strip_fences:
            return text.strip()
        return self.strip_fences(text)

    @staticmethod
    def strip_fences(text: str) -> str:
        """Remove a leading and a trailing fence line and trim whitespace."""
        result = text.strip()
        result = safe_regex_sub(LEADING_FENCE_PATTERN, "", result, count=1)
        result = safe_regex_sub(TRAILING_FENCE_PATTERN, "", result, count=1)
        return result.strip()


class ObjectExtractor(PreprocessingStepBase):
    """Isolates the span from the first '{' to the last '}'."""

    def process(self, text: str, _config: PreprocessingConfig) -> str:
        """Return the object span, or the text unchanged if it has none."""
        span = self.extract(text)
        return text if span is None else span

    @staticmethod
    def extract(text: str) -> Optional[str]:
        """
        Find the candidate JSON object in free-form text.

        The span is greedy: it ends at the last '}' in the text, not at the
        brace that balances the first one. Output cut off before any closing
        brace yields the span from the first '{' to the end of the text.

        Args:
            text: Text possibly surrounded by prose

        Returns:
            The candidate span, or None when the text has no '{' at all
        """
        start = text.find("{")
        if start == -1:
            return None

        end = text.rfind("}")
        if end < start:
            return text[start:]
        return text[start : end + 1]
