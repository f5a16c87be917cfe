"""
jsonmend - Recovers the JSON a language model meant to send.

Model completions that should be a JSON object routinely arrive wrapped in
markdown fences or chatty prose, cut off by the token limit, or full of LaTeX
commands whose backslashes are not valid JSON escapes. jsonmend gets the object
back when it reasonably can and reports a clean failure when it cannot.

Key Features:
- Markdown fence stripping and extraction of the object from surrounding prose
- Valid JSON is parsed as is, with no repair side effects
- LaTeX-safe backslash handling (``\\frac``, ``\\lambda`` survive intact)
- Literal newlines and tabs inside strings are accepted
- Auto-completion of truncated strings, arrays and objects
- Never raises: failures come back as values with a short diagnostic
- Case- and nesting-tolerant field lookup for drifting model schemas

Quick Start:
    import jsonmend

    data = jsonmend.parse(completion_text)
    if data is None:
        ...  # retry the model call

    explanation = jsonmend.resolve_field(data, ["explanation", "Explanation"])

    # Why did it fail, or did it need repair?
    outcome = jsonmend.parse_outcome(completion_text)
    if outcome.repaired:
        ...
"""

from .core.engine import parse, parse_outcome
from .core.outcome import FailureKind, ParseMethod, ParseOutcome
from .core.resolver import resolve_field, resolve_fields
from .security.exceptions import ParseError, SecurityError
from .utils.config import ErrorReporting, ParseConfig, ParseLimits, PreprocessingConfig

__version__ = "0.1.0"
__author__ = "jsonmend contributors"

__all__ = [
    # Recovery entry points
    "parse", "parse_outcome",
    # Field lookup
    "resolve_field", "resolve_fields",
    # Outcome types
    "ParseOutcome", "ParseMethod", "FailureKind",
    # Configuration classes
    "ParseConfig", "ParseLimits", "ErrorReporting", "PreprocessingConfig",
    # Exception classes
    "ParseError", "SecurityError",
]
