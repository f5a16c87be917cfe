"""
Recovery engine for jsonmend - turns model completions into JSON values.

The engine runs the stages in order and stops at the first one that yields a
value: fences are stripped, the object span is extracted and parsed as is, and
only when that fails is the span neutralized, sanitized, closed and parsed
again. Failures are returned as ParseOutcome values; nothing is raised to the
caller.
"""

import json
import logging
from typing import Optional, Union

from ..preprocessing.escapes import restore_placeholders
from ..preprocessing.extractors import FenceStripper, ObjectExtractor
from ..preprocessing.pipeline import PreprocessingPipeline
from ..security.exceptions import SecurityError
from ..security.limits import LimitValidator
from ..utils.config import ParseConfig
from .constants import contains_placeholder
from .error_handling import ErrorContextBuilder
from .outcome import FailureKind, ParseMethod, ParseOutcome
from .values import JsonValue

logger = logging.getLogger(__name__)

RawText = Union[str, bytes, bytearray, None]

# Steps hold no state, so one instance serves every call and thread
_FENCE_STRIPPER = FenceStripper()
_REPAIR_PIPELINE = PreprocessingPipeline.create_repair_pipeline()


def parse(raw_text: RawText, config: Optional[ParseConfig] = None) -> Optional[JsonValue]:
    """
    Recover the JSON object contained in a model completion.

    Args:
        raw_text: The completion text; bytes are decoded as UTF-8
        config: Optional ParseConfig for limits, diagnostics and stage toggles

    Returns:
        The recovered value, or None when nothing could be recovered
    """
    return parse_outcome(raw_text, config).unwrap_or(None)


def parse_outcome(raw_text: RawText, config: Optional[ParseConfig] = None) -> ParseOutcome:
    """
    Recover the JSON object contained in a model completion.

    Same pipeline as parse(), but the result also tells how the value was
    obtained or why recovery failed.

    Args:
        raw_text: The completion text; bytes are decoded as UTF-8
        config: Optional ParseConfig for limits, diagnostics and stage toggles

    Returns:
        A ParseOutcome; never raises
    """
    if config is None:
        config = ParseConfig()
    text = _coerce_text(raw_text)

    try:
        return _recover(text, config)
    except SecurityError as e:
        logger.warning(f"Model output rejected: {e}")
        return ParseOutcome.failed(FailureKind.LIMIT_EXCEEDED, str(e))


def try_direct(span: str, config: Optional[ParseConfig] = None) -> ParseOutcome:
    """Parse span strictly, without touching it."""
    if config is None:
        config = ParseConfig()

    try:
        value = json.loads(span)
    except json.JSONDecodeError as e:
        context = ErrorContextBuilder.build_context(e.pos, span, config.max_error_context)
        logger.debug(
            f"Direct parse failed at line {context.line}, column {context.column}: "
            f"{e.msg}"
        )
        return ParseOutcome.failed(
            FailureKind.INVALID_JSON, context.context_text.strip()
        )
    except (ValueError, RecursionError):
        # Non-syntax errors, e.g. integers over the int conversion digit limit
        return ParseOutcome.failed(
            FailureKind.INVALID_JSON,
            ErrorContextBuilder.build_excerpt(span, config.max_error_context),
        )

    return ParseOutcome.success(value, ParseMethod.DIRECT)


def try_repaired(span: str, config: Optional[ParseConfig] = None) -> ParseOutcome:
    """Run the repair stages on span, parse the result and restore backslashes."""
    if config is None:
        config = ParseConfig()
    excerpt = ErrorContextBuilder.build_excerpt(span, config.max_error_context)

    if contains_placeholder(span):
        logger.warning("Model output contains a reserved placeholder; not repairing")
        return ParseOutcome.failed(FailureKind.REPAIR_FAILED, excerpt)

    repaired = _REPAIR_PIPELINE.process(span, config.preprocessing_config)
    try:
        value = json.loads(repaired)
    except (ValueError, RecursionError):
        return ParseOutcome.failed(FailureKind.REPAIR_FAILED, excerpt)

    try:
        restored = restore_placeholders(value)
    except RecursionError:
        logger.warning("Repaired value nests too deeply to restore backslashes")
        return ParseOutcome.failed(FailureKind.REPAIR_FAILED, excerpt)

    return ParseOutcome.success(restored, ParseMethod.REPAIRED)


def _coerce_text(raw_text: RawText) -> str:
    if raw_text is None:
        return ""
    if isinstance(raw_text, (bytes, bytearray)):
        return bytes(raw_text).decode("utf-8", errors="replace")
    if isinstance(raw_text, str):
        return raw_text
    return str(raw_text)


def _recover(text: str, config: ParseConfig) -> ParseOutcome:
    assert config.limits is not None and config.preprocessing_config is not None
    validator = LimitValidator(config.limits)
    validator.validate_input_size(text)

    stripped = _FENCE_STRIPPER.process(text, config.preprocessing_config)
    span = ObjectExtractor.extract(stripped)
    if span is None:
        excerpt = ErrorContextBuilder.build_excerpt(text, config.max_error_context)
        logger.warning(f"No JSON object found in model output: {excerpt!r}")
        return ParseOutcome.failed(FailureKind.NO_JSON_OBJECT, excerpt)

    validator.validate_span(span)

    outcome = try_direct(span, config)
    if config.preprocessing_config.repair_enabled:
        outcome = outcome.or_else(lambda: try_repaired(span, config))

    if outcome.failure is not None:
        logger.warning(
            f"Could not recover JSON ({outcome.failure.value}): "
            f"{ErrorContextBuilder.build_excerpt(span, config.max_error_context)!r}"
        )
    elif outcome.repaired:
        logger.info(f"Recovered JSON object after repair ({len(span)} chars)")
    else:
        logger.debug("Parsed JSON object directly")
    return outcome
