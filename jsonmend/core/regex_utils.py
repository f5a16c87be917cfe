"""
Safe regex utilities with timeout protection.

This module provides timeout-protected regex operations to prevent
runaway matching from catastrophic backtracking on adversarial model output.
The ``regex`` package enforces the timeout natively, so no signals or helper
threads are involved and the helpers are safe to call from any thread.
"""

import logging
from typing import Callable, Union

import regex

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 1.0

Replacement = Union[str, Callable[["regex.Match[str]"], str]]


def safe_regex_sub(
    pattern: str,
    repl: Replacement,
    string: str,
    flags: int = 0,
    timeout: float = DEFAULT_TIMEOUT,
    count: int = 0,
) -> str:
    """
    Perform regex substitution with timeout protection.

    Args:
        pattern: Regular expression pattern
        repl: Replacement string or function
        string: Input string to process
        flags: Regex flags
        timeout: Timeout in seconds
        count: Maximum number of substitutions (0 for all)

    Returns:
        String with substitutions applied, or original string if timeout/error
    """
    try:
        return regex.sub(pattern, repl, string, count=count, flags=flags, timeout=timeout)
    except TimeoutError:
        logger.error(f"Regex sub timed out on pattern: {pattern[:50]}")
        return string
    except (regex.error, ValueError, TypeError):
        return string

