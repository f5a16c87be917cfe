"""
jsonmend Security and Validation System.

This module provides security limits and exception types.
"""

from .exceptions import ParseError, SecurityError
from .limits import LimitValidator

__all__ = ['ParseError', 'SecurityError', 'LimitValidator']
