"""
Core interfaces and protocols for the JSON recovery system.

This module defines the contracts that preprocessing components must implement,
enabling flexible composition of the repair pipeline.
"""

from typing import Protocol

from ..utils.config import PreprocessingConfig


class PreprocessingStep(Protocol):
    """Protocol for preprocessing steps in the preprocessing pipeline."""

    def process(self, text: str, config: PreprocessingConfig) -> str:
        """Process the input text according to this preprocessing step."""
        ...

    def should_apply(self, config: PreprocessingConfig) -> bool:
        """Determine if this step should be applied given the configuration."""
        ...
