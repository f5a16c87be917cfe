"""
Preprocessing pipeline for composable JSON preprocessing steps.

This module implements the pipeline pattern to allow flexible composition
of preprocessing steps based on configuration.
"""

from typing import Optional

from ..core.interfaces import PreprocessingStep
from ..utils.config import PreprocessingConfig
from .escapes import EscapeNeutralizer
from .repairers import TruncationRepairer
from .sanitizers import ControlSanitizer


class PreprocessingPipeline:
    """Manages a sequence of preprocessing steps applied to JSON text."""

    def __init__(self, steps: Optional[list[PreprocessingStep]] = None):
        self.steps = steps or []

    def add_step(self, step: PreprocessingStep) -> None:
        """Add a preprocessing step to the pipeline."""
        self.steps.append(step)

    def process(self, text: str, config: Optional[PreprocessingConfig] = None) -> str:
        """Apply all applicable preprocessing steps to the text."""
        if config is None:
            config = PreprocessingConfig()

        result = text
        for step in self.steps:
            if step.should_apply(config):
                result = step.process(result, config)
        return result

    @classmethod
    def create_repair_pipeline(cls) -> "PreprocessingPipeline":
        """Create the pipeline run on a span that failed the direct parse."""
        pipeline = cls()

        # Neutralization must come first: the sanitizer introduces backslashes
        # of its own that have to survive into the reparse.
        pipeline.add_step(EscapeNeutralizer())
        pipeline.add_step(ControlSanitizer())
        pipeline.add_step(TruncationRepairer())

        return pipeline
