"""
Base class for the text stages of the recovery pipeline.

A stage is a pure string-to-string function; the pipeline asks each one
whether the current PreprocessingConfig enables it before running it.
"""

from typing import Optional

from ..utils.config import PreprocessingConfig


class PreprocessingStepBase:
    """
    Base class for preprocessing steps.

    Subclasses name the boolean PreprocessingConfig field that switches them
    on in ``enabled_by``; a step without one always runs.
    """

    enabled_by: Optional[str] = None

    def should_apply(self, config: PreprocessingConfig) -> bool:
        """Check the config flag this step is bound to."""
        if self.enabled_by is None:
            return True
        return bool(getattr(config, self.enabled_by))

    def process(self, text: str, config: PreprocessingConfig) -> str:
        """Transform text. Must be implemented by subclasses."""
        raise NotImplementedError(f"{type(self).__name__} must implement process()")
