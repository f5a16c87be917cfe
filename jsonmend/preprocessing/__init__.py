"""
JSON preprocessing module.

This module provides the text stages of the recovery pipeline. Each stage is a
focused, single-responsibility step; the repair stages are composed into a
pipeline that runs only when the extracted span is not valid JSON as it stands.
"""

from .base import PreprocessingStepBase
from .escapes import EscapeNeutralizer, restore_placeholders
from .extractors import FenceStripper, ObjectExtractor
from .pipeline import PreprocessingPipeline
from .repairers import StructureState, TruncationRepairer, scan_structure
from .sanitizers import ControlSanitizer

__all__ = [
    "PreprocessingPipeline",
    "PreprocessingStepBase",
    "FenceStripper",
    "ObjectExtractor",
    "EscapeNeutralizer",
    "ControlSanitizer",
    "TruncationRepairer",
    "StructureState",
    "scan_structure",
    "restore_placeholders",
]
