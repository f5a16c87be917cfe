"""
Configuration and limits for jsonmend parsing.

This module defines resource limits and configuration options for recovering
JSON from language-model output.
"""

from collections.abc import Iterable
from dataclasses import dataclass, fields
from typing import Any, Optional


@dataclass
class ParseLimits:
    """Resource limits applied before any repair work is done."""

    max_input_size: int = 10 * 1024 * 1024
    max_nesting_depth: int = 500

    def __post_init__(self) -> None:
        if self.max_input_size <= 0:
            raise ValueError("max_input_size must be positive")
        if self.max_nesting_depth <= 0:
            raise ValueError("max_nesting_depth must be positive")


@dataclass
class ErrorReporting:
    """Error reporting and context settings."""

    max_error_context: int = 50

    def __post_init__(self) -> None:
        if self.max_error_context < 0:
            raise ValueError("max_error_context must not be negative")


@dataclass
class PreprocessingConfig:
    """Granular control over the extraction and repair stages."""

    strip_fences: bool = True
    neutralize_escapes: bool = True
    sanitize_control_chars: bool = True
    repair_truncation: bool = True
    trim_dangling_separators: bool = True

    @property
    def repair_enabled(self) -> bool:
        """Whether any stage after the direct parse can change the text."""
        return (
            self.neutralize_escapes
            or self.sanitize_control_chars
            or self.repair_truncation
        )

    @classmethod
    def conservative(cls) -> "PreprocessingConfig":
        """Only strip fences; accept nothing that needs repair."""
        return cls(
            strip_fences=True,
            neutralize_escapes=False,
            sanitize_control_chars=False,
            repair_truncation=False,
            trim_dangling_separators=False,
        )

    @classmethod
    def aggressive(cls) -> "PreprocessingConfig":
        """Create a configuration with every repair stage enabled."""
        return cls()

    @classmethod
    def from_features(cls, enabled_features: Iterable[str]) -> "PreprocessingConfig":
        """Create configuration from a set of enabled feature names."""
        config = cls(
            strip_fences=False,
            neutralize_escapes=False,
            sanitize_control_chars=False,
            repair_truncation=False,
            trim_dangling_separators=False,
        )
        for feature_name in enabled_features:
            if feature_name not in {f.name for f in fields(cls)}:
                raise ValueError(f"Unknown preprocessing feature: {feature_name}")
            setattr(config, feature_name, True)
        return config


@dataclass
class ParseConfig:
    """Configuration options for jsonmend parsing."""

    limits: Optional[ParseLimits] = None
    error_reporting: Optional[ErrorReporting] = None
    preprocessing_config: Optional[PreprocessingConfig] = None

    def __init__(
        self,
        *,
        limits: Optional[ParseLimits] = None,
        error_reporting: Optional[ErrorReporting] = None,
        preprocessing_config: Optional[PreprocessingConfig] = None,
        **config_options: Any,  # flat shortcuts for the nested settings
    ):
        self.limits = limits or ParseLimits(
            max_input_size=config_options.get("max_input_size", 10 * 1024 * 1024),
            max_nesting_depth=config_options.get("max_nesting_depth", 500),
        )
        self.error_reporting = error_reporting or ErrorReporting(
            max_error_context=config_options.get("max_error_context", 50),
        )
        if preprocessing_config is not None:
            self.preprocessing_config = preprocessing_config
        elif config_options.get("strict", False):
            self.preprocessing_config = PreprocessingConfig.conservative()
        else:
            self.preprocessing_config = PreprocessingConfig.aggressive()

    @property
    def max_input_size(self) -> int:
        """Maximum input size in characters."""
        assert self.limits is not None
        return self.limits.max_input_size

    @property
    def max_nesting_depth(self) -> int:
        """Maximum nesting depth for JSON structures."""
        assert self.limits is not None
        return self.limits.max_nesting_depth

    @property
    def max_error_context(self) -> int:
        """Characters kept from each end of the text in failure diagnostics."""
        assert self.error_reporting is not None
        return self.error_reporting.max_error_context
