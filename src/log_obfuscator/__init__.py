"""Mask sensitive values in log text before it is written."""

from __future__ import annotations

from .core import (
    IncorrectConfigurationError,
    MaskingConfig,
    MaskingSettings,
    SensitiveDataMasker,
    SensitiveValuePattern,
    build_masker,
)
from .logging_adapter import MaskingFormatter

__all__ = [
    "IncorrectConfigurationError",
    "MaskingConfig",
    "MaskingFormatter",
    "MaskingSettings",
    "SensitiveDataMasker",
    "SensitiveValuePattern",
    "build_masker",
]
