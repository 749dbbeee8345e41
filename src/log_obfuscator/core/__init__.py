"""Masking engine: strategies, pattern registry, executors and facade."""

from __future__ import annotations

from .config import MaskingSettings, build_masker, load_settings_file, resolve_masking_settings
from .errors import IncorrectConfigurationError
from .json_masking import mask_json
from .masker import MaskingConfig, SensitiveDataMasker
from .models import DEFAULT_MASK, PROPERTY_NAME_PLACEHOLDER, MaskMatch, SensitiveValuePattern
from .patterns import CompiledMatcher, compile_matchers
from .strategies import FullMask, MaskingStrategy, ShortcutMask, make_strategy
from .text_masking import mask_text

__all__ = [
    "DEFAULT_MASK",
    "PROPERTY_NAME_PLACEHOLDER",
    "CompiledMatcher",
    "FullMask",
    "IncorrectConfigurationError",
    "MaskMatch",
    "MaskingConfig",
    "MaskingSettings",
    "MaskingStrategy",
    "SensitiveDataMasker",
    "SensitiveValuePattern",
    "ShortcutMask",
    "build_masker",
    "compile_matchers",
    "load_settings_file",
    "make_strategy",
    "mask_json",
    "mask_text",
    "resolve_masking_settings",
]
