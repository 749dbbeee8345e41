"""Masking settings: pydantic model, file loading and environment overrides."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import IncorrectConfigurationError
from .masker import MaskingConfig, SensitiveDataMasker
from .models import SensitiveValuePattern

CONFIG_ENV = "LOG_OBFUSCATOR_CONFIG"
FIELDS_ENV = "LOG_OBFUSCATOR_FIELDS"
SHAPES_ENV = "LOG_OBFUSCATOR_SHAPES"
STRATEGY_ENV = "LOG_OBFUSCATOR_STRATEGY"
MASK_ENV = "LOG_OBFUSCATOR_MASK"


class MaskingSettings(BaseModel):
    fields: list[str] = Field(default_factory=list, description="Sensitive field names.")
    shapes: list[SensitiveValuePattern] = Field(
        default_factory=list, description="Built-in shapes the fields appear in."
    )
    custom_templates: list[str] = Field(
        default_factory=list,
        description="Regex templates with a [PROPERTY_NAME] token and one value group.",
    )
    strategy: Literal["full", "shortcut"] = Field(
        default="full", description="full: fixed placeholder; shortcut: first-length-last."
    )
    mask: str | None = Field(default=None, description="Placeholder for the full strategy.")

    @field_validator("shapes", mode="before")
    @classmethod
    def _upper_shapes(cls, value: object) -> object:
        if isinstance(value, list):
            return [v.strip().upper() if isinstance(v, str) else v for v in value]
        return value

    @field_validator("fields")
    @classmethod
    def _non_blank_fields(cls, value: list[str]) -> list[str]:
        if any(not name.strip() for name in value):
            raise ValueError("field names must not be blank")
        return value

    @field_validator("mask")
    @classmethod
    def _non_empty_mask(cls, value: str | None) -> str | None:
        if value is not None and not value:
            raise ValueError("mask must not be empty")
        return value

    def to_config(self) -> MaskingConfig:
        return MaskingConfig(
            fields=tuple(self.fields),
            shapes=tuple(self.shapes),
            custom_templates=tuple(self.custom_templates),
            strategy=self.strategy,
            mask=self.mask,
        )


def _split_csv(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


def load_settings_file(path: str | Path) -> MaskingSettings:
    """Read settings from a JSON file."""
    p = Path(path)
    try:
        return MaskingSettings.model_validate_json(p.read_text(encoding="utf-8"))
    except OSError as exc:
        raise IncorrectConfigurationError(f"Cannot read masking settings from {p}: {exc}") from exc
    except ValidationError as exc:
        raise IncorrectConfigurationError(f"Invalid masking settings in {p}: {exc}") from exc


def resolve_masking_settings(settings: MaskingSettings | None = None) -> MaskingSettings:
    """Return settings with optional env overrides applied."""
    if settings is None:
        config_path = os.getenv(CONFIG_ENV)
        settings = load_settings_file(config_path) if config_path else MaskingSettings()

    updates: dict[str, object] = {}
    fields = os.getenv(FIELDS_ENV)
    if fields:
        updates["fields"] = _split_csv(fields)
    shapes = os.getenv(SHAPES_ENV)
    if shapes:
        updates["shapes"] = _split_csv(shapes)
    strategy = os.getenv(STRATEGY_ENV)
    if strategy:
        updates["strategy"] = strategy.strip().lower()
    mask = os.getenv(MASK_ENV)
    if mask is not None:
        updates["mask"] = mask

    if not updates:
        return settings

    try:
        return MaskingSettings.model_validate({**settings.model_dump(), **updates})
    except ValidationError as exc:
        raise IncorrectConfigurationError(f"Invalid masking settings from environment: {exc}") from exc


def build_masker(settings: MaskingSettings | None = None) -> SensitiveDataMasker:
    """Build a masker from (resolved) settings."""
    settings = settings if settings is not None else resolve_masking_settings()
    return SensitiveDataMasker(settings.to_config())
