"""Core data models for sensitive value masking."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import IncorrectConfigurationError

PROPERTY_NAME_PLACEHOLDER = "[PROPERTY_NAME]"
DEFAULT_MASK = "********"
NULL_MESSAGE = "null"


class SensitiveValuePattern(str, Enum):
    """Built-in shapes a sensitive `name=value` pair can appear in."""

    EQUAL_AND_SQUARE_BRACKETS = "EQUAL_AND_SQUARE_BRACKETS"
    EQUAL_AND_BRACKETS = "EQUAL_AND_BRACKETS"
    EQUAL_AND_DOUBLE_QUOTES = "EQUAL_AND_DOUBLE_QUOTES"
    JSON = "JSON"

    @classmethod
    def from_name(cls, name: str) -> SensitiveValuePattern:
        """Resolve a shape identifier (case-insensitive)."""
        key = name.strip().upper() if isinstance(name, str) else ""
        try:
            return cls[key]
        except KeyError as e:
            valid = ", ".join(p.name for p in cls)
            raise IncorrectConfigurationError(
                f"Unknown pattern name '{name}'. Valid values: {valid}."
            ) from e


@dataclass(frozen=True, slots=True)
class MaskMatch:
    """One located sensitive value.

    `start`/`end` cover the whole decorated occurrence and are used for overlap
    arbitration; `value_start`/`value_end` cover only the value to replace.
    """

    start: int
    end: int
    value_start: int
    value_end: int
    raw_value: str
