"""Value masking strategies.

A strategy turns a raw sensitive value into the text written in its place. Both
executors (text and JSON) share the same strategy instance.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol

from .errors import IncorrectConfigurationError
from .models import DEFAULT_MASK

StrategyName = Literal["full", "shortcut"]


class MaskingStrategy(Protocol):
    """Strategy interface: return the replacement for a raw value."""

    def mask(self, raw_value: str) -> str:
        """Mask a raw value."""
        ...


@dataclass(frozen=True, slots=True)
class FullMask:
    """Replace every value with the same placeholder, whatever its length."""

    placeholder: str = DEFAULT_MASK

    def __post_init__(self) -> None:
        if not isinstance(self.placeholder, str) or not self.placeholder:
            raise IncorrectConfigurationError("Mask can not be null or empty")

    def mask(self, raw_value: str) -> str:
        return self.placeholder


@dataclass(frozen=True, slots=True)
class ShortcutMask:
    """Reveal first char, length and last char: `Gustaw` -> `G-6-w`."""

    separator: str = "-"

    def mask(self, raw_value: str) -> str:
        if not raw_value:
            return ""
        sep = self.separator
        return f"{raw_value[0]}{sep}{len(raw_value)}{sep}{raw_value[-1]}"


def make_strategy(name: StrategyName | str = "full", *, mask: str | None = None) -> MaskingStrategy:
    """Build a strategy by name.

    `mask` is validated whenever given but only used by the full strategy.
    """
    full = FullMask() if mask is None else FullMask(mask)
    key = name.strip().lower() if isinstance(name, str) else ""
    if key == "full":
        return full
    if key == "shortcut":
        return ShortcutMask()
    raise IncorrectConfigurationError(f"Unknown masking strategy '{name}'. Valid values: full, shortcut.")
