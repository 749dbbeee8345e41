"""`logging` integration: a formatter that masks the rendered record.

Usable directly or from ``logging.config.dictConfig``::

    "formatters": {
        "masked": {
            "()": "log_obfuscator.MaskingFormatter",
            "fmt": "%(levelname)-5s %(name)s: %(message)s",
            "fields": ["firstName", "email"],
            "shapes": ["EQUAL_AND_SQUARE_BRACKETS", "JSON"],
            "mask": "***SENSITIVE*DATA***",
        }
    }
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from .core.masker import MaskingConfig, SensitiveDataMasker


class MaskingFormatter(logging.Formatter):
    """Format a record as usual, then mask configured sensitive values."""

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: str = "%",
        validate: bool = True,
        *,
        fields: Sequence[str] = (),
        shapes: Sequence[str] = (),
        custom_templates: Sequence[str] = (),
        strategy: str = "full",
        mask: str | None = None,
        masker: SensitiveDataMasker | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(fmt, datefmt, style, validate, **kwargs)
        if masker is None:
            masker = SensitiveDataMasker(
                MaskingConfig(
                    fields=tuple(fields),
                    shapes=tuple(shapes),
                    custom_templates=tuple(custom_templates),
                    strategy=strategy.strip().lower(),
                    mask=mask,
                )
            )
        self.masker = masker

    def format(self, record: logging.LogRecord) -> str:
        return self.masker.process(super().format(record))
