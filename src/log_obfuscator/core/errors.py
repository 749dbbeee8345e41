"""Errors raised by the masking engine."""

from __future__ import annotations


class IncorrectConfigurationError(ValueError):
    """Raised when the masker is given a configuration it cannot run with."""
