"""Masking engine facade.

Holds the configuration (fields, shapes, custom templates, strategy), validates
every change eagerly, and masks messages with the text and JSON executors.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from .errors import IncorrectConfigurationError
from .json_masking import mask_json
from .models import NULL_MESSAGE, SensitiveValuePattern
from .patterns import CompiledMatcher, compile_matchers, validate_custom_template
from .strategies import MaskingStrategy, StrategyName, make_strategy
from .text_masking import mask_text

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MaskingConfig:
    """Immutable snapshot of what to mask and how."""

    fields: tuple[str, ...] = ()
    shapes: tuple[SensitiveValuePattern, ...] = ()
    custom_templates: tuple[str, ...] = ()
    strategy: StrategyName = "full"
    mask: str | None = None


@dataclass(frozen=True, slots=True)
class _CompiledState:
    config: MaskingConfig
    strategy: MaskingStrategy
    matchers: tuple[CompiledMatcher, ...]
    json_fields: frozenset[str] = field(default_factory=frozenset)


def _validate_field_name(name: str) -> str:
    if not isinstance(name, str) or not name.strip():
        raise IncorrectConfigurationError("Field name can not be null or empty")
    return name


def _compile(config: MaskingConfig) -> _CompiledState:
    strategy = make_strategy(config.strategy, mask=config.mask)
    matchers = compile_matchers(config.shapes, config.custom_templates, config.fields)
    json_fields = frozenset(config.fields) if SensitiveValuePattern.JSON in config.shapes else frozenset()
    return _CompiledState(config=config, strategy=strategy, matchers=matchers, json_fields=json_fields)


class SensitiveDataMasker:
    """Mask configured sensitive values in rendered log messages.

    Configure once through the ``add_*``/``set_*`` builders (each raises
    :class:`IncorrectConfigurationError` immediately on bad input), then call
    :meth:`process` per message. Every builder swaps in a freshly compiled,
    immutable state, so ``process`` never mutates anything shared.
    """

    def __init__(self, config: MaskingConfig | None = None) -> None:
        config = config or MaskingConfig()
        for name in config.fields:
            _validate_field_name(name)
        for template in config.custom_templates:
            validate_custom_template(template)
        shapes = tuple(SensitiveValuePattern.from_name(s) for s in config.shapes)
        strategy = config.strategy.strip().lower() if isinstance(config.strategy, str) else config.strategy
        self._state = _compile(replace(config, shapes=shapes, strategy=strategy))

    @property
    def config(self) -> MaskingConfig:
        return self._state.config

    @property
    def strategy(self) -> MaskingStrategy:
        return self._state.strategy

    @property
    def matchers(self) -> tuple[CompiledMatcher, ...]:
        return self._state.matchers

    def _update(self, **changes: object) -> SensitiveDataMasker:
        config = replace(self._state.config, **changes)
        self._state = _compile(config)
        LOGGER.debug(
            "Masking configuration updated: %d fields, shapes=%s, %d custom templates, strategy=%s",
            len(config.fields),
            [s.name for s in config.shapes],
            len(config.custom_templates),
            config.strategy,
        )
        return self

    def add_field_name(self, name: str) -> SensitiveDataMasker:
        """Register a sensitive field name."""
        _validate_field_name(name)
        fields = self.config.fields
        if name in fields:
            return self
        return self._update(fields=(*fields, name))

    def add_field_names(self, names: Iterable[str]) -> SensitiveDataMasker:
        for name in names:
            self.add_field_name(name)
        return self

    def add_shape(self, shape: SensitiveValuePattern | str) -> SensitiveDataMasker:
        """Register a built-in shape by enum member or identifier."""
        resolved = shape if isinstance(shape, SensitiveValuePattern) else SensitiveValuePattern.from_name(shape)
        shapes = self.config.shapes
        if resolved in shapes:
            return self
        return self._update(shapes=(*shapes, resolved))

    def add_custom_template(self, template: str) -> SensitiveDataMasker:
        """Register a regex template with `[PROPERTY_NAME]` and one value group."""
        validate_custom_template(template)
        templates = self.config.custom_templates
        if template in templates:
            return self
        return self._update(custom_templates=(*templates, template))

    def set_mask(self, mask: str) -> SensitiveDataMasker:
        """Use `mask` as the full-strategy placeholder."""
        if not isinstance(mask, str) or not mask:
            raise IncorrectConfigurationError("Mask can not be null or empty")
        return self._update(mask=mask)

    def use_strategy(self, name: StrategyName | str) -> SensitiveDataMasker:
        """Select the masking strategy: ``"full"`` or ``"shortcut"``."""
        key = name.strip().lower() if isinstance(name, str) else name
        make_strategy(key, mask=self.config.mask)
        return self._update(strategy=key)

    def process(self, message: str | None) -> str:
        """Return `message` with every configured sensitive value masked.

        ``None`` renders as ``"null"``; an empty message is returned as is.
        """
        if message is None:
            return NULL_MESSAGE
        if not message:
            return message

        state = self._state
        out = mask_text(message, state.matchers, state.strategy)
        if state.json_fields:
            out = mask_json(out, state.json_fields, state.strategy)
        return out
