"""Pattern registry: turn (shape | custom template) x field name into matchers.

Each matcher isolates the value of one sensitive field in one textual shape, e.g.
`firstName=[Gustaw]` -> `Gustaw`. Decorations are never part of the value.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from .errors import IncorrectConfigurationError
from .models import PROPERTY_NAME_PLACEHOLDER, MaskMatch, SensitiveValuePattern

LOGGER = logging.getLogger(__name__)

# (opening decoration, value class) per text shape. JSON has no text matcher.
# Values never span lines.
_SHAPE_DECORATIONS: dict[SensitiveValuePattern, tuple[str, str]] = {
    SensitiveValuePattern.EQUAL_AND_SQUARE_BRACKETS: (r"=\[", r"([^\]\n]*)\]"),
    SensitiveValuePattern.EQUAL_AND_BRACKETS: (r"=\(", r"([^)\n]*)\)"),
    SensitiveValuePattern.EQUAL_AND_DOUBLE_QUOTES: (r'="', r'([^"\n]*)"'),
}

# A field name must not be the tail of a longer identifier.
_NAME_BOUNDARY = r"(?<!\w)"


def shape_template(shape: SensitiveValuePattern) -> str | None:
    """Return the regex template of a text shape, or None for JSON."""
    deco = _SHAPE_DECORATIONS.get(shape)
    if deco is None:
        return None
    opening, value = deco
    return f"{PROPERTY_NAME_PLACEHOLDER}{opening}{value}"


@dataclass(frozen=True, slots=True)
class CompiledMatcher:
    """Ready-to-run matcher for one (source, field) pair.

    `source` is either a built-in shape or the custom template text it was
    compiled from.
    """

    source: SensitiveValuePattern | str
    field_name: str
    regex: re.Pattern[str]

    def finditer(self, text: str) -> Iterator[MaskMatch]:
        """Yield non-overlapping value matches in `text`.

        A match whose value group did not take part (an optional group in a
        custom template) carries nothing to mask and is skipped.
        """
        for m in self.regex.finditer(text):
            if m.start(1) == -1:
                continue
            yield MaskMatch(
                start=m.start(),
                end=m.end(),
                value_start=m.start(1),
                value_end=m.end(1),
                raw_value=m.group(1),
            )


def _compile_shape(shape: SensitiveValuePattern, field_name: str) -> re.Pattern[str]:
    opening, value = _SHAPE_DECORATIONS[shape]
    return re.compile(_NAME_BOUNDARY + re.escape(field_name) + opening + value)


def _compile_template(template: str, field_name: str) -> re.Pattern[str]:
    return re.compile(template.replace(PROPERTY_NAME_PLACEHOLDER, re.escape(field_name)))


def validate_custom_template(template: str) -> str:
    """Check a custom template up front and return it unchanged.

    A template needs the `[PROPERTY_NAME]` token, valid regex syntax and exactly
    one capturing group for the value.
    """
    if not isinstance(template, str) or not template.strip():
        raise IncorrectConfigurationError("Custom pattern can not be null or empty")
    if PROPERTY_NAME_PLACEHOLDER not in template:
        raise IncorrectConfigurationError(
            f"Custom pattern '{template}' must contain the {PROPERTY_NAME_PLACEHOLDER} placeholder"
        )
    try:
        compiled = _compile_template(template, "field")
    except re.error as e:
        raise IncorrectConfigurationError(f"Custom pattern '{template}' is not a valid regex: {e}") from e
    if compiled.groups != 1:
        raise IncorrectConfigurationError(
            f"Custom pattern '{template}' must have exactly one capturing group, found {compiled.groups}"
        )
    return template


def compile_matchers(
    shapes: Iterable[SensitiveValuePattern],
    custom_templates: Iterable[str],
    fields: Iterable[str],
) -> tuple[CompiledMatcher, ...]:
    """Build one matcher per (shape or template, field) pair.

    Order follows registration: shapes first, then custom templates. Repeated
    shapes, templates or fields are compiled once.
    """
    field_list = list(dict.fromkeys(fields))
    out: list[CompiledMatcher] = []

    for shape in dict.fromkeys(shapes):
        if shape not in _SHAPE_DECORATIONS:
            continue
        for name in field_list:
            out.append(CompiledMatcher(source=shape, field_name=name, regex=_compile_shape(shape, name)))

    for template in dict.fromkeys(custom_templates):
        for name in field_list:
            out.append(CompiledMatcher(source=template, field_name=name, regex=_compile_template(template, name)))

    LOGGER.debug("Compiled %d matchers for %d fields", len(out), len(field_list))
    return tuple(out)
