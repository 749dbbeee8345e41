"""Text executor: mask decorated `name=value` occurrences in free-form text."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .models import MaskMatch
from .patterns import CompiledMatcher
from .strategies import MaskingStrategy


def collect_matches(text: str, matchers: Iterable[CompiledMatcher]) -> list[MaskMatch]:
    """Return the matches to apply, sorted and free of overlaps.

    Spans are collected over the original text from every matcher first; when
    two occurrences overlap the one starting earlier wins (registration order
    breaks ties).
    """
    found: list[tuple[int, int, MaskMatch]] = []
    for order, matcher in enumerate(matchers):
        for m in matcher.finditer(text):
            found.append((m.start, order, m))
    found.sort(key=lambda item: (item[0], item[1]))

    selected: list[MaskMatch] = []
    last_end = -1
    for _, _, m in found:
        if m.start < last_end:
            continue
        selected.append(m)
        last_end = m.end
    return selected


def mask_text(text: str, matchers: Sequence[CompiledMatcher], strategy: MaskingStrategy) -> str:
    """Replace every matched value with `strategy.mask(value)` in one pass."""
    if not text or not matchers:
        return text

    matches = collect_matches(text, matchers)
    if not matches:
        return text

    parts: list[str] = []
    pos = 0
    for m in matches:
        parts.append(text[pos : m.value_start])
        parts.append(strategy.mask(m.raw_value))
        pos = m.value_end
    parts.append(text[pos:])
    return "".join(parts)
