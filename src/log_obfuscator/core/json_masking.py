"""JSON executor: mask sensitive keys inside JSON objects embedded in text.

The message may be a JSON document itself or carry JSON objects anywhere inside
surrounding text (`payload={"firstName":"Gustaw"} other=[x]`). Each object is
decoded, walked at every depth, and spliced back only when something changed.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Collection
from typing import Any

from .strategies import MaskingStrategy

LOGGER = logging.getLogger(__name__)

_DECODER = json.JSONDecoder()


def _scalar_text(value: Any) -> str:
    """Text a scalar is masked from: strings as-is, numbers/bools as JSON."""
    if isinstance(value, str):
        return value
    return json.dumps(value)


def mask_tree(
    node: Any,
    fields: Collection[str],
    strategy: MaskingStrategy,
    *,
    sensitive: bool = False,
) -> bool:
    """Mask sensitive scalars in a decoded JSON tree in place.

    Returns True when at least one value was replaced. A sensitive key holding
    an object or array is descended into rather than replaced; scalar items of
    an array held by a sensitive key are masked. `null` is kept.
    """
    changed = False
    if isinstance(node, dict):
        for key, value in node.items():
            if isinstance(value, (dict, list)):
                changed = mask_tree(value, fields, strategy, sensitive=key in fields) or changed
            elif key in fields and value is not None:
                node[key] = strategy.mask(_scalar_text(value))
                changed = True
    elif isinstance(node, list):
        for i, item in enumerate(node):
            if isinstance(item, (dict, list)):
                changed = mask_tree(item, fields, strategy, sensitive=sensitive) or changed
            elif sensitive and item is not None:
                node[i] = strategy.mask(_scalar_text(item))
                changed = True
    return changed


def _dump(obj: Any) -> str:
    return json.dumps(obj, ensure_ascii=False, separators=(",", ":"))


def mask_json(text: str, fields: Collection[str], strategy: MaskingStrategy) -> str:
    """Mask every sensitive key of every JSON object found in `text`.

    Candidates that do not decode (unbalanced braces, plain text in braces,
    oversized integers) or that nest too deeply to walk are left as they are.
    """
    if not text or not fields or "{" not in text:
        return text

    parts: list[str] = []
    copied_to = 0
    pos = text.find("{")
    while pos != -1:
        try:
            obj, end = _DECODER.raw_decode(text, pos)
        except (ValueError, RecursionError):
            LOGGER.debug("Skipping non-JSON candidate at offset %d", pos)
            pos = text.find("{", pos + 1)
            continue

        if isinstance(obj, dict):
            try:
                masked = _dump(obj) if mask_tree(obj, fields, strategy) else None
            except RecursionError:
                LOGGER.debug("Skipping JSON object nested too deeply at offset %d", pos)
                masked = None
            if masked is not None:
                parts.append(text[copied_to:pos])
                parts.append(masked)
                copied_to = end
        pos = text.find("{", end)

    if not parts:
        return text
    parts.append(text[copied_to:])
    return "".join(parts)
