"""MCP tool implementations.

This module contains the *implementation* behind the exposed MCP tools.
Keep this layer thin: validate inputs, translate them into core calls, and
return JSON-serializable data structures.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from contextlib import aclosing
from pathlib import Path
from typing import Any

from log_obfuscator.core.config import MaskingSettings, build_masker, resolve_masking_settings
from log_obfuscator.core.file_masking import iter_masked_lines
from log_obfuscator.core.masker import SensitiveDataMasker

DEFAULT_LIMIT = 200
HARD_LIMIT = 5000
BASE_DIR_ENV = "LOG_OBFUSCATOR_BASE_DIR"


def base_dir() -> Path:
    """Return the resolved base directory for file access."""
    raw = os.getenv(BASE_DIR_ENV, os.getcwd())
    return Path(raw).resolve()


def safe_resolve(path: str) -> Path:
    """Resolve a path under the configured base directory."""
    base = base_dir()
    p = Path(path).expanduser()
    if not p.is_absolute():
        p = base / p
    p = p.resolve()
    if base not in p.parents and p != base:
        raise ValueError("Path escapes base dir")
    return p


def _masker_for(
    *,
    fields: Sequence[str] | None,
    shapes: Sequence[str] | None,
    custom_templates: Sequence[str] | None,
    strategy: str | None,
    mask: str | None,
) -> SensitiveDataMasker:
    """Build a masker from tool arguments, falling back to server settings.

    Any explicitly passed argument replaces the corresponding setting.
    """
    settings = resolve_masking_settings()
    updates: dict[str, Any] = {}
    if fields is not None:
        updates["fields"] = list(fields)
    if shapes is not None:
        updates["shapes"] = list(shapes)
    if custom_templates is not None:
        updates["custom_templates"] = list(custom_templates)
    if strategy is not None:
        updates["strategy"] = strategy.strip().lower()
    if mask is not None:
        updates["mask"] = mask
    if updates:
        settings = MaskingSettings.model_validate({**settings.model_dump(), **updates})
    if not settings.fields:
        raise ValueError("No sensitive fields configured. Pass `fields` or set LOG_OBFUSCATOR_FIELDS.")
    return build_masker(settings)


def mask_text_impl(
    *,
    text: str,
    fields: Sequence[str] | None = None,
    shapes: Sequence[str] | None = None,
    custom_templates: Sequence[str] | None = None,
    strategy: str | None = None,
    mask: str | None = None,
) -> dict[str, Any]:
    """Implementation for the `mask_text` MCP tool."""
    masker = _masker_for(
        fields=fields,
        shapes=shapes,
        custom_templates=custom_templates,
        strategy=strategy,
        mask=mask,
    )
    return {"masked": masker.process(text)}


async def mask_log_file_impl(
    *,
    log_path: str,
    fields: Sequence[str] | None = None,
    shapes: Sequence[str] | None = None,
    custom_templates: Sequence[str] | None = None,
    strategy: str | None = None,
    mask: str | None = None,
    contains: str | None = None,
    limit: int | None = None,
) -> dict[str, Any]:
    """Implementation for the `mask_log_file` MCP tool.

    Notes
    -----
    - `log_path` is resolved under LOG_OBFUSCATOR_BASE_DIR (default: cwd).
    - `contains` filters on the raw line, before masking, so it can select
      lines by a sensitive value without echoing it back.
    - `limit` defaults to DEFAULT_LIMIT and is capped at HARD_LIMIT.
    """
    if limit is None:
        limit = DEFAULT_LIMIT
    if limit <= 0:
        raise ValueError("limit must be > 0")
    if limit > HARD_LIMIT:
        limit = HARD_LIMIT

    masker = _masker_for(
        fields=fields,
        shapes=shapes,
        custom_templates=custom_templates,
        strategy=strategy,
        mask=mask,
    )
    path = safe_resolve(log_path)

    lines: list[dict[str, Any]] = []
    async with aclosing(iter_masked_lines(path, masker, contains=contains)) as masked:
        async for line_no, line in masked:
            lines.append({"line_no": line_no, "text": line})
            if len(lines) >= limit:
                break

    return {"count": len(lines), "lines": lines}
