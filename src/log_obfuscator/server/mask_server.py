"""MCP server entrypoint (stdio transport).

This module wires together:
- Tools: mask a text snippet or a log file
- Resources: shapes catalog, settings, schema and a sample log

Run locally (stdio):
    python -m log_obfuscator.server.mask_server
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Sequence
from typing import Any

from mcp.server.fastmcp import FastMCP

from log_obfuscator.resources.registry import register_resources
from log_obfuscator.tools.mask import mask_log_file_impl, mask_text_impl

LOGGER = logging.getLogger(__name__)


def _configure_logging() -> None:
    """Configure a reasonable default logging setup.

    The MCP client typically captures stderr; keeping logs concise makes them easier to consume.
    """
    level_name = os.getenv("LOG_OBFUSCATOR_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


mcp = FastMCP("log-obfuscator", json_response=True)

register_resources(mcp)


@mcp.tool()
def mask_text(
    text: str,
    fields: Sequence[str] | None = None,
    shapes: Sequence[str] | None = None,
    custom_templates: Sequence[str] | None = None,
    strategy: str | None = None,
    mask: str | None = None,
) -> dict[str, Any]:
    """Mask sensitive values in a text snippet.

    Parameters
    ----------
    text:
        Log text to mask. May span multiple lines and embed JSON objects.
    fields:
        Sensitive field names (e.g., ["firstName", "idCardNumber"]).
        Defaults to LOG_OBFUSCATOR_FIELDS / the configured settings file.
    shapes:
        Shapes the fields appear in: EQUAL_AND_SQUARE_BRACKETS (name=[v]),
        EQUAL_AND_BRACKETS (name=(v)), EQUAL_AND_DOUBLE_QUOTES (name="v"), JSON.
    custom_templates:
        Regexes containing [PROPERTY_NAME] and one capturing group for the value,
        e.g. "[PROPERTY_NAME]==>'([^']+)'".
    strategy:
        "full" (fixed placeholder) or "shortcut" (first-length-last, G-6-w).
    mask:
        Placeholder used by the full strategy (default: ********).

    Returns
    -------
    dict:
        {"masked": str}
    """
    return mask_text_impl(
        text=text,
        fields=fields,
        shapes=shapes,
        custom_templates=custom_templates,
        strategy=strategy,
        mask=mask,
    )


@mcp.tool()
async def mask_log_file(
    log_path: str,
    fields: Sequence[str] | None = None,
    shapes: Sequence[str] | None = None,
    custom_templates: Sequence[str] | None = None,
    strategy: str | None = None,
    mask: str | None = None,
    contains: str | None = None,
    limit: int | None = None,
) -> dict[str, Any]:
    """Return masked lines of a local log file.

    Parameters
    ----------
    log_path:
        Path to a log file under LOG_OBFUSCATOR_BASE_DIR. Supports plain text and .gz.
    fields/shapes/custom_templates/strategy/mask:
        Same as for `mask_text`.
    contains:
        Substring filter applied to the raw line before masking.
    limit:
        Maximum number of lines returned (hard-capped in the implementation).

    Returns
    -------
    dict:
        {"count": int, "lines": list[{"line_no": int, "text": str}]}
    """
    return await mask_log_file_impl(
        log_path=log_path,
        fields=fields,
        shapes=shapes,
        custom_templates=custom_templates,
        strategy=strategy,
        mask=mask,
        contains=contains,
        limit=limit,
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Start the MCP server over stdio."""
    _configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    _ = argv or sys.argv[1:]
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
