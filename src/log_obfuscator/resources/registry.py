"""MCP resource registry.

Resources are addressable by URI and can be fetched by the MCP client on demand.
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP

from log_obfuscator.core.config import MaskingSettings, resolve_masking_settings
from log_obfuscator.core.models import DEFAULT_MASK, PROPERTY_NAME_PLACEHOLDER, SensitiveValuePattern
from log_obfuscator.core.patterns import shape_template
from log_obfuscator.tools.mask import BASE_DIR_ENV, base_dir

SAMPLE_LOG = (
    "2025-12-30T08:12:01Z [INFO] login firstName=[Gustaw] idCardNumber=(CC123456)\n"
    '2025-12-30T08:12:03Z [INFO] contact mobilePhone="+48123123123" description="something"\n'
    '2025-12-30T08:12:04Z [INFO] payload={"personalData":{"firstName":"Gustaw"},"nonSensitive":"test"}\n'
    "2025-12-30T08:12:05Z [WARNING] unmasked on purpose idCardNumber=CC123456\n"
)


def shapes_catalog() -> dict[str, Any]:
    """Return each shape with its regex template and an example."""
    examples = {
        SensitiveValuePattern.EQUAL_AND_SQUARE_BRACKETS: "name=[value]",
        SensitiveValuePattern.EQUAL_AND_BRACKETS: "name=(value)",
        SensitiveValuePattern.EQUAL_AND_DOUBLE_QUOTES: 'name="value"',
        SensitiveValuePattern.JSON: '{"name":"value"}',
    }
    return {
        "placeholder": PROPERTY_NAME_PLACEHOLDER,
        "default_mask": DEFAULT_MASK,
        "shapes": {
            shape.name: {"template": shape_template(shape), "example": examples[shape]}
            for shape in SensitiveValuePattern
        },
    }


def register_resources(mcp: FastMCP) -> None:
    """Register resource handlers on the MCP server."""

    @mcp.resource("app://log-obfuscator/help")
    def help_resource() -> str:
        """Return a short list of available resource URIs."""
        return (
            "Resources:\n"
            "- app://log-obfuscator/help\n"
            "- app://log-obfuscator/config/shapes\n"
            "- app://log-obfuscator/config/settings\n"
            "- app://log-obfuscator/schemas/settings\n"
            "- app://log-obfuscator/examples/sample-log\n"
            "\nTools:\n"
            "- mask_text\n"
            f"- mask_log_file (restricted to {BASE_DIR_ENV})\n"
            f"\nBase directory: {base_dir()}\n"
        )

    @mcp.resource("app://log-obfuscator/examples/sample-log")
    def sample_log() -> str:
        """Return a tiny sample log with sensitive values for demos and tests."""
        return SAMPLE_LOG

    @mcp.resource("app://log-obfuscator/config/shapes")
    def shapes() -> dict[str, Any]:
        """Return the built-in shapes and their templates."""
        return shapes_catalog()

    @mcp.resource("app://log-obfuscator/config/settings")
    def settings() -> dict[str, Any]:
        """Return the settings resolved from the environment."""
        return resolve_masking_settings().model_dump(mode="json")

    @mcp.resource("app://log-obfuscator/schemas/settings")
    def settings_schema() -> dict[str, Any]:
        """Return the JSON schema for masking settings files."""
        return MaskingSettings.model_json_schema()
