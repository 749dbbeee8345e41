from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from log_obfuscator.core.masker import SensitiveDataMasker

SENSITIVE_FIELDS = ("firstName", "idCardNumber", "mobilePhone", "other")

ENV_VARS = (
    "LOG_OBFUSCATOR_CONFIG",
    "LOG_OBFUSCATOR_FIELDS",
    "LOG_OBFUSCATOR_SHAPES",
    "LOG_OBFUSCATOR_STRATEGY",
    "LOG_OBFUSCATOR_MASK",
    "LOG_OBFUSCATOR_BASE_DIR",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def masker() -> SensitiveDataMasker:
    """Full-strategy masker with the usual sensitive fields and no shapes."""
    return SensitiveDataMasker().add_field_names(SENSITIVE_FIELDS)


@pytest.fixture
def shortcut_masker() -> SensitiveDataMasker:
    return SensitiveDataMasker().use_strategy("shortcut").add_field_names(SENSITIVE_FIELDS)


@pytest.fixture
def write_log() -> Callable[[Path], None]:
    def _write(path: Path) -> None:
        path.write_text(
            "\n".join(
                [
                    "2025-12-30T08:12:01Z [INFO] login firstName=[Gustaw]",
                    "2025-12-30T08:12:03Z [INFO] nothing to hide here",
                    '2025-12-30T08:12:04Z [INFO] payload={"idCardNumber":"CC123456","nonSensitive":"test"}',
                    "2025-12-30T08:12:05Z [WARNING] retry mobilePhone=[+48123123123]",
                ]
            )
            + "\n",
            encoding="utf-8",
        )

    return _write
