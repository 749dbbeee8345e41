from __future__ import annotations

import json
import logging
import logging.config
from collections.abc import Iterator

import pytest

from log_obfuscator import MaskingFormatter
from log_obfuscator.core.errors import IncorrectConfigurationError

LOGGER_NAME = "masking.int"


@pytest.fixture
def masked_logger() -> Iterator[logging.Logger]:
    logger = logging.getLogger(LOGGER_NAME)
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def _record(msg: object, *args: object) -> logging.LogRecord:
    return logging.LogRecord(LOGGER_NAME, logging.INFO, __file__, 1, msg, args, None)


def test_all_configured_fields_are_masked_via_dict_config(masked_logger: logging.Logger, capsys) -> None:
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "masked": {
                    "()": "log_obfuscator.MaskingFormatter",
                    "fmt": "%(levelname)-5s %(name)s: %(message)s",
                    "fields": ["firstName", "email"],
                    "shapes": ["EQUAL_AND_SQUARE_BRACKETS", "JSON"],
                    "mask": "***SENSITIVE*DATA***",
                }
            },
            "handlers": {
                "out": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stdout",
                    "formatter": "masked",
                }
            },
            "loggers": {LOGGER_NAME: {"handlers": ["out"], "level": "INFO", "propagate": False}},
        }
    )

    payload = json.dumps({"email": "test@github.io"}, separators=(",", ":"))
    masked_logger.info("Something firstName=[test] with payload: %s", payload)

    out = capsys.readouterr().out.strip()
    assert out == (
        f"INFO  {LOGGER_NAME}: Something firstName=[***SENSITIVE*DATA***] "
        'with payload: {"email":"***SENSITIVE*DATA***"}'
    )


def test_formatter_masks_formatted_arguments() -> None:
    formatter = MaskingFormatter("%(message)s", fields=["firstName"], shapes=["EQUAL_AND_BRACKETS"], strategy="shortcut")
    assert formatter.format(_record("user firstName=(%s)", "Gustaw")) == "user firstName=(G-6-w)"


def test_formatter_without_shapes_leaves_text_alone() -> None:
    formatter = MaskingFormatter("%(message)s", fields=["firstName"])
    assert formatter.format(_record("firstName=[Gustaw]")) == "firstName=[Gustaw]"


def test_formatter_rejects_bad_configuration_eagerly() -> None:
    with pytest.raises(IncorrectConfigurationError):
        MaskingFormatter("%(message)s", fields=["firstName"], mask="")
    with pytest.raises(IncorrectConfigurationError):
        MaskingFormatter("%(message)s", shapes=["CURLY"])
