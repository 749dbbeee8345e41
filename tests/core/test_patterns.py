from __future__ import annotations

import pytest

from log_obfuscator.core.errors import IncorrectConfigurationError
from log_obfuscator.core.models import SensitiveValuePattern
from log_obfuscator.core.patterns import compile_matchers, shape_template, validate_custom_template


def _values(text: str, shape: SensitiveValuePattern, field: str = "firstName") -> list[str]:
    (matcher,) = compile_matchers([shape], [], [field])
    return [m.raw_value for m in matcher.finditer(text)]


def test_square_brackets_capture_value_only() -> None:
    text = "user firstName=[Gustaw] done"
    (matcher,) = compile_matchers([SensitiveValuePattern.EQUAL_AND_SQUARE_BRACKETS], [], ["firstName"])
    (m,) = list(matcher.finditer(text))
    assert m.raw_value == "Gustaw"
    assert text[m.value_start : m.value_end] == "Gustaw"
    assert text[m.start : m.end] == "firstName=[Gustaw]"


@pytest.mark.parametrize(
    ("shape", "text"),
    [
        (SensitiveValuePattern.EQUAL_AND_SQUARE_BRACKETS, "firstName=[Gustaw]"),
        (SensitiveValuePattern.EQUAL_AND_BRACKETS, "firstName=(Gustaw)"),
        (SensitiveValuePattern.EQUAL_AND_DOUBLE_QUOTES, 'firstName="Gustaw"'),
    ],
)
def test_each_text_shape_matches_its_decoration(shape: SensitiveValuePattern, text: str) -> None:
    assert _values(text, shape) == ["Gustaw"]


def test_undecorated_or_differently_decorated_values_do_not_match() -> None:
    shape = SensitiveValuePattern.EQUAL_AND_SQUARE_BRACKETS
    assert _values("firstName=Gustaw", shape) == []
    assert _values("firstName=(Gustaw)", shape) == []
    assert _values('firstName="Gustaw"', shape) == []


def test_field_name_is_not_matched_inside_longer_name() -> None:
    assert _values("myfirstName=[x] firstName=[y]", SensitiveValuePattern.EQUAL_AND_SQUARE_BRACKETS) == ["y"]


def test_field_name_is_matched_literally() -> None:
    shape = SensitiveValuePattern.EQUAL_AND_SQUARE_BRACKETS
    assert _values("a.b=[x] aXb=[y]", shape, field="a.b") == ["x"]


def test_json_shape_has_no_text_matcher() -> None:
    assert compile_matchers([SensitiveValuePattern.JSON], [], ["firstName"]) == ()
    assert shape_template(SensitiveValuePattern.JSON) is None


def test_duplicates_compile_once() -> None:
    shape = SensitiveValuePattern.EQUAL_AND_BRACKETS
    matchers = compile_matchers([shape, shape], ["[PROPERTY_NAME]:(\\w+)"] * 2, ["a", "a", "b"])
    assert len(matchers) == 4
    assert [m.field_name for m in matchers] == ["a", "b", "a", "b"]


def test_custom_template_substitutes_field_name() -> None:
    template = "[PROPERTY_NAME]==>'([^']+)'"
    (matcher,) = compile_matchers([], [template], ["idCardNumber"])
    text = "idCardNumber==>'CC123456' description==>'something'"
    assert [m.raw_value for m in matcher.finditer(text)] == ["CC123456"]


@pytest.mark.parametrize(
    "template",
    [
        "",
        "   ",
        "firstName=\\[([^\\]]*)\\]",  # no placeholder
        "[PROPERTY_NAME]=(unclosed",  # invalid regex
        "[PROPERTY_NAME]=\\w+",  # no capturing group
        "[PROPERTY_NAME]=(\\w+)-(\\w+)",  # two capturing groups
    ],
)
def test_invalid_custom_templates_are_rejected(template: str) -> None:
    with pytest.raises(IncorrectConfigurationError):
        validate_custom_template(template)


def test_non_capturing_groups_are_allowed_in_templates() -> None:
    template = "[PROPERTY_NAME](?:=|:)<([^>]*)>"
    assert validate_custom_template(template) == template


def test_optional_value_group_that_did_not_match_is_skipped() -> None:
    (matcher,) = compile_matchers([], ["[PROPERTY_NAME]=(\\d+)?;"], ["pin"])
    assert [m.raw_value for m in matcher.finditer("abc pin=; tail pin=12;")] == ["12"]


@pytest.mark.parametrize(
    ("shape", "text"),
    [
        (SensitiveValuePattern.EQUAL_AND_SQUARE_BRACKETS, "firstName=[Gustaw\nnext line ]"),
        (SensitiveValuePattern.EQUAL_AND_BRACKETS, "firstName=(Gustaw\nnext line )"),
        (SensitiveValuePattern.EQUAL_AND_DOUBLE_QUOTES, 'firstName="Gustaw\nnext line "'),
    ],
)
def test_values_do_not_span_lines(shape: SensitiveValuePattern, text: str) -> None:
    assert _values(text, shape) == []
