import json

import pytest

from gemini_marketing.exceptions import (
    FailureKind,
    InvalidJsonSyntaxError,
    MalformedResponseError,
    NoJsonFoundError,
    UnterminatedJsonError,
)
from gemini_marketing.extraction import extract_json, find_json_span, unwrap_fence

pytestmark = pytest.mark.unit


def test_fenced_json_with_leading_prose():
    text = 'Here you go:\n```json\n{"title": "Plan"}\n```\nThanks!'
    assert extract_json(text) == {"title": "Plan"}


def test_first_array_wins_when_it_precedes_object():
    text = '[{"a": 1}] and then {"b": 2}'
    assert extract_json(text) == [{"a": 1}]


def test_nested_structures_are_matched_by_depth():
    text = 'Result: {"a": {"b": {"c": [1, 2]}}, "d": 3} trailing words'
    assert extract_json(text) == {"a": {"b": {"c": [1, 2]}}, "d": 3}


def test_plain_json_without_fence():
    assert extract_json('  {"ok": true}  ') == {"ok": True}


@pytest.mark.parametrize(
    "value",
    [
        [1, 2, 3],
        {"a": {"b": [1, {"c": []}]}, "d": [[], [{}]]},
        {"name": "café ☕ 日本", "tags": ["ñandú", "Ωmega"]},
        [0, -1.5, 3e10, True, False, None],
        {"n": None, "ok": True, "off": False, "ratio": 0.25},
    ],
    ids=["array", "nested", "unicode", "scalars", "null-and-bools"],
)
@pytest.mark.parametrize("ensure_ascii", [True, False], ids=["escaped", "raw"])
def test_serialized_values_survive_every_wrapping(value, ensure_ascii):
    s = json.dumps(value, ensure_ascii=ensure_ascii)

    assert extract_json(f"```json\n{s}\n```") == value
    assert extract_json(s) == value
    assert extract_json("preamble " + s + " trailing") == value


def test_only_first_fence_is_used():
    text = '```json\n{"first": 1}\n```\n```json\n{"second": 2}\n```'
    assert extract_json(text) == {"first": 1}


def test_no_delimiter_raises_no_json_found():
    with pytest.raises(NoJsonFoundError) as ei:
        extract_json("I cannot help with that request.")
    assert ei.value.reason == "no_json_found"
    assert ei.value.kind is FailureKind.MALFORMED


def test_truncated_output_raises_unterminated():
    with pytest.raises(UnterminatedJsonError) as ei:
        extract_json('{"title": "Plan", "items": [1, 2')
    assert ei.value.reason == "unterminated_json"


def test_trailing_comma_raises_invalid_syntax_with_fragment():
    with pytest.raises(InvalidJsonSyntaxError) as ei:
        extract_json('{"a": 1,}')
    assert ei.value.fragment == '{"a": 1,}'
    assert ei.value.reason == "invalid_json_syntax"


def test_brace_inside_string_ends_the_match_early():
    # The matcher does not understand string literals.
    with pytest.raises(InvalidJsonSyntaxError) as ei:
        extract_json('{"a": "} "}')
    assert ei.value.fragment == '{"a": "}'


def test_extraction_errors_are_not_retryable():
    with pytest.raises(MalformedResponseError) as ei:
        extract_json("no json here")
    assert ei.value.retryable is False


def test_unwrap_fence_returns_text_when_no_fence():
    assert unwrap_fence('{"a": 1}') == '{"a": 1}'


def test_unwrap_fence_ignores_unlabelled_fences():
    text = '```\n{"a": 1}\n```'
    assert unwrap_fence(text) == text


def test_find_json_span_is_inclusive():
    text = 'xx{"a": [1]}yy'
    start, end = find_json_span(text)
    assert text[start : end + 1] == '{"a": [1]}'
