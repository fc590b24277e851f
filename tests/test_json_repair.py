"""Tests for truncated JSON repair"""
import json

import pytest

from sandbox_ingest.parsers.json_repair import repair_truncated_json, scan, strip_trailing_incomplete


def test_balanced_input_is_returned_unchanged():
    text = '{"files": {"a.ts": "x"}}'
    assert repair_truncated_json(text) == text


def test_balanced_input_is_only_trimmed():
    assert repair_truncated_json('  {"a": 1}\n') == '{"a": 1}'


def test_closes_missing_braces():
    repaired = repair_truncated_json('{"files":{"a.ts":"console.log(1)"')
    assert repaired == '{"files":{"a.ts":"console.log(1)"}}'
    assert json.loads(repaired) == {"files": {"a.ts": "console.log(1)"}}


def test_closes_an_unterminated_string_value():
    repaired = repair_truncated_json('{"files":{"a.ts":"con')
    assert json.loads(repaired) == {"files": {"a.ts": "con"}}


def test_escaped_quote_does_not_end_the_string():
    repaired = repair_truncated_json('{"a":"say \\"hi')
    assert json.loads(repaired) == {"a": 'say "hi'}


def test_lone_trailing_backslash_is_dropped():
    repaired = repair_truncated_json('{"a":"x\\')
    assert json.loads(repaired) == {"a": "x"}


def test_trailing_comma_is_removed():
    assert json.loads(repair_truncated_json('{"a":[1,2,')) == {"a": [1, 2]}


def test_key_without_value_is_removed():
    assert json.loads(repair_truncated_json('{"a":1,"b":')) == {"a": 1}


@pytest.mark.parametrize("truncated", ['{"a":1,"fil', '{"a":1, "files"'])
def test_key_cut_before_its_colon_is_removed(truncated):
    assert json.loads(repair_truncated_json(truncated)) == {"a": 1}


def test_first_key_cut_before_its_colon():
    assert json.loads(repair_truncated_json('{"fil')) == {}


def test_array_closes_before_its_object():
    repaired = repair_truncated_json('{"a":[1,2')
    assert repaired == '{"a":[1,2]}'


def test_object_inside_array_closes_innermost_first():
    repaired = repair_truncated_json('{"a":[{"b":1')
    assert repaired == '{"a":[{"b":1}]}'
    assert json.loads(repaired) == {"a": [{"b": 1}]}


def test_braces_inside_strings_are_not_counted():
    repaired = repair_truncated_json('{"a.ts":"function f() { return [1"')
    assert json.loads(repaired) == {"a.ts": "function f() { return [1"}


def test_scan_tracks_depth_and_string_state():
    state = scan('{"a":[{"b":"x\\')
    assert state.brace_depth == 2
    assert state.bracket_depth == 1
    assert state.in_string
    assert state.escape_next
    assert state.closing_sequence() == "}]}"
    assert not state.balanced


def test_only_the_first_trailing_pattern_applies():
    assert strip_trailing_incomplete('{"a":1,') == '{"a":1'
    assert strip_trailing_incomplete('{"a":1') == '{"a":1'


@pytest.mark.parametrize(
    "truncated, expected",
    [('{"a":["x","y"', {"a": ["x", "y"]}), ('{"a":["x","y', {"a": ["x", "y"]})],
)
def test_final_array_string_is_kept(truncated, expected):
    assert json.loads(repair_truncated_json(truncated)) == expected


def test_nested_object_key_cut_before_its_colon():
    repaired = repair_truncated_json('{"files":{"a.ts":"x","src/Ap')
    assert json.loads(repaired) == {"files": {"a.ts": "x"}}
