"""Tests for the JSON response parser"""
import pytest

from sandbox_ingest.errors import (
    EmptyFileSetError,
    NoJsonFoundError,
    ParseErrorKind,
    ResponseParseError,
    TruncatedUnrecoverableError,
)
from sandbox_ingest.parsers.response_parser import (
    PARTIAL_RESULTS_EXPLANATION,
    extract_json_text,
    locate_json_object,
    parse_model_response,
    parse_multi_file_response,
)


def test_complete_wrapped_response():
    result = parse_multi_file_response(
        '{"files": {"src/App.tsx": "export default 1"}, "explanation": "Built it"}'
    )
    assert result.files == {"src/App.tsx": "export default 1"}
    assert result.explanation == "Built it"
    assert result.truncated is False
    assert result.format == "json"


def test_flat_object_of_files():
    result = parse_multi_file_response('{"src/App.tsx":"x","explanation":"ok"}')
    assert result.files == {"src/App.tsx": "x"}
    assert result.explanation == "ok"
    assert result.truncated is False


def test_description_is_used_as_explanation():
    result = parse_multi_file_response('{"files": {"a.ts": "x"}, "description": "desc"}')
    assert result.explanation == "desc"


def test_truncated_response_is_repaired():
    result = parse_multi_file_response('{"files":{"a.ts":"console.log(1)"')
    assert result.files == {"a.ts": "console.log(1)"}
    assert result.truncated is True


def test_prose_around_the_json_is_ignored():
    result = parse_multi_file_response('Sure! Here is the app:\n{"files": {"a.ts": "x"}}\nEnjoy.')
    assert result.files == {"a.ts": "x"}


def test_json_inside_a_code_block():
    response = 'Here you go:\n```json\n{"files": {"a.ts": "x"}}\n```\nDone'
    assert parse_multi_file_response(response).files == {"a.ts": "x"}


def test_code_block_inside_file_content_is_not_the_payload():
    response = '{"files": {"README.md": "```bash\\nnpm i\\n```", "src/a.ts": "x"}}'
    assert extract_json_text(response) == response
    result = parse_multi_file_response(response)
    assert result.files["README.md"] == "npm i"
    assert result.files["src/a.ts"] == "x"


def test_raw_newlines_inside_strings_are_accepted():
    response = '{"files": {"a.ts": "line1\nline2"}}'
    assert parse_multi_file_response(response).files == {"a.ts": "line1\nline2"}


def test_file_contents_are_sanitized():
    response = '{"files": {"a.ts": "```ts\\nconst a = 1\\n```"}}'
    assert parse_multi_file_response(response).files == {"a.ts": "const a = 1"}


def test_ignored_paths_are_skipped():
    result = parse_multi_file_response(
        '{"files":{"node_modules/x/index.js":"a","dist/out.js":"b","src/a.ts":"c"}}'
    )
    assert result.files == {"src/a.ts": "c"}


def test_unsafe_paths_are_skipped():
    result = parse_multi_file_response('{"files":{"../etc/passwd.txt":"x","src/a.ts":"y"}}')
    assert result.files == {"src/a.ts": "y"}


def test_non_string_contents_are_skipped():
    result = parse_multi_file_response('{"files":{"a.ts":1,"b.ts":"x"}}')
    assert result.files == {"b.ts": "x"}


def test_files_as_a_list_of_entries():
    result = parse_multi_file_response(
        '{"files":[{"filepath":"src/a.ts","code":"x"},{"path":"b.css","content":"y"}]}'
    )
    assert result.files == {"src/a.ts": "x", "b.css": "y"}


def test_truncated_list_entry_is_dropped():
    result = parse_multi_file_response('{"files":[{"filepath":"a.ts","code":"x"},{"filepath":"b')
    assert result.files == {"a.ts": "x"}
    assert result.truncated is True


def test_files_object_is_salvaged_when_the_document_is_broken():
    result = parse_multi_file_response('{"explanation": nope, "files": {"src/a.ts": "x"')
    assert result.files == {"src/a.ts": "x"}
    assert result.explanation == PARTIAL_RESULTS_EXPLANATION
    assert result.truncated is True


@pytest.mark.parametrize("response", ["", "no json here at all"])
def test_no_json_found(response):
    with pytest.raises(NoJsonFoundError) as excinfo:
        parse_multi_file_response(response)
    assert excinfo.value.kind is ParseErrorKind.NO_JSON_FOUND


def test_unrecoverable_truncation():
    with pytest.raises(TruncatedUnrecoverableError) as excinfo:
        parse_multi_file_response('{"a": tru')
    assert "token limits" in excinfo.value.message


@pytest.mark.parametrize(
    "response",
    ['{"explanation": "nothing"}', '{"files": {}}', '{"files": {"README": "x"}}', '{"files": "x"}'],
)
def test_empty_file_set(response):
    with pytest.raises(EmptyFileSetError):
        parse_multi_file_response(response)


def test_all_files_ignored_is_an_empty_file_set():
    with pytest.raises(EmptyFileSetError):
        parse_multi_file_response('{"files": {"node_modules/a.js": "x"}}')


def test_errors_share_a_base_type():
    with pytest.raises(ResponseParseError) as excinfo:
        parse_multi_file_response("nothing")
    assert excinfo.value.to_dict() == {
        "kind": "no_json_found",
        "message": excinfo.value.message,
    }


def test_locate_json_object_spans():
    greedy, open_ended = locate_json_object('x {"a": "}"} tail {"b"')
    assert greedy == '{"a": "}"}'
    assert open_ended == '{"a": "}"} tail {"b"'


def test_parse_model_response_dispatches_on_format():
    marker = "<!-- FILE:src/a.ts -->\nconst a = 1\n<!-- /FILE:src/a.ts -->"
    assert parse_model_response(marker).format == "marker"
    assert parse_model_response('{"files":{"a.ts":"x"}}').format == "json"


def test_fenced_payload_with_a_fenced_readme_keeps_every_file():
    response = (
        '```json\n{"files":{"README.md":"```bash\\nnpm i\\n```",'
        '"src/App.tsx":"export default 1"}}\n```'
    )
    result = parse_multi_file_response(response)
    assert result.files == {"README.md": "npm i", "src/App.tsx": "export default 1"}
    assert result.truncated is False


def test_empty_files_object_does_not_fall_back_to_top_level_keys():
    with pytest.raises(EmptyFileSetError):
        parse_multi_file_response('{"files": {}, "src/a.ts": "x"}')


def test_null_files_uses_top_level_keys():
    result = parse_multi_file_response('{"files": null, "src/a.ts": "x"}')
    assert result.files == {"src/a.ts": "x"}


def test_json_file_mentioning_a_file_marker_stays_json():
    response = '{"files": {"docs/format.md": "Wrap files in <!-- FILE:src/a.ts --> markers", "src/a.ts": "x"}}'
    result = parse_model_response(response)
    assert result.format == "json"
    assert set(result.files) == {"docs/format.md", "src/a.ts"}
