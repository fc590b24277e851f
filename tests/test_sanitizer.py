"""Tests for the code sanitizer"""
import pytest

from sandbox_ingest.parsers.sanitizer import (
    sanitize,
    strip_closing_fences,
    strip_leading_language_lines,
    strip_opening_fences,
    strip_stray_fences,
)


SAMPLES = [
    "```tsx\nexport default function App() {}\n```",
    "```json\n{\"a\": 1}\n```",
    "```\nplain\n```   ",
    "typescript\nconst x = 1;",
    "javascript\n\ntypescript\n  const y = 2;",
    "  \n```TypeScript\nconst z = 3\n```\n\n",
    "a ``` b ```` c `````",
    "```python\nprint('hi')\n```",
    "ts",
    "",
    "const fence = '`' + '``'",
]


def test_strips_fence_with_language_tag():
    assert sanitize("```tsx\nconst a = 1\n```") == "const a = 1"


def test_longer_tag_is_not_cut_short():
    assert sanitize("```json\n{\"a\": 1}\n```") == '{"a": 1}'


def test_tag_match_is_case_insensitive():
    assert sanitize("```TypeScript\nconst a = 1\n```") == "const a = 1"


def test_removes_leading_language_line():
    assert sanitize("typescript\nconst x = 1;") == "const x = 1;"


def test_removes_stray_backticks_anywhere():
    assert sanitize("const a = 1 ``` // oops") == "const a = 1  // oops"


def test_fences_inside_the_content_are_removed():
    code = "import x from 'x'\n```js\nconst y = 2\n```\nexport default y"
    assert sanitize(code) == "import x from 'x'\nconst y = 2\nexport default y"


def test_none_and_empty_are_empty():
    assert sanitize(None) == ""
    assert sanitize("") == ""


def test_plain_code_is_untouched():
    code = "export const add = (a, b) => a + b;"
    assert sanitize(code) == code


@pytest.mark.parametrize("raw", SAMPLES)
def test_sanitize_is_idempotent(raw):
    once = sanitize(raw)
    assert sanitize(once) == once


def test_passes_work_in_isolation():
    assert strip_opening_fences("```js\nx") == "x"
    assert strip_closing_fences("x\n```") == "x"
    assert strip_stray_fences("a```b") == "ab"
    assert strip_leading_language_lines("jsx\nreturn null") == "return null"


def test_unknown_tag_keeps_its_word():
    assert sanitize("```python\nprint('hi')\n```") == "python\nprint('hi')"
