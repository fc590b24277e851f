"""
Code Sanitizer - Strips markdown fence artifacts from model generated code
"""
import re
from typing import Callable, Optional, Tuple

FENCE_LANGUAGES = (
    "javascript", "typescript", "plaintext", "markdown",
    "shell", "react", "bash", "html", "json", "text",
    "tsx", "jsx", "css", "sql", "ts", "js", "md", "sh",
)

# Tags that sometimes survive on their own line once the fence is gone
LEADING_LANGUAGES = ("javascript", "typescript", "react", "tsx", "jsx", "ts", "js")

_OPENING_FENCE = re.compile(
    r"^```(?:" + "|".join(FENCE_LANGUAGES) + r")?(?![\w-])[ \t]*\r?\n?",
    re.IGNORECASE | re.MULTILINE,
)
_CLOSING_FENCE = re.compile(r"\r?\n?```[ \t]*$", re.MULTILINE)
_BARE_FENCE_LINE = re.compile(r"^```[ \t]*\r?\n?", re.MULTILINE)
_STRAY_FENCE = re.compile(r"```")
_LEADING_LANGUAGE_LINES = re.compile(
    r"^(?:(?:" + "|".join(LEADING_LANGUAGES) + r")[ \t]*\r?\n\s*)+",
    re.IGNORECASE,
)


def strip_opening_fences(code: str) -> str:
    return _OPENING_FENCE.sub("", code)


def strip_closing_fences(code: str) -> str:
    return _CLOSING_FENCE.sub("", code)


def strip_bare_fence_lines(code: str) -> str:
    return _BARE_FENCE_LINE.sub("", code)


def strip_stray_fences(code: str) -> str:
    return _STRAY_FENCE.sub("", code)


def strip_leading_language_lines(code: str) -> str:
    """Drop lines such as a lone 'typescript' left at the top of the file"""
    return _LEADING_LANGUAGE_LINES.sub("", code)


def trim(code: str) -> str:
    return code.strip()


# Applied in order; each pass is a pure str -> str function
SANITIZE_PASSES: Tuple[Callable[[str], str], ...] = (
    strip_opening_fences,
    strip_closing_fences,
    strip_bare_fence_lines,
    strip_stray_fences,
    trim,
    strip_leading_language_lines,
    trim,
)


def sanitize(raw: Optional[str]) -> str:
    """
    Clean model generated code by removing markdown artifacts and code block markers.

    Never fails, and sanitize(sanitize(x)) == sanitize(x).

    Args:
        raw: Raw text returned by the model for one file

    Returns:
        The cleaned code
    """
    if not raw:
        return ""

    cleaned = raw
    for step in SANITIZE_PASSES:
        cleaned = step(cleaned)
    return cleaned
