"""
JSON Repair - Rebuilds a syntactically valid document from a truncated one
"""
import logging
import re
from dataclasses import dataclass, field
from typing import List

logger = logging.getLogger(__name__)

# Trailing incomplete structure, tried in order; only the first match is removed
_TRAILING_PATTERNS = (
    re.compile(r",\s*$"),
    re.compile(r',?\s*"[^"]*"\s*:\s*$'),
    re.compile(r',?\s*"[^"]*"\s*:\s*"[^"]*$'),
)

# Key cut off before its colon; only a key when the innermost open structure is an object
_DANGLING_KEY = re.compile(r'(?:,|(?<=\{))\s*"[^"]*"\s*$')


_CLOSERS = {"{": "}", "[": "]"}


@dataclass
class RepairState:
    brace_depth: int = 0
    bracket_depth: int = 0
    in_string: bool = False
    escape_next: bool = False
    open_stack: List[str] = field(default_factory=list)

    @property
    def balanced(self) -> bool:
        return self.brace_depth == 0 and self.bracket_depth == 0 and not self.in_string

    def close(self, closer: str):
        if self.open_stack and _CLOSERS[self.open_stack[-1]] == closer:
            self.open_stack.pop()

    def closing_sequence(self) -> str:
        """Closers for every still-open structure, innermost first"""
        return "".join(_CLOSERS[opener] for opener in reversed(self.open_stack))


def scan(text: str) -> RepairState:
    """
    Walk the text once, tracking string and nesting state

    Inside a string a backslash consumes exactly the next character, so an
    escaped quote never terminates the string.
    """
    state = RepairState()
    for char in text:
        if state.escape_next:
            state.escape_next = False
            continue
        if state.in_string:
            if char == "\\":
                state.escape_next = True
            elif char == '"':
                state.in_string = False
            continue
        if char == '"':
            state.in_string = True
        elif char == "{":
            state.brace_depth += 1
            state.open_stack.append(char)
        elif char == "[":
            state.bracket_depth += 1
            state.open_stack.append(char)
        elif char == "}":
            state.brace_depth -= 1
            state.close(char)
        elif char == "]":
            state.bracket_depth -= 1
            state.close(char)
    return state


def strip_trailing_incomplete(text: str, in_object: bool = False) -> str:
    """
    Remove one trailing incomplete construct

    Args:
        text: JSON text whose dangling string, if any, is already closed
        in_object: Whether the innermost open structure is an object, where a
            string after ',' or '{' can only be a key
    """
    for pattern in _TRAILING_PATTERNS:
        if pattern.search(text):
            return pattern.sub("", text, count=1)
    if in_object and _DANGLING_KEY.search(text):
        return _DANGLING_KEY.sub("", text, count=1)
    return text


def repair_truncated_json(json_str: str) -> str:
    """
    Attempt to repair truncated JSON from a model response

    Args:
        json_str: Candidate JSON text, possibly cut off mid-token

    Returns:
        The repaired JSON string; balanced input comes back unchanged.
        The result is not guaranteed to parse.
    """
    text = json_str.strip()
    state = scan(text)
    if state.balanced:
        return text

    logger.info(
        "Unbalanced JSON: braces=%d, brackets=%d, in_string=%s",
        state.brace_depth, state.bracket_depth, state.in_string,
    )

    repaired = text
    if state.in_string:
        if state.escape_next:
            # A lone trailing backslash would escape the closing quote
            repaired = repaired[:-1]
        repaired += '"'

    repaired = strip_trailing_incomplete(repaired, in_object=state.open_stack[-1:] == ["{"])

    state = scan(repaired)
    # Last opened, first closed: "]}" for {"a":[1, "}]}" for {"a":[{"b":1
    return repaired + state.closing_sequence()
