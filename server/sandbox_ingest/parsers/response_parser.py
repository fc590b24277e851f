"""
Response Parser - Recovers the multi-file JSON payload from a model response
"""
import json
import logging
import re
from typing import Any, Optional, Tuple

from ..errors import EmptyFileSetError, NoJsonFoundError, ResponseParseError, TruncatedUnrecoverableError
from ..states import FileCode, ParsedResponse
from ..validators.path_validator import is_ignored_file_path, is_path_like, is_safe_file_path
from .json_repair import repair_truncated_json
from .marker_format import is_marker_format, parse_marker_format_response
from .sanitizer import sanitize

logger = logging.getLogger(__name__)

RESERVED_KEYS = ("files", "explanation", "description")
PARTIAL_RESULTS_EXPLANATION = "Response was truncated - showing partial results."

_CODE_BLOCK = re.compile(r"```(?:json)?\s*\n?([\s\S]*?)\n?```")
_FILES_KEY = re.compile(r'"files"\s*:\s*\{([\s\S]*)')


def _loads(text: str) -> Any:
    # Non-strict: models often emit raw newlines inside string values
    return json.loads(text, strict=False)


def extract_json_text(response: str) -> str:
    """
    Prefer the content of a markdown code block when it wraps the JSON payload

    A fenced block that only appears inside a file's content (a README
    snippet, for instance) starts after the first '{' and is ignored. When
    such a snippet sits inside a fenced payload the block ends early, so the
    block is kept only if it parses or the full text does not.
    """
    match = _CODE_BLOCK.search(response)
    if not match or "{" not in match.group(1) or response.find("{") < match.start(1):
        return response

    block = match.group(1)
    if _parses_directly(block) or not _parses_directly(response):
        return block
    logger.info("Code block ends inside the payload, using the full response")
    return response


def _parses_directly(text: str) -> bool:
    try:
        greedy, _ = locate_json_object(text)
        return isinstance(_loads(greedy), dict)
    except (NoJsonFoundError, json.JSONDecodeError):
        return False


def locate_json_object(text: str) -> Tuple[str, str]:
    """
    Find the JSON object span in the text

    Returns:
        (greedy, open_ended): first '{' through the last '}', and first '{'
        through the end of the text. Both are equal when no '}' follows.
    """
    start = text.find("{")
    if start == -1:
        raise NoJsonFoundError()
    open_ended = text[start:].strip()
    end = text.rfind("}")
    greedy = text[start:end + 1] if end > start else open_ended
    return greedy, open_ended


def _salvage_files_object(text: str) -> Optional[dict]:
    """Parse just the object following a "files" key, wrapped in a synthetic brace"""
    match = _FILES_KEY.search(text)
    if not match:
        return None
    try:
        files = _loads(repair_truncated_json("{" + match.group(1)))
    except json.JSONDecodeError:
        return None
    return files if isinstance(files, dict) else None


def load_document(json_text: str) -> Tuple[dict, bool]:
    """
    Parse the JSON payload, repairing it when the response was truncated

    Args:
        json_text: Response text (code block content if there was one)

    Returns:
        (parsed object, whether the repair path was used)
    """
    greedy, open_ended = locate_json_object(json_text)
    try:
        parsed = _loads(greedy)
        if isinstance(parsed, dict):
            return parsed, False
    except json.JSONDecodeError:
        logger.info("Direct parse failed, attempting repair...")

    for candidate in dict.fromkeys((open_ended, greedy)):
        try:
            parsed = _loads(repair_truncated_json(candidate))
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict):
            logger.info("Repair successful")
            return parsed, True

    files = _salvage_files_object(json_text)
    if files is None:
        raise TruncatedUnrecoverableError()
    logger.warning("Extracted partial files object (%d entries)", len(files))
    return {"files": files, "explanation": PARTIAL_RESULTS_EXPLANATION}, True


def _files_from_list(entries: list) -> dict:
    """Accept "files": [{"filepath": ..., "code": ...}] as well as a path -> content object"""
    files = {}
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        path = entry.get("filepath") or entry.get("path")
        code = entry.get("code", entry.get("content"))
        if isinstance(path, str) and isinstance(code, str):
            file = FileCode(filepath=path, code=code)
            files[file.filepath] = file.code
    return files


def collect_files(parsed: dict) -> dict[str, str]:
    """
    Pick the file entries out of a parsed payload and clean them

    Args:
        parsed: Parsed JSON object

    Returns:
        Non-empty path -> sanitized content mapping
    """
    files_obj = parsed["files"] if parsed.get("files") is not None else parsed
    if isinstance(files_obj, list):
        files_obj = _files_from_list(files_obj)
    elif not isinstance(files_obj, dict):
        raise EmptyFileSetError()

    file_keys = [k for k in files_obj if k not in RESERVED_KEYS and is_path_like(k)]
    if not file_keys:
        raise EmptyFileSetError()

    cleaned = {}
    for path in file_keys:
        content = files_obj[path]
        if is_ignored_file_path(path):
            logger.info("Skipping ignored path: %s", path)
            continue
        if not is_safe_file_path(path):
            logger.warning("Skipping unsafe path: %r", path)
            continue
        if isinstance(content, str):
            cleaned[path] = sanitize(content)

    if not cleaned:
        raise EmptyFileSetError()
    return cleaned


def parse_multi_file_response(response: str) -> ParsedResponse:
    """
    Parse a model response that holds multiple files in JSON format

    Args:
        response: Raw model output, possibly fenced and possibly truncated

    Returns:
        ParsedResponse with truncated=True when the repair path was needed

    Raises:
        NoJsonFoundError, TruncatedUnrecoverableError, EmptyFileSetError
    """
    if not response:
        raise NoJsonFoundError()

    parsed, was_truncated = load_document(extract_json_text(response))
    files = collect_files(parsed)

    explanation = parsed.get("explanation") or parsed.get("description")
    return ParsedResponse(
        files=files,
        explanation=explanation if isinstance(explanation, str) else None,
        truncated=was_truncated,
    )


def parse_model_response(response: str) -> ParsedResponse:
    """
    Parse either response format: HTML-comment markers or JSON

    A response that opens like a JSON payload is tried as JSON first, so a
    file whose content mentions a FILE marker does not switch formats.
    """
    if not response or not is_marker_format(response):
        return parse_multi_file_response(response)

    if response.lstrip().startswith(("{", "```")):
        try:
            return parse_multi_file_response(response)
        except ResponseParseError as e:
            logger.info("JSON parse failed (%s), trying marker format", e.kind.value)
    return parse_marker_format_response(response)
