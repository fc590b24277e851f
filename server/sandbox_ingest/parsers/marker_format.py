"""
Marker Format Parser - Alternative response format using HTML comment markers

    <!-- PLAN -->
    create: src/App.tsx, src/components/Header.tsx
    update: src/pages/Home.tsx
    sizes: src/App.tsx:25
    <!-- /PLAN -->

    <!-- EXPLANATION -->
    Created responsive layout components...
    <!-- /EXPLANATION -->

    <!-- FILE:src/App.tsx -->
    import { Header } from './components/Header';
    <!-- /FILE:src/App.tsx -->

File contents need no escaping, and a response cut off mid-file still
yields every file that was closed before the cut.
"""
import logging
import re
from typing import Dict, List, Optional, Tuple

from ..errors import EmptyFileSetError
from ..states import GenerationMeta, MarkerFilePlan, MarkerStreamingStatus, ParsedResponse
from ..validators.path_validator import is_ignored_file_path, is_safe_file_path
from .sanitizer import sanitize

logger = logging.getLogger(__name__)

_FILE_PATH = r"[\w./-]+\.[a-zA-Z]+"
_FILE_MARKER = re.compile(r"<!--\s*FILE:")
_PLAN_MARKER = re.compile(r"<!--\s*PLAN\s*-->")
_EXPLANATION_MARKER = re.compile(r"<!--\s*EXPLANATION\s*-->")

_PLAN_BLOCK = re.compile(r"<!--\s*PLAN\s*-->([\s\S]*?)<!--\s*/PLAN\s*-->")
_EXPLANATION_BLOCK = re.compile(r"<!--\s*EXPLANATION\s*-->([\s\S]*?)<!--\s*/EXPLANATION\s*-->")
_META_BLOCK = re.compile(r"<!--\s*GENERATION_META\s*-->([\s\S]*?)<!--\s*/GENERATION_META\s*-->")

_CLOSED_FILE = re.compile(r"<!--\s*FILE:(" + _FILE_PATH + r")\s*-->([\s\S]*?)<!--\s*/FILE:\1\s*-->")
_FILE_OPENING = re.compile(r"<!--\s*FILE:(" + _FILE_PATH + r")\s*-->")
_ANY_FILE_MARKER = re.compile(r"<!--\s*/?FILE:")
_TRAILING_MARKER = re.compile(r"<!--\s*(?:GENERATION_META|PLAN|EXPLANATION)")


def is_marker_format(response: str) -> bool:
    """Detect if a response uses marker format rather than JSON"""
    if _FILE_MARKER.search(response):
        return True
    return bool(_PLAN_MARKER.search(response) and _EXPLANATION_MARKER.search(response))


def _split_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _block_lines(block: str) -> List[str]:
    return [line.strip() for line in block.strip().split("\n") if line.strip()]


def _to_int(value: str, default: int) -> int:
    try:
        return int(value) or default
    except ValueError:
        return default


def parse_marker_plan(response: str) -> Optional[MarkerFilePlan]:
    match = _PLAN_BLOCK.search(response)
    if not match:
        return None

    plan = MarkerFilePlan()
    for line in _block_lines(match.group(1)):
        if line.startswith("create:"):
            plan.create = _split_list(line[len("create:"):])
        elif line.startswith("update:"):
            plan.update = _split_list(line[len("update:"):])
        elif line.startswith("delete:"):
            plan.delete = _split_list(line[len("delete:"):])
        elif line.startswith("sizes:"):
            for pair in _split_list(line[len("sizes:"):]):
                path, sep, size = pair.rpartition(":")
                if sep and path.strip() and size.strip().isdigit():
                    plan.sizes[path.strip()] = int(size.strip())

    plan.total = len(plan.create) + len(plan.update)
    return plan


def parse_marker_explanation(response: str) -> Optional[str]:
    match = _EXPLANATION_BLOCK.search(response)
    return match.group(1).strip() if match else None


def parse_marker_generation_meta(response: str) -> Optional[GenerationMeta]:
    """Parse the key: value lines of a GENERATION_META block used for multi-batch output"""
    match = _META_BLOCK.search(response)
    if not match:
        return None

    meta = GenerationMeta()
    for line in _block_lines(match.group(1)):
        key, sep, value = line.partition(":")
        if not sep:
            continue
        key, value = key.strip(), value.strip()
        if key == "totalFilesPlanned":
            meta.total_files_planned = _to_int(value, 0)
        elif key == "filesInThisBatch":
            meta.files_in_this_batch = _split_list(value)
        elif key == "completedFiles":
            meta.completed_files = _split_list(value)
        elif key == "remainingFiles":
            meta.remaining_files = _split_list(value)
        elif key == "currentBatch":
            meta.current_batch = _to_int(value, 1)
        elif key == "totalBatches":
            meta.total_batches = _to_int(value, 1)
        elif key == "isComplete":
            meta.is_complete = value.lower() == "true"
    return meta


def _trim_blank_lines(content: str) -> str:
    return content.lstrip("\n").rstrip("\n")


def _closed_files(response: str) -> Dict[str, str]:
    files = {}
    for match in _CLOSED_FILE.finditer(response):
        files[match.group(1).strip()] = sanitize(_trim_blank_lines(match.group(2)))
    return files


def _unclosed_openings(response: str, closed: Dict[str, str]) -> List[Tuple[str, int, int]]:
    """(path, marker start, content start) for every FILE opening without a closing tag"""
    return [
        (m.group(1).strip(), m.start(), m.end())
        for m in _FILE_OPENING.finditer(response)
        if m.group(1).strip() not in closed
    ]


def parse_marker_files(response: str) -> Dict[str, str]:
    """
    Extract all FILE blocks from a marker format response

    Also recovers files whose closing tag is missing because the model opened
    the next file straight away; their content runs to the next FILE marker.
    """
    closed = _closed_files(response)
    files = {path: code for path, code in closed.items() if code}

    openings = _unclosed_openings(response, closed)
    for i, (path, _, content_start) in enumerate(openings):
        content_end = openings[i + 1][1] if i + 1 < len(openings) else len(response)
        next_marker = _ANY_FILE_MARKER.search(response, content_start, content_end)
        if next_marker:
            content_end = next_marker.start()

        cleaned = sanitize(_trim_blank_lines(response[content_start:content_end]))
        if cleaned:
            files[path] = cleaned
            logger.warning("File %r had missing closing tag - recovered content", path)

    return files


def parse_streaming_marker_files(response: str) -> Tuple[Dict[str, str], Dict[str, str], Optional[str]]:
    """
    Split a (possibly still streaming) response into complete and incomplete files

    The last unclosed file is the one still being written, unless another
    FILE marker follows it. Earlier unclosed files were implicitly closed
    when the next one started.

    Returns:
        (complete, streaming, current_file)
    """
    complete = _closed_files(response)
    streaming = {}
    current_file = None

    openings = _unclosed_openings(response, complete)
    for i, (path, _, content_start) in enumerate(openings):
        is_last = i == len(openings) - 1
        if is_last and not _ANY_FILE_MARKER.search(response, content_start):
            content = response[content_start:].lstrip("\n")
            trailing = _TRAILING_MARKER.search(content)
            if trailing:
                content = content[:trailing.start()].rstrip("\n")
            streaming[path] = content
            current_file = path
        else:
            content_end = openings[i + 1][1] if not is_last else len(response)
            next_marker = _ANY_FILE_MARKER.search(response, content_start, content_end)
            if next_marker:
                content_end = next_marker.start()
            cleaned = sanitize(_trim_blank_lines(response[content_start:content_end]))
            if cleaned:
                complete[path] = cleaned

    return complete, streaming, current_file


def _kept_paths(files: Dict[str, str]) -> Dict[str, str]:
    kept = {}
    for path, content in files.items():
        if is_ignored_file_path(path):
            logger.info("Skipping ignored path: %s", path)
            continue
        if not is_safe_file_path(path):
            logger.warning("Skipping unsafe path: %r", path)
            continue
        kept[path] = content
    return kept


def parse_marker_format_response(response: str) -> ParsedResponse:
    """
    Parse a marker format response

    Incomplete files are excluded from the result and listed in
    incomplete_files; their presence marks the response as truncated.

    Raises:
        EmptyFileSetError: no complete file could be recovered
    """
    complete, streaming, _ = parse_streaming_marker_files(response)
    incomplete = list(streaming)
    if incomplete:
        logger.warning("Incomplete files detected (excluded): %s", incomplete)

    files = _kept_paths({path: code for path, code in complete.items() if code})
    if not files:
        raise EmptyFileSetError()

    return ParsedResponse(
        files=files,
        explanation=parse_marker_explanation(response),
        truncated=bool(incomplete),
        format="marker",
        incomplete_files=incomplete,
        plan=parse_marker_plan(response),
        generation_meta=parse_marker_generation_meta(response),
    )


def extract_marker_file_list(response: str) -> List[str]:
    """Every file named in the PLAN block or by a FILE marker, sorted"""
    files = set()
    plan = parse_marker_plan(response)
    if plan:
        files.update(plan.create)
        files.update(plan.update)
    files.update(m.group(1).strip() for m in _FILE_OPENING.finditer(response))
    return sorted(files)


def get_marker_streaming_status(response: str) -> MarkerStreamingStatus:
    """Split the planned files by how far the response has streamed"""
    plan = parse_marker_plan(response)
    complete, _, current_file = parse_streaming_marker_files(response)

    planned = plan.create + plan.update if plan else []
    pending = [path for path in planned if path not in complete and path != current_file]
    return MarkerStreamingStatus(
        pending=pending,
        streaming=[current_file] if current_file else [],
        complete=list(complete),
    )


def strip_marker_metadata(response: str) -> str:
    """Strip PLAN, EXPLANATION and GENERATION_META blocks for display"""
    for block in (_PLAN_BLOCK, _EXPLANATION_BLOCK, _META_BLOCK):
        response = block.sub("", response)
    return response.strip()
