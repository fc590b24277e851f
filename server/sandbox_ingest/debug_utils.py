"""
Debug utilities for pipeline stage logging
"""
import logging
import time
from functools import wraps
from typing import Dict, Any, Callable

from . import config

logger = logging.getLogger(__name__)


def log_stage_execution(stage_name: str):
    """
    Decorator to log pipeline stage execution details

    Args:
        stage_name: Name of the stage for logging
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(state: Dict[str, Any]) -> Dict[str, Any]:
            if not config.DEBUG_ENABLED:
                return func(state)

            start_time = time.time()
            logger.info("%s - START\n%s", stage_name.upper(), summarize_state(state))

            try:
                result = func(state)
            except Exception as e:
                execution_time = time.time() - start_time
                logger.error("%s - ERROR (%.2fs): %s", stage_name.upper(), execution_time, e)
                raise

            execution_time = time.time() - start_time
            logger.info(
                "%s - COMPLETE (%.2fs)\n%s",
                stage_name.upper(), execution_time, summarize_state(result),
            )
            if config.DEBUG_DETAILED:
                log_state_diff(state, result)
            return result

        return wrapper
    return decorator


def summarize_state(state: Dict[str, Any]) -> str:
    """
    Create a summary of the pipeline state for logging

    Args:
        state: The state dictionary (or a node's partial update)

    Returns:
        Formatted summary string
    """
    summary_lines = []

    if "raw_response" in state:
        raw = str(state["raw_response"])
        summary_lines.append(f"  Raw Response: {len(raw)} chars")

    if "files" in state:
        files = state["files"] or {}
        summary_lines.append(f"  Files: {len(files)} files")
        if config.DEBUG_DETAILED:
            for i, (path, content) in enumerate(list(files.items())[:10], 1):
                summary_lines.append(f"    {i}. {path} ({len(content)} chars)")
            if len(files) > 10:
                summary_lines.append(f"    ... and {len(files) - 10} more files")

    if state.get("truncated"):
        summary_lines.append("  Truncated: yes")

    if state.get("incomplete_files"):
        summary_lines.append(f"  Incomplete Files: {', '.join(state['incomplete_files'])}")

    if "import_map" in state:
        summary_lines.append(f"  Import Map: {len(state['import_map'] or {})} entries")
        if config.DEBUG_DETAILED:
            for specifier, url in list((state["import_map"] or {}).items())[:10]:
                summary_lines.append(f"    {specifier} -> {url}")

    if "full_import_map" in state:
        summary_lines.append(f"  Full Import Map: {len(state['full_import_map'] or {})} entries")

    if config.DEBUG_DETAILED:
        all_keys = list(state.keys())
        summary_lines.append(f"  All State Keys ({len(all_keys)}): {', '.join(all_keys)}")

    return "\n".join(summary_lines) if summary_lines else "  (Empty state)"


def log_state_diff(old_state: Dict[str, Any], new_state: Dict[str, Any]):
    """
    Log which keys a stage added or changed

    Args:
        old_state: State before stage execution
        new_state: Partial update returned by the stage
    """
    old_keys = set(old_state.keys())
    new_keys = set(new_state.keys())

    added_keys = sorted(new_keys - old_keys)
    changed_keys = sorted(k for k in new_keys & old_keys if old_state[k] != new_state[k])

    if added_keys:
        logger.debug("  Added keys: %s", ", ".join(added_keys))
    if changed_keys:
        logger.debug("  Changed keys: %s", ", ".join(changed_keys))
