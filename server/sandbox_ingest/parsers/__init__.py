"""
Parsers module for recovering file sets from model responses
"""
from .sanitizer import sanitize
from .json_repair import repair_truncated_json
from .marker_format import get_marker_streaming_status, is_marker_format, parse_marker_format_response
from .response_parser import parse_model_response, parse_multi_file_response

__all__ = [
    "sanitize",
    "repair_truncated_json",
    "get_marker_streaming_status",
    "is_marker_format",
    "parse_marker_format_response",
    "parse_model_response",
    "parse_multi_file_response",
]
