"""
Turns raw model output into a sandbox-ready file set and import map
"""
from .errors import (
    EmptyFileSetError,
    NoJsonFoundError,
    ParseErrorKind,
    ResponseParseError,
    TruncatedUnrecoverableError,
)
from .parsers import parse_model_response, parse_multi_file_response, sanitize
from .resolvers import analyze_files_for_imports, get_base_import_map, parse_specifier_error, resolve_specifier
from .states import PackageConfig, ParsedResponse

__all__ = [
    "EmptyFileSetError",
    "NoJsonFoundError",
    "ParseErrorKind",
    "ResponseParseError",
    "TruncatedUnrecoverableError",
    "parse_model_response",
    "parse_multi_file_response",
    "sanitize",
    "analyze_files_for_imports",
    "get_base_import_map",
    "parse_specifier_error",
    "resolve_specifier",
    "PackageConfig",
    "ParsedResponse",
]
