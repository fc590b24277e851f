"""
Resolvers module for mapping bare import specifiers to ESM CDN URLs
"""
from .registry import PACKAGE_REGISTRY, build_registry
from .import_extractor import extract_imports
from .module_resolver import build_esm_url, resolve_specifier
from .import_map import (
    analyze_files_for_imports,
    get_base_import_map,
    heal_import_map,
    merge_import_maps,
    parse_specifier_error,
    render_import_map,
)

__all__ = [
    "PACKAGE_REGISTRY",
    "build_registry",
    "extract_imports",
    "build_esm_url",
    "resolve_specifier",
    "analyze_files_for_imports",
    "get_base_import_map",
    "heal_import_map",
    "merge_import_maps",
    "parse_specifier_error",
    "render_import_map",
]
