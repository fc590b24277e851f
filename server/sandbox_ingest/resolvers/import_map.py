"""
Import Map Builder - Turns a file set into the sandbox's specifier -> URL table
"""
import json
import logging
import re
from typing import Dict, Mapping, Optional

from .import_extractor import extract_imports
from .module_resolver import build_esm_url, resolve_specifier
from .registry import PACKAGE_REGISTRY, Registry

logger = logging.getLogger(__name__)

# Entries the sandbox loads before any generated code is analyzed
ESSENTIAL_SPECIFIERS = (
    "react", "react/jsx-runtime", "react/jsx-dev-runtime",
    "react-dom", "react-dom/client",
    "lucide-react", "clsx", "classnames", "tailwind-merge",
    "framer-motion", "motion", "motion/react",
    "date-fns", "zustand", "react-hook-form",
)

_SPECIFIER_ERRORS = (
    re.compile(r"""specifier ["']([^"']+)["'] was a bare specifier""", re.IGNORECASE),
    re.compile(r"""Failed to resolve module specifier ["']([^"']+)["']""", re.IGNORECASE),
)


def analyze_files_for_imports(files: Mapping[str, str], registry: Registry = PACKAGE_REGISTRY) -> Dict[str, str]:
    """
    Build the import map entries a set of files needs

    Args:
        files: File path -> content
        registry: Specifier -> PackageConfig table

    Returns:
        Specifier -> URL for every resolvable bare specifier, each resolved once
    """
    specifiers = {}
    for content in files.values():
        if isinstance(content, str):
            specifiers.update(dict.fromkeys(extract_imports(content)))

    import_map = {}
    for specifier in specifiers:
        url = resolve_specifier(specifier, registry)
        if url:
            import_map[specifier] = url
        else:
            logger.debug("No CDN mapping for %s", specifier)
    return import_map


def get_base_import_map(registry: Registry = PACKAGE_REGISTRY) -> Dict[str, str]:
    """Import map for the essential runtime packages that are registered"""
    return {
        specifier: build_esm_url(registry[specifier])
        for specifier in ESSENTIAL_SPECIFIERS
        if specifier in registry
    }


def parse_specifier_error(error_message: str) -> Optional[str]:
    """
    Extract the module name from a browser bare-specifier error

    Args:
        error_message: Runtime error text from the sandbox

    Returns:
        The specifier, or None if the message is not a resolution failure
    """
    if not error_message:
        return None
    for pattern in _SPECIFIER_ERRORS:
        match = pattern.search(error_message)
        if match:
            return match.group(1)
    return None


def merge_import_maps(*import_maps: Mapping[str, str]) -> Dict[str, str]:
    """Merge import maps; later maps win on conflicting specifiers"""
    merged = {}
    for import_map in import_maps:
        merged.update(import_map)
    return merged


def render_import_map(import_map: Mapping[str, str]) -> str:
    """JSON document for a <script type="importmap"> tag"""
    return json.dumps({"imports": dict(import_map)}, indent=2)


def heal_import_map(
    import_map: Mapping[str, str],
    error_message: str,
    registry: Registry = PACKAGE_REGISTRY,
) -> Optional[Dict[str, str]]:
    """
    One self-healing step: add the specifier a runtime error complains about

    The caller owns the retry loop; this only computes the next import map.

    Returns:
        A new import map including the missing specifier, or None when the
        error is not a specifier error or the specifier cannot be resolved
    """
    specifier = parse_specifier_error(error_message)
    if not specifier:
        return None
    url = resolve_specifier(specifier, registry)
    if not url:
        logger.warning("Cannot heal import map: %s is not resolvable", specifier)
        return None
    logger.info("Adding missing specifier %s -> %s", specifier, url)
    return merge_import_maps(import_map, {specifier: url})
