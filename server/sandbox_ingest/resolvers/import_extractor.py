"""
Import Extractor - Collects bare module specifiers from JS/TS source
"""
import re
from typing import List

IMPORT_PATTERNS = (
    re.compile(r"""import\s+(?:[\w\s{},*$]+\s+from\s+)?['"]([^'"]+)['"]"""),   # static / side-effect import
    re.compile(r"""import\s*\(\s*['"]([^'"]+)['"]\s*\)"""),                     # dynamic import()
    re.compile(r"""export\s+(?:[\w\s{},*$]+\s+from\s+)?['"]([^'"]+)['"]"""),   # re-export
)


def is_bare_specifier(specifier: str) -> bool:
    return bool(specifier) and not specifier.startswith((".", "/"))


def extract_imports(code: str) -> List[str]:
    """
    Extract every bare import specifier from a file's code

    Relative and absolute specifiers are left to the sandbox loader.

    Args:
        code: File content

    Returns:
        Deduplicated specifiers in order of first appearance
    """
    if not code:
        return []

    found = []
    for pattern in IMPORT_PATTERNS:
        for match in pattern.finditer(code):
            specifier = match.group(1)
            if is_bare_specifier(specifier):
                found.append((match.start(1), specifier))

    found.sort()
    return list(dict.fromkeys(specifier for _, specifier in found))
