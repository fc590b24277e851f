"""
Module Resolver - Maps a bare specifier to an ESM CDN URL
"""
import re
from typing import Callable, List, Optional, Tuple, Union

from .. import config
from ..states import PackageConfig
from .registry import PACKAGE_REGISTRY, REACT_DOM, Registry

NODE_BUILTINS = ("fs", "path", "os", "crypto", "http", "https", "stream", "util", "events", "buffer")

# Strategy result telling the resolver to stop and return None
EXCLUDED = object()

_URL_SCHEME = re.compile(r"^[a-zA-Z][a-zA-Z\d+.-]*://")

StrategyResult = Union[str, None, object]
Strategy = Callable[[str, List[str], Registry], StrategyResult]


def build_esm_url(package_config: PackageConfig, cdn_base: Optional[str] = None) -> str:
    """
    Build the CDN URL for a package configuration

    https://esm.sh/<package>[@<version>][<subpath>][?external=<a>,<b>]
    """
    url = f"{cdn_base or config.ESM_CDN_BASE}/{package_config.package}"
    if package_config.version:
        url += f"@{package_config.version}"
    if package_config.subpath:
        url += package_config.subpath
    if package_config.external:
        url += "?external=" + ",".join(package_config.external)
    return url


def best_effort_url(specifier: str) -> str:
    """URL for an unregistered package, assuming it is a React UI library"""
    return build_esm_url(PackageConfig(package=specifier, external=REACT_DOM))


def _with_subpath(package_config: PackageConfig, segments: List[str]) -> PackageConfig:
    if not segments:
        return package_config
    return package_config.model_copy(update={"subpath": "/" + "/".join(segments)})


def _exact_match(specifier: str, parts: List[str], registry: Registry) -> StrategyResult:
    if specifier in registry:
        return build_esm_url(registry[specifier])
    return None


def _scoped_package(specifier: str, parts: List[str], registry: Registry) -> StrategyResult:
    """@scope/name/sub -> registered @scope/name with subpath /sub"""
    if not specifier.startswith("@") or len(parts) < 2:
        return None
    base = f"{parts[0]}/{parts[1]}"
    if base in registry:
        return build_esm_url(_with_subpath(registry[base], parts[2:]))
    return best_effort_url(specifier)


def _package_subpath(specifier: str, parts: List[str], registry: Registry) -> StrategyResult:
    """name/sub/path -> registered name with subpath /sub/path"""
    if len(parts) < 2 or parts[0] not in registry:
        return None
    return build_esm_url(_with_subpath(registry[parts[0]], parts[1:]))


def _relative_or_url(specifier: str, parts: List[str], registry: Registry) -> StrategyResult:
    if specifier.startswith((".", "/")) or _URL_SCHEME.match(specifier):
        return EXCLUDED
    return None


def _node_builtin(specifier: str, parts: List[str], registry: Registry) -> StrategyResult:
    name = specifier[len("node:"):] if specifier.startswith("node:") else specifier
    if name in NODE_BUILTINS or name.split("/")[0] in NODE_BUILTINS:
        return EXCLUDED
    return None


def _unknown_package(specifier: str, parts: List[str], registry: Registry) -> StrategyResult:
    return best_effort_url(specifier)


# Most specific first; the first strategy returning a result wins
RESOLUTION_STRATEGIES: Tuple[Strategy, ...] = (
    _exact_match,
    _scoped_package,
    _package_subpath,
    _relative_or_url,
    _node_builtin,
    _unknown_package,
)


def resolve_specifier(specifier: str, registry: Registry = PACKAGE_REGISTRY) -> Optional[str]:
    """
    Resolve a module specifier to a CDN URL

    Never raises. Unknown packages get a best-effort URL rather than failing,
    so a plausible but unregistered package does not block the sandbox.

    Args:
        specifier: Module specifier as written in the import
        registry: Specifier -> PackageConfig table

    Returns:
        The URL, or None for relative imports, URLs and Node built-ins
    """
    if not specifier:
        return None

    parts = specifier.split("/")
    for strategy in RESOLUTION_STRATEGIES:
        result = strategy(specifier, parts, registry)
        if result is EXCLUDED:
            return None
        if result is not None:
            return result
    return None
