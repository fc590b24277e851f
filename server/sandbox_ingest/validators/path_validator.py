"""
Path Validator - Decides which recovered file paths may enter the virtual file system
"""

# Paths that should never be included in the virtual file system
IGNORED_PATHS = (".git", "node_modules", ".next", ".nuxt", "dist", "build", ".cache", ".DS_Store", "Thumbs.db")


def normalize_path(file_path: str) -> str:
    return file_path.replace("\\", "/")


def is_ignored_file_path(file_path: str) -> bool:
    """
    Check if a file path falls under an ignored directory or is an ignored file

    Matching is done on whole path segments, so 'src/build.ts' or
    'distance/util.ts' are kept while 'dist/index.js' or 'app/.git/HEAD' are not.

    Args:
        file_path: Path as returned by the model

    Returns:
        True if the path must be skipped
    """
    normalized = normalize_path(file_path)
    return any(
        normalized == ignored
        or normalized.startswith(ignored + "/")
        or ("/" + ignored + "/") in normalized
        or normalized.endswith("/" + ignored)
        for ignored in IGNORED_PATHS
    )


def is_path_like(key: str) -> bool:
    """A key counts as a file path if it has an extension or a separator"""
    return "." in key or "/" in key


def is_safe_file_path(file_path: str) -> bool:
    """
    Reject paths that could escape the project root

    Args:
        file_path: Path as returned by the model

    Returns:
        False for paths containing a null byte or a '..' segment
    """
    if not file_path or "\0" in file_path:
        return False
    return ".." not in normalize_path(file_path).split("/")
