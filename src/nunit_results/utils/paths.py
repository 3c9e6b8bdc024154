"""Path helpers shared by the tracked-file index."""

from __future__ import annotations

import posixpath


def normalize_file_path(path: str) -> str:
    """Normalize a source path to forward slashes.

    Trims surrounding whitespace, converts backslashes and drops a leading
    ``./`` so that paths from different tools compare equal.
    """
    if not path:
        return path
    normalized = path.strip().replace("\\", "/")
    if normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized


def dir_parts(path: str) -> list[str]:
    """Split the directory portion of a normalized path into components.

    A bare file name has the single directory ``"."``.
    """
    return (posixpath.dirname(path) or ".").split("/")
