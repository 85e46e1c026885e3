"""Path canonicalization shared by the registry, the invalidator and the hooks."""

from __future__ import annotations

import os
import posixpath
from pathlib import Path


def normalize_path(path: str | Path) -> str:
    """Normalize a path to forward slashes with redundant segments removed.

    Args:
        path: Filesystem path or page output path

    Returns:
        Normalized POSIX-style path
    """
    text = str(path).replace("\\", "/")
    if not text:
        return text
    normalized = posixpath.normpath(text)
    # normpath keeps a leading '//' on POSIX; collapse it
    if normalized.startswith("//"):
        normalized = "/" + normalized.lstrip("/")
    return normalized


def canonical_file_path(path: str | Path) -> str:
    """Return the absolute, normalized form of a file path."""
    return normalize_path(os.path.abspath(os.fspath(path)))
