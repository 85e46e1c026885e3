"""File I/O used by the settings cache and rendered page output."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path


def read_text(path: Path, errors: str = "strict") -> str:
    """Read a UTF-8 text file in full.

    Args:
        path: File to read
        errors: Decoding error handler; ``"replace"`` turns bad bytes into U+FFFD

    Returns:
        File contents

    Raises:
        OSError: If the file cannot be read
        UnicodeDecodeError: If ``errors`` is strict and the file is not UTF-8
    """
    with path.open("r", encoding="utf-8", errors=errors) as handle:
        return handle.read()


def atomic_write_text(path: Path, text: str) -> bool:
    """Replace ``path`` with ``text`` unless it already holds exactly that text.

    Rendered pages and the settings cache are rewritten on every build or
    watch cycle; skipping identical content keeps their mtimes stable so the
    watcher does not see its own output as a change. The new content goes to a
    sibling temporary file first, so readers never observe a partial page.

    Args:
        path: Destination file path
        text: UTF-8 text content

    Returns:
        True if the file was written, False if it was already up to date
    """
    data = text.encode("utf-8")
    try:
        if path.read_bytes() == data:
            return False
    except FileNotFoundError:
        path.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        dir=path.parent, prefix=f".{path.name}.", delete=False
    ) as tmp:
        tmp.write(data)
    try:
        # NamedTemporaryFile creates 0600; output is world-readable
        os.chmod(tmp.name, 0o644)
        os.replace(tmp.name, path)
    except OSError:
        os.remove(tmp.name)
        raise
    return True
