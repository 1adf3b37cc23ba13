"""Recursive discovery of Go source files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List

SOURCE_SUFFIX = ".go"

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    "node_modules",
}


def list_go_files(root: Path | str) -> List[Path]:
    """Return every ``.go`` file below ``root`` in a stable, sorted order."""
    root_path = Path(root).expanduser().resolve()
    if not root_path.exists():
        raise FileNotFoundError(f"Source root not found: {root}")
    if not root_path.is_dir():
        raise NotADirectoryError(f"Source root is not a directory: {root}")

    files: List[Path] = []
    for dirpath, dirnames, filenames in os.walk(root_path):
        dirnames[:] = sorted(name for name in dirnames if name not in _EXCLUDED_DIRS)
        current_dir = Path(dirpath)
        for filename in sorted(filenames):
            if filename.endswith(SOURCE_SUFFIX):
                files.append(current_dir / filename)
    return files


__all__ = ["SOURCE_SUFFIX", "list_go_files"]
