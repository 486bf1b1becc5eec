"""Utility helpers for working with files."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Tuple


def file_extension(path: Path) -> Optional[str]:
    """Return the extension without its dot, or None when there is none.

    Matching is case-sensitive; ``report.PDF`` has extension ``PDF``.
    """
    suffix = Path(path).suffix
    return suffix[1:] if suffix else None


def list_directory(directory: Path) -> Tuple[List[Path], List[Path]]:
    """Split a directory's entries into files and subdirectories.

    Symlinked directories are not descended into, which keeps link cycles
    from walking forever. Raises OSError when the directory can't be read.
    """
    files: List[Path] = []
    subdirectories: List[Path] = []
    for child in Path(directory).iterdir():
        if child.is_file():
            files.append(child)
        elif child.is_dir() and not child.is_symlink():
            subdirectories.append(child)
    return files, subdirectories
