"""
Small text and filesystem helpers used while building a site
"""

import shutil
from pathlib import Path

from .log import LOG


def capitalize(text: str) -> str:
    """
    Upper-case the first character and lower-case the rest

    Example:
        >>> capitalize("aLICE")
        'Alice'
    """
    if not text:
        return ""
    return text[0].upper() + text[1:].lower()


def dir_copy(source: Path, dest: Path) -> Path:
    """
    Copy a directory tree into dest, keeping the source directory name

    Empty directories are not copied.

    Args:
        source: Directory to copy (e.g. project/static)
        dest: Destination parent (e.g. build/) -> build/static

    Returns:
        Path of the copied directory
    """
    target = dest / source.name
    for path in source.rglob("*"):
        if not path.is_file():
            continue
        to = target / path.relative_to(source)
        to.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(path, to)
        LOG(f"Copied {path} to {to}", level=3)
    return target
