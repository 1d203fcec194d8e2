"""Utility helpers for working with files."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator

from grepxlsx.config import LOCK_FILE_MARKER, WORKBOOK_EXTENSION
from grepxlsx.errors import FilesystemError
from grepxlsx.models import Document

LOGGER = logging.getLogger(__name__)


def is_lock_file(path: Path) -> bool:
    """Return True for the lock artifacts Excel leaves beside open workbooks."""
    return LOCK_FILE_MARKER in path.name


def is_workbook(path: Path) -> bool:
    return path.name.lower().endswith(WORKBOOK_EXTENSION)


def _iter_entries(directory: Path) -> Iterator[os.DirEntry]:
    """Yield non-directory entries below ``directory`` in lexical order."""
    try:
        with os.scandir(directory) as scanner:
            entries = sorted(scanner, key=lambda entry: entry.name)
    except OSError as exc:
        raise FilesystemError(f"Cannot list directory {directory}: {exc}") from exc

    for entry in entries:
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError as exc:
            raise FilesystemError(f"Cannot stat {entry.path}: {exc}") from exc
        if is_dir:
            yield from _iter_entries(Path(entry.path))
        else:
            yield entry


def iter_workbook_paths(root: Path) -> Iterator[Document]:
    """Yield workbooks found under ``root``, descending into directories.

    Lock files and anything without the workbook extension are skipped.
    Any filesystem error aborts the walk with :class:`FilesystemError`.
    """
    try:
        root = Path(os.path.abspath(root))
    except OSError as exc:
        raise FilesystemError(f"Cannot resolve {root}: {exc}") from exc

    if not root.exists():
        raise FilesystemError(f"Directory not found: {root}")
    if not root.is_dir():
        raise FilesystemError(f"Not a directory: {root}")

    for entry in _iter_entries(root):
        path = Path(entry.path)
        if is_lock_file(path):
            LOGGER.debug("Skipping lock file %s", path)
            continue
        if not is_workbook(path):
            continue
        yield Document(path=path, relative_path=path.relative_to(root))
