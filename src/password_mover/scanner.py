"""
Tree scanner for finding password files under a source root.

This module is responsible for:
- Recursively walking a directory tree using os.scandir (fast)
- Yielding regular files whose lowercased name is a target name
- Listing target files among the immediate children of a directory
- Counting matches up front to size the progress indicator

Traversal is fail-open: entries that cannot be read are silently omitted.
Symbolic links are never followed, so link cycles cannot occur.
"""

import logging
import os
from pathlib import Path
from typing import FrozenSet, Iterator, Union

from .types import MatchedFile

logger = logging.getLogger(__name__)

# File names (lowercased) that qualify a file for relocation
TARGET_NAMES: FrozenSet[str] = frozenset({"password.txt", "passwords.txt"})


def is_target_name(name: str) -> bool:
    """Check whether a base name is a target name, ignoring case."""
    return name.lower() in TARGET_NAMES


def _match_entry(entry: os.DirEntry) -> bool:
    """True if a directory entry is a regular file with a target name."""
    if not is_target_name(entry.name):
        return False
    try:
        return entry.is_file(follow_symlinks=False)
    except OSError:
        return False


def scan(root: Union[str, Path]) -> Iterator[MatchedFile]:
    """
    Lazily walk a directory tree depth-first and yield password files.

    The sequence is finite and not restartable. Order across siblings
    follows os.scandir and is arbitrary.

    Args:
        root: The root directory to scan

    Yields:
        MatchedFile for every regular file whose lowercased name is
        password.txt or passwords.txt, at any depth
    """
    def _scan_recursive(dir_path: str) -> Iterator[MatchedFile]:
        try:
            with os.scandir(dir_path) as it:
                entries = list(it)
        except OSError:
            return

        for entry in entries:
            if _match_entry(entry):
                yield MatchedFile(name=entry.name, path=entry.path)
                continue

            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                continue

            if is_dir:
                yield from _scan_recursive(entry.path)

    yield from _scan_recursive(os.fspath(root))


def scan_top_level(root: Union[str, Path]) -> Iterator[MatchedFile]:
    """
    Yield password files that are immediate children of root.

    Args:
        root: The directory to list

    Yields:
        MatchedFile for each matching regular file directly under root
    """
    try:
        with os.scandir(os.fspath(root)) as it:
            entries = list(it)
    except OSError:
        return

    for entry in entries:
        if _match_entry(entry):
            yield MatchedFile(name=entry.name, path=entry.path)


def count(root: Union[str, Path]) -> int:
    """
    Count password files under root with an independent full traversal.

    Args:
        root: The root directory to scan

    Returns:
        Number of matching files at any depth
    """
    total = sum(1 for _ in scan(root))
    logger.info(f"Found {total} password files under {root}")
    return total
