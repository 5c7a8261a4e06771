"""
Password file mover for relocating matched files to the destination.

This module is responsible for:
- Building collision-free destination names (timestamp + sequence number)
- Sharing sequence and progress counters between worker threads
- Renaming matched files into the destination folder
- Reporting per-file errors without aborting the batch
- Running the concurrent top-level pass and the sequential recursive pass
"""

import logging
import os
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Union

from . import scanner
from .console import print_error
from .progress import ProgressReporter
from .types import MatchedFile, MoveResult, MoveStatus

logger = logging.getLogger(__name__)


class MissingExtensionError(ValueError):
    """Raised when a file name has no extension to carry over."""
    pass


class AtomicCounter:
    """Integer counter with an atomic fetch-and-add."""

    def __init__(self, start: int = 0):
        self._value = start
        self._lock = threading.Lock()

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def fetch_add(self, amount: int = 1) -> int:
        """Add amount and return the value from before the addition."""
        with self._lock:
            previous = self._value
            self._value += amount
            return previous


class SharedCounters:
    """
    Counters shared by every relocation in a run.

    Attributes:
        sequence: Source of unique per-name sequence numbers (starts at 0)
        overall: Number of relocation attempts processed so far
    """

    def __init__(self):
        self.sequence = AtomicCounter()
        self.overall = AtomicCounter()


def make_unique_name(
    file_name: str,
    sequence: int,
    timestamp: Optional[int] = None
) -> str:
    """
    Build a destination name that cannot collide within a run.

    The result is "{file_name}_{timestamp}_{sequence}.{ext}", for example
    "password.txt_1700000000123456_3.txt". Two files sharing a name and a
    timestamp still differ by sequence number.

    Args:
        file_name: Original base name, including its extension
        sequence: Unique sequence number for this relocation
        timestamp: Microseconds since the epoch (default: now)

    Returns:
        The new file name

    Raises:
        MissingExtensionError: If file_name has no extension
    """
    extension = Path(file_name).suffix
    if not extension:
        raise MissingExtensionError(f"File has no extension: {file_name}")

    if timestamp is None:
        timestamp = time.time_ns() // 1000

    return f"{file_name}_{timestamp}_{sequence}{extension}"


def relocate_file(
    file: MatchedFile,
    dest_root: Union[str, Path],
    counters: SharedCounters,
    progress: ProgressReporter
) -> MoveResult:
    """
    Move one matched file into the destination folder.

    Makes exactly one rename attempt. A failed rename is reported and the
    batch continues; the overall counter and the progress position advance
    either way, so they count attempts rather than successful moves.

    Args:
        file: The matched file to move
        dest_root: The destination folder
        counters: Counters shared across the run
        progress: Progress indicator to update

    Returns:
        MoveResult describing the attempt

    Raises:
        MissingExtensionError: If the file name has no extension
    """
    sequence = counters.sequence.fetch_add()
    new_name = make_unique_name(file.name, sequence)
    dest_path = os.path.join(os.fspath(dest_root), new_name)

    try:
        os.rename(file.path, dest_path)
    except OSError as e:
        logger.warning(f"Move failed: {file.path} -> {dest_path}: {e}")
        progress.write(f"Error moving file: {e}")
        result = MoveResult(
            source_path=file.path,
            dest_path=None,
            status=MoveStatus.ERROR,
            message=str(e)
        )
    else:
        logger.info(f"Moved: {file.path} -> {dest_path}")
        result = MoveResult(
            source_path=file.path,
            dest_path=dest_path,
            status=MoveStatus.MOVED,
            message=f"Moved to {dest_path}"
        )

    overall = counters.overall.fetch_add() + 1
    progress.set_position(overall)
    return result


class PasswordMover:
    """
    Moves password files from a source tree into a destination folder.

    A run has two passes sharing one set of counters and one progress bar:
    a concurrent pass over the top-level files of the source root, then a
    sequential pass over the whole tree.
    """

    def __init__(
        self,
        dest_root: Union[str, Path],
        progress: ProgressReporter,
        max_workers: Optional[int] = None,
        counters: Optional[SharedCounters] = None
    ):
        """
        Initialize the mover.

        Args:
            dest_root: The destination folder (must already exist)
            progress: Progress indicator shared by both passes
            max_workers: Thread cap for the top-level pass
                         (default: ThreadPoolExecutor's default)
            counters: Shared counters (default: fresh counters at zero)
        """
        self.dest_root = Path(dest_root)
        self.progress = progress
        self.max_workers = max_workers
        self.counters = counters or SharedCounters()

    def move_top_level(self, source_root: Union[str, Path]) -> List[MoveResult]:
        """
        Relocate the top-level password files concurrently.

        Blocks until every relocation has finished.

        Args:
            source_root: Directory whose immediate children are checked

        Returns:
            MoveResult for each top-level match, in completion-independent order
        """
        matches = list(scanner.scan_top_level(source_root))
        logger.info(f"Top-level pass: {len(matches)} files")

        if not matches:
            return []

        with ThreadPoolExecutor(
            max_workers=self.max_workers,
            thread_name_prefix="relocate"
        ) as executor:
            futures = [
                executor.submit(
                    relocate_file, match, self.dest_root, self.counters, self.progress
                )
                for match in matches
            ]
            return [future.result() for future in futures]

    def move_recursive(self, source_root: Union[str, Path]) -> List[MoveResult]:
        """
        Relocate every password file in the tree, one at a time.

        Args:
            source_root: Root of the tree to walk

        Returns:
            MoveResult for each match found during the walk
        """
        results: List[MoveResult] = []
        for match in scanner.scan(source_root):
            results.append(
                relocate_file(match, self.dest_root, self.counters, self.progress)
            )

        logger.info(f"Recursive pass: {len(results)} files")
        return results


def process_directory(
    source_root: Union[str, Path],
    dest_root: Union[str, Path],
    max_workers: Optional[int] = None,
    progress_file=None
) -> bool:
    """
    Run a full relocation from source_root into dest_root.

    Steps:
    1. Create the destination folder if needed
    2. Count the password files under the source root
    3. Move the top-level files concurrently
    4. Finish the progress bar, then walk the whole tree sequentially

    Args:
        source_root: Root of the tree to scan
        dest_root: Destination folder
        max_workers: Thread cap for the top-level pass
        progress_file: Stream for the progress bar (default: sys.stdout)

    Returns:
        False if the destination folder could not be created, True otherwise
    """
    dest_path = Path(dest_root)

    if not dest_path.exists():
        try:
            dest_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Cannot create destination {dest_path}: {e}")
            print(f"Error creating destination folder: {e}")
            return False

    total = scanner.count(source_root)
    if total == 0:
        print_error("No files to move.")
        return True

    progress = ProgressReporter(total, file=progress_file)
    mover = PasswordMover(dest_path, progress, max_workers=max_workers)

    try:
        mover.move_top_level(source_root)
        progress.finish(f"Done! Files moved to: {dest_path}")
        mover.move_recursive(source_root)
    finally:
        progress.close()

    logger.info(
        f"Run complete: {mover.counters.overall.value} attempts "
        f"for {total} files counted"
    )
    return True
