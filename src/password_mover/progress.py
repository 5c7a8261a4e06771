"""
Progress reporter for relocation runs.

Wraps a tqdm bar that shows elapsed time, a filled/unfilled bar, the current
position, the total and the percentage. The reporter has no authority over
the counters; it only reflects positions pushed into it.
"""

import logging
import sys
import threading
from typing import Optional, TextIO

from tqdm import tqdm

from .types import ProgressState

logger = logging.getLogger(__name__)

BAR_FORMAT = "[{elapsed}] [{bar:40}] {n_fmt}/{total_fmt} ({percentage:.0f}%){postfix}"


class ProgressReporter:
    """Thread-safe textual progress indicator."""

    def __init__(
        self,
        total: int,
        file: Optional[TextIO] = None,
        disable: bool = False
    ):
        """
        Create the bar.

        Args:
            total: Number of items expected, fixed for the run
            file: Stream to render to (default: sys.stdout)
            disable: Suppress rendering entirely (positions are still tracked)
        """
        self.total = total
        self._position = 0
        self._finished = False
        self._closed = False
        self._lock = threading.Lock()
        self._file = file if file is not None else sys.stdout
        self._bar = tqdm(
            total=total,
            file=self._file,
            bar_format=BAR_FORMAT,
            ascii="-#",
            disable=disable,
        )

    @property
    def position(self) -> int:
        return self._position

    @property
    def state(self) -> ProgressState:
        return ProgressState(total=self.total, completed=self._position)

    def set_position(self, n: int) -> None:
        """
        Move the bar to position n.

        Positions never go backwards: a stale value pushed by a slower
        worker is ignored.
        """
        with self._lock:
            if n <= self._position:
                return
            self._position = n
            self._bar.n = n
            if not self._closed:
                self._bar.refresh()

    def write(self, message: str) -> None:
        """Print a line above the bar without breaking it."""
        with self._lock:
            tqdm.write(message, file=self._file)

    def finish(self, message: str) -> None:
        """
        Attach a completion message to the bar.

        The bar stays live, so later positions are still drawn; close()
        releases it.
        """
        with self._lock:
            if self._finished or self._closed:
                return
            self._bar.set_postfix_str(message, refresh=True)
            self._finished = True
        logger.debug(f"Progress finished at {self._position}/{self.total}")

    def close(self) -> None:
        """Draw the final state and release the bar."""
        with self._lock:
            if not self._closed:
                self._bar.close()
                self._closed = True
