"""
Type definitions and data classes for the password mover application.

This module defines:
- Configuration: The persisted source/destination path pair
- MatchedFile: Data class for a password file found during scanning
- MoveStatus: Enum for relocation outcomes
- MoveResult: Data class describing a single relocation attempt
- ProgressState: Snapshot of the progress indicator
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class Configuration:
    """
    Source and destination paths for a run.

    Attributes:
        source_path: Root of the tree that is scanned for password files
        dest_path: Folder that matched files are moved into
    """
    source_path: Path
    dest_path: Path


@dataclass(slots=True)
class MatchedFile:
    """
    Represents a password file discovered during scanning.

    Attributes:
        name: The file's basename as found on disk (e.g., "Passwords.TXT")
        path: The full path to the file
    """
    name: str
    path: str

    def __hash__(self):
        return hash(self.path)

    def __eq__(self, other):
        if not isinstance(other, MatchedFile):
            return False
        return self.path == other.path


class MoveStatus(Enum):
    """Status of a file relocation attempt."""
    MOVED = "moved"    # Renamed into the destination
    ERROR = "error"    # Rename failed, batch continued


@dataclass
class MoveResult:
    """Result of a relocation attempt."""
    source_path: str
    dest_path: Optional[str]
    status: MoveStatus
    message: str


@dataclass
class ProgressState:
    """Items completed versus items expected."""
    total: int
    completed: int
