"""Change records shared by the parsers, the aggregator and the suggester."""

from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath
from typing import Iterable, Optional


class ChangeKind(str, Enum):
    CREATED = "created"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"


@dataclass(frozen=True)
class FileChange:
    """Represents a single file's changes."""
    path: str
    kind: ChangeKind
    additions: int = 0
    deletions: int = 0
    from_path: Optional[str] = None

    @property
    def name(self) -> str:
        return PurePosixPath(self.path).name


def paths_by_kind(files: Iterable[FileChange]) -> dict[ChangeKind, list[str]]:
    """Group paths by change kind, keeping their order."""
    grouped: dict[ChangeKind, list[str]] = {kind: [] for kind in ChangeKind}
    for f in files:
        grouped[f.kind].append(f.path)
    return grouped
