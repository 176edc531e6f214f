"""Status Parser - Turn `git status --porcelain` output into per-file entries."""

from dataclasses import dataclass, field
from typing import Optional

from smartgit.git.changes import ChangeKind


RENAME_ARROW = ' -> '

# XY pairs git uses for unmerged paths
CONFLICT_CODES = {'DD', 'AU', 'UD', 'UA', 'DU', 'AA', 'UU'}


@dataclass(frozen=True)
class StatusEntry:
    """One porcelain line."""
    path: str
    kind: ChangeKind
    index: str = ' '
    worktree: str = ' '
    from_path: Optional[str] = None

    @property
    def is_staged(self) -> bool:
        return self.index not in (' ', '?', '!')

    @property
    def is_conflicted(self) -> bool:
        return f"{self.index}{self.worktree}" in CONFLICT_CODES


@dataclass
class StatusListing:
    entries: list[StatusEntry] = field(default_factory=list)

    def _paths(self, kind: ChangeKind) -> list[str]:
        return [e.path for e in self.entries if e.kind is kind]

    @property
    def modified(self) -> list[str]:
        return self._paths(ChangeKind.MODIFIED)

    @property
    def created(self) -> list[str]:
        return self._paths(ChangeKind.CREATED)

    @property
    def deleted(self) -> list[str]:
        return self._paths(ChangeKind.DELETED)

    @property
    def renamed(self) -> list[tuple[str, str]]:
        return [(e.from_path, e.path) for e in self.entries if e.kind is ChangeKind.RENAMED]

    @property
    def paths(self) -> list[str]:
        return [e.path for e in self.entries]

    @property
    def conflicted(self) -> list[str]:
        return [e.path for e in self.entries if e.is_conflicted]

    @property
    def is_empty(self) -> bool:
        return not self.entries


def _unquote(path: str) -> str:
    path = path.strip()
    if len(path) >= 2 and path[0] == path[-1] == '"':
        return path[1:-1].replace('\\"', '"').replace('\\\\', '\\')
    return path


def _classify(index: str, worktree: str) -> ChangeKind:
    if index == 'M' or worktree == 'M':
        return ChangeKind.MODIFIED
    if index == 'A' or (index == '?' and worktree == '?'):
        return ChangeKind.CREATED
    if index == 'D' or worktree == 'D':
        return ChangeKind.DELETED
    # Anything unrecognized is kept as a modification
    return ChangeKind.MODIFIED


def parse_status(output: str) -> StatusListing:
    """Parse porcelain v1 status text. Best effort, never raises."""
    listing = StatusListing()
    if not output or not output.strip():
        return listing

    for line in output.splitlines():
        if len(line) < 4:
            continue

        index, worktree = line[0], line[1]
        rest = line[3:]

        if RENAME_ARROW in rest:
            old, new = rest.split(RENAME_ARROW, 1)
            listing.entries.append(StatusEntry(
                path=_unquote(new),
                kind=ChangeKind.RENAMED,
                index=index,
                worktree=worktree,
                from_path=_unquote(old),
            ))
            continue

        listing.entries.append(StatusEntry(
            path=_unquote(rest),
            kind=_classify(index, worktree),
            index=index,
            worktree=worktree,
        ))

    return listing
