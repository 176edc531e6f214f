"""Diff Parser - Split unified diff text into per-file records with line tallies."""

from dataclasses import dataclass
import re
from typing import Optional

from smartgit.git.changes import ChangeKind


DEV_NULL = '/dev/null'

DIFF_GIT_RE = re.compile(r'^diff --git a/(.+?) b/(.+)$')
HUNK_RE = re.compile(r'^@@ -\d+(?:,(\d+))? \+\d+(?:,(\d+))? @@')


@dataclass
class DiffRecord:
    """One file section of a unified diff."""
    old_path: Optional[str] = None
    new_path: Optional[str] = None
    new: bool = False
    deleted: bool = False
    renamed: bool = False
    binary: bool = False
    additions: int = 0
    deletions: int = 0
    hunks: int = 0

    @property
    def path(self) -> str:
        if self.deleted:
            return self.old_path or self.new_path or ''
        return self.new_path or self.old_path or ''

    @property
    def kind(self) -> ChangeKind:
        if self.deleted:
            return ChangeKind.DELETED
        if self.new:
            return ChangeKind.CREATED
        if self.renamed:
            return ChangeKind.RENAMED
        return ChangeKind.MODIFIED


def _strip_prefix(path: str) -> Optional[str]:
    """Turn a ---/+++ header path into a repository path (None for /dev/null)."""
    path = path.split('\t')[0].strip()
    if path.startswith('"') and path.endswith('"') and len(path) >= 2:
        path = path[1:-1]
    if path == DEV_NULL:
        return None
    if path[:2] in ('a/', 'b/'):
        return path[2:]
    return path


class _Parser:
    """Line-driven state machine over one diff text."""

    def __init__(self):
        self.records: list[DiffRecord] = []
        self.current: Optional[DiffRecord] = None
        self.old_left = 0
        self.new_left = 0

    def _start(self) -> DiffRecord:
        self.current = DiffRecord()
        self.records.append(self.current)
        return self.current

    def feed(self, line: str) -> None:
        if self.old_left > 0 or self.new_left > 0:
            if self._hunk_line(line):
                return
            # Malformed hunk, resync on headers
            self.old_left = self.new_left = 0

        if line.startswith('diff --git '):
            record = self._start()
            match = DIFF_GIT_RE.match(line)
            if match:
                record.old_path, record.new_path = match.group(1), match.group(2)
            return

        if line.startswith('--- '):
            record = self.current
            if record is None or record.hunks > 0:
                record = self._start()
            old = _strip_prefix(line[4:])
            if old is None:
                record.new = True
            else:
                record.old_path = old
            return

        record = self.current
        if record is None:
            return

        if line.startswith('+++ '):
            new = _strip_prefix(line[4:])
            if new is None:
                record.deleted = True
            else:
                record.new_path = new
        elif line.startswith('new file mode'):
            record.new = True
        elif line.startswith('deleted file mode'):
            record.deleted = True
        elif line.startswith('rename from '):
            record.renamed = True
            record.old_path = line[len('rename from '):]
        elif line.startswith('rename to '):
            record.renamed = True
            record.new_path = line[len('rename to '):]
        elif line.startswith('Binary files') or line.startswith('GIT binary patch'):
            record.binary = True
        elif line.startswith('@@'):
            match = HUNK_RE.match(line)
            if match:
                record.hunks += 1
                self.old_left = int(match.group(1)) if match.group(1) is not None else 1
                self.new_left = int(match.group(2)) if match.group(2) is not None else 1

    def _hunk_line(self, line: str) -> bool:
        record = self.current
        if line.startswith('+'):
            record.additions += 1
            self.new_left -= 1
        elif line.startswith('-'):
            record.deletions += 1
            self.old_left -= 1
        elif line.startswith(' ') or line == '':
            self.old_left -= 1
            self.new_left -= 1
        elif line.startswith('\\'):
            pass
        else:
            return False
        return True


def parse_diff(text: str) -> list[DiffRecord]:
    """Parse unified diff text. Empty or whitespace-only input yields no records."""
    if not text or not text.strip():
        return []

    parser = _Parser()
    for line in text.splitlines():
        parser.feed(line)
    return [r for r in parser.records if r.path]
