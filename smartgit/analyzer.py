"""Change Analyzer - Classify pending changes since the last commit and suggest a message."""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from smartgit.config import Config, VALID_MODES
from smartgit.git.changes import ChangeKind, FileChange, paths_by_kind
from smartgit.git.client import EMPTY_TREE, ErrorKind, GitClient, GitError
from smartgit.git.diff_parser import DiffRecord, parse_diff
from smartgit.git.status import StatusEntry, StatusListing, parse_status
from smartgit.suggest.categorizer import FileCategorizer
from smartgit.suggest.inferencer import TypeInferencer
from smartgit.suggest.synthesizer import MessageSynthesizer, format_message

ANALYSIS_SCOPES = {
    'all': 'all changes since last commit',
    'staged': 'staged changes',
    'unstaged': 'unstaged changes',
}
FIRST_COMMIT_SCOPE = 'first commit (no HEAD)'

NO_CHANGES_MESSAGES = {
    'all': 'No changes detected since the last commit',
    'staged': 'No staged changes found',
    'unstaged': 'No unstaged changes found',
}
NO_CHANGES_FIRST_COMMIT = 'No changes detected in the repository'


class AnalysisError(Exception):
    """Raised when analysis cannot complete. Carries the failing step and mode."""

    def __init__(self, message: str, kind: ErrorKind, step: str, mode: str):
        super().__init__(message)
        self.kind = kind
        self.step = step
        self.mode = mode


@dataclass(frozen=True)
class LineStats:
    additions: int = 0
    deletions: int = 0

    @property
    def total(self) -> int:
        return self.additions + self.deletions


@dataclass(frozen=True)
class AnalysisResult:
    """Complete picture of what changed since the last commit."""
    has_changes: bool
    mode: str
    is_first_commit: bool = False
    files: tuple[FileChange, ...] = ()
    categorized: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    line_stats: LineStats = field(default_factory=LineStats)
    suggested_type: Optional[str] = None
    suggested_scope: Optional[str] = None
    suggested_message: Optional[str] = None
    description: str = ""
    message: str = ""
    analysis_scope: str = ""

    def _paths(self, kind: ChangeKind) -> list[str]:
        return [f.path for f in self.files if f.kind is kind]

    @property
    def created(self) -> list[str]:
        return self._paths(ChangeKind.CREATED)

    @property
    def modified(self) -> list[str]:
        return self._paths(ChangeKind.MODIFIED)

    @property
    def deleted(self) -> list[str]:
        return self._paths(ChangeKind.DELETED)

    @property
    def renamed(self) -> list[tuple[Optional[str], str]]:
        return [(f.from_path, f.path) for f in self.files if f.kind is ChangeKind.RENAMED]

    @property
    def total_files(self) -> int:
        return len(self.files)


def merge_changes(records: Iterable[DiffRecord], entries: Iterable[StatusEntry],
                  force_kind: Optional[ChangeKind] = None) -> list[FileChange]:
    """One FileChange per path, diff data first, status filling the gaps.

    A path seen in several diff records keeps its first kind and sums its
    line counts. Status-only paths get zero counts.
    """
    merged: dict[str, FileChange] = {}

    for record in records:
        existing = merged.get(record.path)
        if existing:
            merged[record.path] = replace(
                existing,
                additions=existing.additions + record.additions,
                deletions=existing.deletions + record.deletions,
            )
            continue
        kind = force_kind or record.kind
        merged[record.path] = FileChange(
            path=record.path,
            kind=kind,
            additions=record.additions,
            deletions=record.deletions,
            from_path=record.old_path if kind is ChangeKind.RENAMED else None,
        )

    for entry in entries:
        if entry.path in merged:
            continue
        kind = force_kind or entry.kind
        merged[entry.path] = FileChange(
            path=entry.path,
            kind=kind,
            from_path=entry.from_path if kind is ChangeKind.RENAMED else None,
        )

    return list(merged.values())


class ChangeAnalyzer:
    """Queries git read-only and turns the answers into an AnalysisResult."""

    def __init__(self, git: GitClient, config: Optional[Config] = None):
        self.git = git
        self.config = config or Config()
        self.categorizer = FileCategorizer(self.config)
        self.inferencer = TypeInferencer(self.config)
        self.synthesizer = MessageSynthesizer()

    def _query(self, step: str, mode: str, func, *args, **kwargs):
        try:
            return func(*args, **kwargs)
        except GitError as e:
            if e.kind is ErrorKind.NOT_A_REPOSITORY:
                message = str(e)
            else:
                message = f"Failed to analyze git changes ({step}, mode={mode}): {e}"
            raise AnalysisError(message, kind=e.kind, step=step, mode=mode) from e

    def analyze(self, mode: Optional[str] = None) -> AnalysisResult:
        mode = mode or self.config.mode
        if mode not in VALID_MODES:
            raise AnalysisError(
                f"Invalid mode '{mode}'. Use one of: {', '.join(VALID_MODES)}",
                kind=ErrorKind.INVALID_MODE, step='mode', mode=mode,
            )

        self._query('verify repository', mode, self.git.verify_repository)
        has_head = self._query('resolve HEAD', mode, self.git.resolve_reference, 'HEAD') is not None
        status = parse_status(self._query('status', mode, self.git.status_short))

        if not has_head:
            return self._analyze_first_commit(status, mode)

        records = parse_diff(self._read_diff(mode))
        entries = status.entries
        if mode == 'staged':
            entries = [e for e in entries if e.is_staged]

        if not records and not entries:
            return AnalysisResult(
                has_changes=False,
                mode=mode,
                message=NO_CHANGES_MESSAGES[mode],
                analysis_scope=ANALYSIS_SCOPES[mode],
            )

        files = merge_changes(records, entries)
        return self._build(files, mode, ANALYSIS_SCOPES[mode], is_first_commit=False)

    def _read_diff(self, mode: str) -> str:
        if mode == 'staged':
            return self._query('staged diff', mode, self.git.diff, cached=True, ref='HEAD')
        if mode == 'unstaged':
            return self._query('unstaged diff', mode, self.git.diff, cached=False, ref='HEAD')

        # Index against HEAD, then working tree against the index
        staged = self._query('staged diff', mode, self.git.diff, cached=True, ref='HEAD')
        unstaged = self._query('unstaged diff', mode, self.git.diff, cached=False, ref=None)
        return staged + '\n' + unstaged

    def _analyze_first_commit(self, status: StatusListing, mode: str) -> AnalysisResult:
        if status.is_empty:
            return AnalysisResult(
                has_changes=False,
                mode=mode,
                is_first_commit=True,
                message=NO_CHANGES_FIRST_COMMIT,
                analysis_scope=FIRST_COMMIT_SCOPE,
            )

        records = parse_diff(self._query('initial diff', mode, self.git.diff, cached=True, ref=EMPTY_TREE))
        files = merge_changes(records, status.entries, force_kind=ChangeKind.CREATED)
        return self._build(files, mode, FIRST_COMMIT_SCOPE, is_first_commit=True)

    def _build(self, files: list[FileChange], mode: str, analysis_scope: str,
               is_first_commit: bool) -> AnalysisResult:
        paths = [f.path for f in files]
        categorized = self.categorizer.categorize(paths)
        by_kind = paths_by_kind(files)

        commit_type, scope = self.inferencer.infer(paths, categorized, by_kind)
        description = self.synthesizer.describe(categorized, by_kind, files)

        return AnalysisResult(
            has_changes=True,
            mode=mode,
            is_first_commit=is_first_commit,
            files=tuple(files),
            categorized=MappingProxyType({bucket: tuple(p) for bucket, p in categorized.items()}),
            line_stats=LineStats(
                additions=sum(f.additions for f in files),
                deletions=sum(f.deletions for f in files),
            ),
            suggested_type=commit_type,
            suggested_scope=scope,
            suggested_message=format_message(commit_type, scope, description),
            description=description,
            analysis_scope=analysis_scope,
        )

    def alternatives(self, result: AnalysisResult) -> list[str]:
        if not result.has_changes:
            return []
        return self.synthesizer.alternatives(
            result.suggested_type, result.suggested_scope, result.description, result.total_files,
        )


def analyze(repo_path: str = '.', mode: Optional[str] = None,
            config: Optional[Config] = None) -> AnalysisResult:
    """Analyze changes since HEAD in repo_path. Mode defaults to config.mode ('all')."""
    return ChangeAnalyzer(GitClient(repo_path), config).analyze(mode)


def summarize(result: AnalysisResult) -> str:
    """One-line count and line-stat summary. Returns result.message when nothing changed."""
    if not result.has_changes:
        return result.message

    counts = [
        (len(result.modified), 'modified'),
        (len(result.created), 'created'),
        (len(result.deleted), 'deleted'),
        (len(result.renamed), 'renamed'),
    ]
    parts = [f"{count} {label}" for count, label in counts if count > 0]
    summary = f"{result.total_files} file(s) changed: {', '.join(parts)}"

    line_parts = []
    if result.line_stats.additions > 0:
        line_parts.append(f"+{result.line_stats.additions}")
    if result.line_stats.deletions > 0:
        line_parts.append(f"-{result.line_stats.deletions}")
    if line_parts:
        summary += f" ({', '.join(line_parts)})"

    return summary
