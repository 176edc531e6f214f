"""Git Runner - Stage, commit and push once a message has been approved."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from smartgit.git.client import GitClient, GitError
from smartgit.git.status import parse_status

UPSTREAM_HINTS = ('no upstream', 'set-upstream')


class WorkflowError(Exception):
    """Raised when the stage or commit step fails."""

    def __init__(self, message: str, step: str, result: Optional['WorkflowResult'] = None):
        super().__init__(message)
        self.step = step
        self.result = result


@dataclass
class StepResult:
    success: bool
    message: str
    skipped: bool = False
    error: str = ""


@dataclass
class WorkflowResult:
    """Outcome of each workflow step."""
    add: Optional[StepResult] = None
    commit: Optional[StepResult] = None
    push: Optional[StepResult] = None
    commit_hash: str = ""
    branch: str = ""
    errors: list[str] = field(default_factory=list)

    @property
    def pushed(self) -> bool:
        return bool(self.push and self.push.success)


@dataclass
class ConflictCheck:
    has_conflicts: bool
    message: str
    type: Optional[str] = None
    files: list[str] = field(default_factory=list)


@dataclass
class BranchInfo:
    current: str
    tracking: Optional[str] = None
    ahead: int = 0
    behind: int = 0
    remotes: list[tuple[str, str]] = field(default_factory=list)


def current_branch(git: GitClient) -> str:
    """Branch name, also for an unborn branch. Empty when HEAD is detached."""
    try:
        return git.run('symbolic-ref', '--short', 'HEAD').strip()
    except GitError:
        return ''


def list_remotes(git: GitClient) -> list[tuple[str, str]]:
    """(name, url) pairs, preferring push URLs."""
    remotes: dict[str, str] = {}
    for line in git.run('remote', '-v').splitlines():
        parts = line.split()
        if len(parts) < 2:
            continue
        name, url = parts[0], parts[1]
        if name not in remotes or (len(parts) > 2 and parts[2] == '(push)'):
            remotes[name] = url
    return list(remotes.items())


def _push(git: GitClient, result: WorkflowResult) -> WorkflowResult:
    remotes = [name for name, _ in list_remotes(git)]
    if not remotes:
        result.push = StepResult(
            success=False,
            skipped=True,
            message='No remote repository configured. Commit created but not pushed.',
        )
        return result

    branch = result.branch
    remote = 'origin' if 'origin' in remotes else remotes[0]

    try:
        git.run('push')
        result.push = StepResult(success=True, message=f"Successfully pushed to {remote}/{branch}")
        return result
    except GitError as e:
        failure = e

    if not any(hint in str(failure).lower() for hint in UPSTREAM_HINTS):
        result.errors.append(f"Failed to push: {failure.stderr or failure}")
        result.push = StepResult(success=False, message='Commit created but push failed.',
                                 error=failure.stderr or str(failure))
        return result

    try:
        git.run('push', '-u', remote, branch)
        result.push = StepResult(success=True,
                                 message=f"Successfully pushed and set upstream to {remote}/{branch}")
    except GitError as e:
        result.errors.append(f"Failed to push: {e.stderr or e}")
        result.push = StepResult(
            success=False,
            message='Commit created but push failed. You may need to set upstream or check authentication.',
            error=e.stderr or str(e),
        )
    return result


def execute_workflow(message: str, git: GitClient, push: bool = True,
                     stage_all: bool = True) -> WorkflowResult:
    """Stage everything, commit with message, then push.

    With stage_all off the index is committed as it is, so only what was
    already staged goes into the commit. Stage and commit failures raise
    WorkflowError. Push failures are recorded on the result since the
    commit already exists.
    """
    result = WorkflowResult()

    if not stage_all:
        result.add = StepResult(success=True, skipped=True, message='Committing staged changes only')
    else:
        try:
            git.run('add', '-A')
        except GitError as e:
            error = f"Failed to stage changes: {e}"
            result.errors.append(error)
            raise WorkflowError(error, step='add', result=result) from e
        result.add = StepResult(success=True, message='Successfully staged all changes')

    try:
        git.run('commit', '-m', message)
        result.commit_hash = git.run('rev-parse', '--short', 'HEAD').strip()
    except GitError as e:
        error = f"Failed to commit changes: {e}"
        result.errors.append(error)
        raise WorkflowError(error, step='commit', result=result) from e
    result.commit = StepResult(success=True, message='Successfully created commit')
    result.branch = current_branch(git)

    if not push:
        result.push = StepResult(success=False, skipped=True, message='Push skipped.')
        return result

    return _push(git, result)


def _git_path_exists(git: GitClient, name: str) -> bool:
    relative = git.run('rev-parse', '--git-path', name).strip()
    return (Path(git.repo_path) / relative).exists()


def check_for_conflicts(git: GitClient) -> ConflictCheck:
    """Unmerged paths, or a merge/rebase in progress."""
    status = parse_status(git.status_short())
    if status.conflicted:
        return ConflictCheck(
            has_conflicts=True,
            type='merge',
            files=status.conflicted,
            message='You have unresolved merge conflicts. Please resolve them before committing.',
        )

    if _git_path_exists(git, 'MERGE_HEAD'):
        return ConflictCheck(
            has_conflicts=True,
            type='merge',
            message='Git merge in progress. Complete or abort the merge before using SmartGit.',
        )

    if _git_path_exists(git, 'rebase-merge') or _git_path_exists(git, 'rebase-apply'):
        return ConflictCheck(
            has_conflicts=True,
            type='rebase',
            message='Git rebase in progress. Complete or abort the rebase before using SmartGit.',
        )

    return ConflictCheck(has_conflicts=False, message='No conflicts detected.')


def get_branch_info(git: GitClient) -> BranchInfo:
    info = BranchInfo(current=current_branch(git), remotes=list_remotes(git))

    try:
        info.tracking = git.run('rev-parse', '--abbrev-ref', '--symbolic-full-name', '@{u}').strip() or None
    except GitError:
        return info

    counts = git.run('rev-list', '--left-right', '--count', 'HEAD...@{u}').split()
    if len(counts) == 2:
        info.ahead, info.behind = int(counts[0]), int(counts[1])
    return info
