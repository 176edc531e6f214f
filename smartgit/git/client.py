"""Git Client - Thin wrapper over the git binary."""

import subprocess
from enum import Enum
from pathlib import Path
from typing import Optional


# Hash of the empty tree object, identical in every repository
EMPTY_TREE = '4b825dc642cb6eb9a060e54bf8d69288fbee4904'

NOT_A_REPOSITORY_MESSAGE = "Not a git repository. Please run this command inside a git repository."


class ErrorKind(Enum):
    """Failure categories callers can branch on."""
    NOT_A_REPOSITORY = "not_a_repository"
    GIT_UNAVAILABLE = "git_unavailable"
    COMMAND_FAILED = "command_failed"
    INVALID_MODE = "invalid_mode"


class GitError(Exception):
    """Raised when git operations fail."""

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.COMMAND_FAILED,
                 command: str = "", stderr: str = ""):
        super().__init__(message)
        self.kind = kind
        self.command = command
        self.stderr = stderr


class GitClient:
    """Runs git commands against one repository."""

    def __init__(self, repo_path: str | Path = '.'):
        self.repo_path = Path(repo_path)

    def run(self, *args: str) -> str:
        """Run a git command and return stdout."""
        command = f"git {' '.join(args)}"
        try:
            result = subprocess.run(
                ['git', '-c', 'core.quotepath=off', *args],
                cwd=self.repo_path,
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace'
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or '').strip()
            raise GitError(f"Git command failed: {command}\n{stderr}", command=command, stderr=stderr)
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH", kind=ErrorKind.GIT_UNAVAILABLE, command=command)

    def verify_repository(self) -> None:
        """Fail fast if the path is not inside a git work tree."""
        if not self.repo_path.is_dir():
            raise GitError(f"Not a git repository: {self.repo_path} does not exist",
                           kind=ErrorKind.NOT_A_REPOSITORY)
        try:
            inside = self.run('rev-parse', '--is-inside-work-tree').strip()
        except GitError as e:
            if e.kind is ErrorKind.GIT_UNAVAILABLE:
                raise
            raise GitError(NOT_A_REPOSITORY_MESSAGE, kind=ErrorKind.NOT_A_REPOSITORY,
                           command=e.command, stderr=e.stderr) from e
        # Prints "false" and exits 0 inside the .git directory itself
        if inside != 'true':
            raise GitError(NOT_A_REPOSITORY_MESSAGE, kind=ErrorKind.NOT_A_REPOSITORY,
                           command='git rev-parse --is-inside-work-tree')

    def resolve_reference(self, ref: str = 'HEAD') -> Optional[str]:
        """Return the commit id for ref, or None when it does not resolve."""
        try:
            output = self.run('rev-parse', '--verify', '--quiet', f'{ref}^{{commit}}')
        except GitError as e:
            if e.kind is not ErrorKind.COMMAND_FAILED:
                raise
            return None
        return output.strip() or None

    def status_short(self) -> str:
        return self.run('status', '--porcelain', '--untracked-files=all')

    def diff(self, cached: bool = False, ref: Optional[str] = None) -> str:
        """Unified diff of the index (cached) or working tree against ref.

        Without ref the working tree is compared with the index.
        """
        args = ['diff', '--no-color', '--no-ext-diff', '--find-renames']
        if cached:
            args.append('--cached')
        if ref:
            args.append(ref)
        return self.run(*args)
