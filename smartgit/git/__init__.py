"""Git Operations Package"""

from smartgit.git.client import GitClient, GitError, ErrorKind, EMPTY_TREE
from smartgit.git.changes import ChangeKind, FileChange, paths_by_kind
from smartgit.git.status import StatusEntry, StatusListing, parse_status
from smartgit.git.diff_parser import DiffRecord, parse_diff
from smartgit.git.runner import (
    BranchInfo, ConflictCheck, StepResult, WorkflowError, WorkflowResult,
    check_for_conflicts, execute_workflow, get_branch_info,
)

__all__ = [
    "GitClient",
    "GitError",
    "ErrorKind",
    "EMPTY_TREE",
    "ChangeKind",
    "FileChange",
    "paths_by_kind",
    "StatusEntry",
    "StatusListing",
    "parse_status",
    "DiffRecord",
    "parse_diff",
    "BranchInfo",
    "ConflictCheck",
    "StepResult",
    "WorkflowError",
    "WorkflowResult",
    "check_for_conflicts",
    "execute_workflow",
    "get_branch_info",
]
