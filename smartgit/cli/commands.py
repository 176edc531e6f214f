"""CLI Commands"""

from smartgit.analyzer import AnalysisError, AnalysisResult, ChangeAnalyzer, summarize
from smartgit.config import Config
from smartgit.git import ChangeKind, GitClient, GitError, WorkflowResult, get_branch_info
from smartgit.output import (
    ARROW, CHANGE_KIND_STYLES, CHECK, WARN, bold, change_heading, change_line,
    dim, info, success, warning, print_error,
)


def _display_group(kind: ChangeKind, items: list[str], budget: int) -> int:
    """Print up to budget items of one change kind. Returns how many were printed."""
    if not items or budget <= 0:
        return 0
    print(f"   {change_heading(kind)}")
    shown = items[:budget]
    for item in shown:
        print(f"     {change_line(kind, item)}")
    if len(items) > len(shown):
        print(dim(f"     ... and {len(items) - len(shown)} more"))
    return len(shown)


def display_changes(result: AnalysisResult, max_files: int) -> None:
    """Summary line plus per-kind file lists, capped at max_files entries overall."""
    print(bold("Changes Summary:"))
    print(dim(f"   {summarize(result)}\n"))

    groups = {
        ChangeKind.CREATED: result.created,
        ChangeKind.MODIFIED: result.modified,
        ChangeKind.DELETED: result.deleted,
        ChangeKind.RENAMED: [f"{old} {ARROW} {new}" for old, new in result.renamed],
    }
    budget = max_files
    for kind in CHANGE_KIND_STYLES:
        budget -= _display_group(kind, groups[kind], budget)
    print()

def display_workflow_result(result: WorkflowResult, message: str) -> None:
    if result.add and result.add.skipped:
        print(dim(f"  {result.add.message}"))
    elif result.add and result.add.success:
        print(f"{success(CHECK)} {success('Staged all changes')}")

    if result.commit and result.commit.success:
        print(f"{success(CHECK)} {success(f'Committed: {message}')}")
        if result.commit_hash:
            print(dim(f"  Commit hash: {result.commit_hash}"))

    push = result.push
    if push is None:
        return
    if push.success:
        print(f"{success(CHECK)} {success(push.message)}")
    elif push.skipped:
        print(f"{warning(WARN)} {warning(push.message)}")
    else:
        print(f"{warning(WARN)} {warning(push.message)}")
        if push.error:
            print(dim(f"  Error: {push.error}"))
        print(dim("  You can manually push using: git push"))


def show_repository_info(git: GitClient, config: Config) -> int:
    """Branch, remotes and pending changes."""
    print(f"\n{bold('Repository Information')}\n")

    try:
        analysis = ChangeAnalyzer(git, config).analyze()
        branch = get_branch_info(git)
    except (AnalysisError, GitError) as e:
        print_error(f"Failed to get repository info: {e}")
        return 1

    print(bold("Branch:"))
    print(f"  Current: {success(branch.current or '(detached HEAD)')}")
    if branch.tracking:
        print(f"  Tracking: {dim(branch.tracking)}")
    if branch.ahead > 0:
        print(f"  {warning(f'{branch.ahead} commit(s) ahead')}")
    if branch.behind > 0:
        print(f"  {warning(f'{branch.behind} commit(s) behind')}")

    print()
    print(bold("Remotes:"))
    if branch.remotes:
        for name, url in branch.remotes:
            print(f"  {info(name)}: {dim(url)}")
    else:
        print(dim("  No remote repositories configured"))

    print()
    print(bold("Changes:"))
    if analysis.has_changes:
        print(f"  {warning(summarize(analysis))}")
    else:
        print(f"  {success('No uncommitted changes')}")
    print()
    return 0
