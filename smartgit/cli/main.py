"""CLI Main Entry Point"""

import sys
import time

from smartgit.analyzer import AnalysisError, ChangeAnalyzer
from smartgit.config import Config
from smartgit.git import GitClient, GitError, WorkflowError, check_for_conflicts, execute_workflow, get_branch_info
from smartgit.output import bold, dim, success, warning, print_error, print_info, print_warning, Spinner, colorize_commit_type

from smartgit.cli.args import parse_args
from smartgit.cli.commands import display_changes, display_workflow_result, show_repository_info
from smartgit.cli.utils import display_options, edit_message, prompt_action


def _resolve_config(args) -> Config:
    """Precedence: CLI args > environment variables > defaults."""
    config = Config.from_env()
    if args.mode:
        config.mode = args.mode
    if args.no_push:
        config.push = False
    return config


def _display_suggestion(message):
    print(bold("\nSuggested Commit Message:"))
    print(f"   {colorize_commit_type(message)}\n")


def _display_branch(git):
    try:
        branch = get_branch_info(git)
    except GitError:
        return
    print(dim(f"Current branch: {branch.current or '(detached HEAD)'}"))
    if branch.remotes:
        name, url = branch.remotes[0]
        print(dim(f"Remote: {name} ({url})"))
    else:
        print_warning("No remote repository configured")


def _print_verbose_stats(args, timings):
    if not args.verbose:
        return
    stats = ', '.join(f"{step}={seconds:.2f}s" for step, seconds in timings.items())
    print(dim(f"  Timings: {stats}"))


def _choose_message(args, analyzer, analysis):
    """Return the message to commit, or None when the user cancels."""
    message = analysis.suggested_message

    if args.choose:
        options = analyzer.alternatives(analysis)
        idx = display_options(options)
        if idx is None:
            return None
        message = options[idx]

    if args.yes:
        return message

    action = prompt_action()
    if action == 'cancel':
        return None
    if action == 'edit':
        edited = edit_message(message)
        if edited:
            return edited
        print_warning("Empty or failed edit, keeping the suggested message")
    return message


def _push_flow(args, config: Config, git: GitClient) -> int:
    """Main analyze-confirm-commit flow.

    Returns:
        int: Exit code
    """
    timings = {}

    print(dim("Checking for conflicts..."))
    t0 = time.time()
    try:
        conflicts = check_for_conflicts(git)
    except GitError as e:
        print_error(str(e))
        return 1
    timings['conflicts'] = time.time() - t0
    if conflicts.has_conflicts:
        print_error(conflicts.message)
        for path in conflicts.files:
            print(dim(f"  {path}"))
        return 1

    label = 'all changes' if config.mode == 'all' else f'{config.mode} changes'
    print(dim(f"Analyzing {label} since last commit...\n"))
    t0 = time.time()
    analyzer = ChangeAnalyzer(git, config)
    try:
        analysis = analyzer.analyze()
    except AnalysisError as e:
        print_error(str(e))
        return 1
    timings['analyze'] = time.time() - t0

    if not analysis.has_changes:
        print_info(analysis.message)
        _print_verbose_stats(args, timings)
        return 0

    print(dim(f"Analysis scope: {analysis.analysis_scope}\n"))
    if analysis.is_first_commit:
        print_info("This will be your first commit\n")

    display_changes(analysis, config.max_files_to_show)
    _display_suggestion(analysis.suggested_message)
    _print_verbose_stats(args, timings)

    if args.dry_run:
        return 0

    _display_branch(git)

    message = _choose_message(args, analyzer, analysis)
    if message is None:
        print(warning("\nOperation cancelled."))
        return 0

    print(bold("\nExecuting Git workflow...\n"))
    try:
        with Spinner():
            result = execute_workflow(message, git, push=config.push, stage_all=config.mode != 'staged')
    except WorkflowError as e:
        if e.result:
            display_workflow_result(e.result, message)
        print_error(str(e))
        return 1

    display_workflow_result(result, message)

    if not result.errors and result.pushed:
        print(bold(success("\nAll done! Your changes have been pushed successfully.\n")))
    elif not result.errors:
        print(bold(success("\nCommit created successfully!\n")))
    return 0


def main() -> int:
    """Main entry point for the CLI."""
    args = parse_args()
    config = _resolve_config(args)
    git = GitClient('.')

    try:
        git.verify_repository()
    except GitError as e:
        print_error(str(e))
        return 1

    if args.info:
        return show_repository_info(git, config)

    print(bold("\nSmartGit - Intelligent Git Automation\n"))
    return _push_flow(args, config, git)


if __name__ == '__main__':
    sys.exit(main())
