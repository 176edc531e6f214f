"""CLI Argument Parsing"""

import argparse
from typing import Optional, Sequence

import argcomplete

from smartgit import __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='smartgit',
        description='Analyze changes, suggest a commit message, then commit and push',
        epilog='Example: smartgit --staged (commit only what is staged)'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    # Analysis mode
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument('--staged', dest='mode', action='store_const', const='staged', help='Analyze only staged changes')
    mode.add_argument('--unstaged', dest='mode', action='store_const', const='unstaged', help='Analyze only unstaged changes')
    mode.add_argument('--all', dest='mode', action='store_const', const='all', help='Analyze all changes since last commit (default)')

    # Commands
    parser.add_argument('--info', action='store_true', help='Show branch, remotes and pending changes')
    parser.add_argument('--dry-run', action='store_true', help='Show the analysis and suggestion without committing')

    # Workflow options
    parser.add_argument('-c', '--choose', action='store_true', help='Pick from alternative messages')
    parser.add_argument('-y', '--yes', action='store_true', help='Use the suggested message without asking')
    parser.add_argument('--no-push', action='store_true', help='Commit without pushing')

    # Output options
    parser.add_argument('--verbose', action='store_true', help='Show step timings')

    argcomplete.autocomplete(parser)
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)
