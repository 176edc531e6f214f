"""CLI Utility Functions"""

import os
import subprocess
import sys
import tempfile

from smartgit.output import bold, dim, info, colorize_commit_type


def clean_commit_message(text: str) -> str:
    """Drop git-style comment lines and surrounding blank lines from an edited message."""
    lines = [line.rstrip() for line in text.split('\n') if not line.startswith('#')]
    return '\n'.join(lines).strip()


def display_options(options: list[str]) -> int | None:
    """Show options and get selection."""
    print()
    for i, opt in enumerate(options, 1):
        print(f"{info(f'[{i}]')} {bold(colorize_commit_type(opt))}")

    print()
    while True:
        try:
            choice = input(f"Select [1-{len(options)}] or (q)uit: ").strip().lower()
            if choice == 'q':
                return None
            idx = int(choice) - 1
            if 0 <= idx < len(options):
                return idx
        except ValueError:
            pass
        except (KeyboardInterrupt, EOFError):
            return None
        print(f"Enter 1-{len(options)} or q")


def edit_message(message: str) -> str | None:
    """Open message in user's editor. Returns edited text or None on failure."""
    editor = os.environ.get('VISUAL') or os.environ.get('EDITOR')
    if not editor:
        editor = 'notepad' if sys.platform == 'win32' else 'vi'

    tmp = tempfile.NamedTemporaryFile(mode='w', suffix='.gitcommit', delete=False, encoding='utf-8')
    try:
        tmp.write(message)
        tmp.close()
        subprocess.run([editor, tmp.name], check=True)
        with open(tmp.name, 'r', encoding='utf-8') as f:
            edited = clean_commit_message(f.read())
        return edited if edited else None
    except (subprocess.CalledProcessError, OSError):
        return None
    finally:
        try:
            os.unlink(tmp.name)
        except OSError as e:
            # Log to stderr so temp files don't silently accumulate
            print(f"Warning: Could not delete temp file {tmp.name}: {e}", file=sys.stderr)


def prompt_action() -> str:
    """Ask whether to use, edit or cancel. Returns 'use', 'edit' or 'cancel'."""
    try:
        action = input(f"\n{dim('(u)se and push, (e)dit, or (c)ancel [u]: ')}").strip().lower()
    except (KeyboardInterrupt, EOFError):
        return 'cancel'

    if action in ('', 'u', 'use', 'y', 'yes'):
        return 'use'
    if action in ('e', 'edit'):
        return 'edit'
    return 'cancel'
