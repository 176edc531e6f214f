"""Terminal Output Package

Everything smartgit prints goes through here: change-kind and commit-type
coloring, status lines, and the spinner shown while the workflow runs.
Color is disabled for non-terminals and when NO_COLOR is set.
"""

import os
import re
import sys
import threading

from smartgit.git.changes import ChangeKind


class Colors:
    """ANSI escape codes for terminal colors."""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'
    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    BLUE = '\033[34m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'


def _supports_color() -> bool:
    if os.environ.get('NO_COLOR'):
        return False
    if os.environ.get('FORCE_COLOR'):
        return True
    if not getattr(sys.stdout, 'isatty', None) or not sys.stdout.isatty():
        return False
    if sys.platform == 'win32':
        try:
            import ctypes
            handle = ctypes.windll.kernel32.GetStdHandle(-11)
            ctypes.windll.kernel32.SetConsoleMode(handle, 7)
        except (AttributeError, OSError):
            return False
    return True


def _supports_unicode() -> bool:
    if sys.platform != 'win32':
        return True
    try:
        '✓→'.encode(sys.stdout.encoding or 'utf-8')
    except (UnicodeEncodeError, LookupError):
        return False
    return True


COLORS_ENABLED = _supports_color()
UNICODE_ENABLED = _supports_unicode()

CHECK = '✓' if UNICODE_ENABLED else '[OK]'
CROSS = '✗' if UNICODE_ENABLED else '[X]'
ARROW = '→' if UNICODE_ENABLED else '->'
WARN = '⚠' if UNICODE_ENABLED else '[!]'
INFO = 'ℹ' if UNICODE_ENABLED else '[i]'


def paint(text: str, *codes: str) -> str:
    if not COLORS_ENABLED or not codes:
        return text
    return f"{''.join(codes)}{text}{Colors.RESET}"


def success(text: str) -> str:
    return paint(text, Colors.GREEN)


def error(text: str) -> str:
    return paint(text, Colors.RED)


def warning(text: str) -> str:
    return paint(text, Colors.YELLOW)


def info(text: str) -> str:
    return paint(text, Colors.CYAN)


def dim(text: str) -> str:
    return paint(text, Colors.DIM)


def bold(text: str) -> str:
    return paint(text, Colors.BOLD)


def print_error(message: str) -> None:
    print(f"{error(CROSS)} {error(message)}", file=sys.stderr)


def print_warning(message: str) -> None:
    print(f"{warning(WARN)} {warning(message)}")


def print_info(message: str) -> None:
    print(f"{info(INFO)} {info(message)}")


# label, list marker, color per change kind, in display order
CHANGE_KIND_STYLES = {
    ChangeKind.CREATED: ('Created', '+', Colors.GREEN),
    ChangeKind.MODIFIED: ('Modified', '~', Colors.YELLOW),
    ChangeKind.DELETED: ('Deleted', '-', Colors.RED),
    ChangeKind.RENAMED: ('Renamed', ARROW, Colors.BLUE),
}

COMMIT_TYPE_COLORS = {
    'feat': Colors.GREEN,
    'fix': Colors.RED,
    'refactor': Colors.YELLOW,
    'docs': Colors.CYAN,
    'test': Colors.MAGENTA,
    'chore': Colors.DIM,
    'style': Colors.DIM,
}

COMMIT_PREFIX_RE = re.compile(r'^(\w+)(\([^)]*\))?(!?:)')


def change_heading(kind: ChangeKind) -> str:
    label, _, color = CHANGE_KIND_STYLES[kind]
    return paint(f"{label}:", color)


def change_line(kind: ChangeKind, text: str) -> str:
    """One list entry, e.g. `+ src/app.py` in the created color."""
    _, marker, color = CHANGE_KIND_STYLES[kind]
    return paint(f"{marker} {text}", color)


def colorize_commit_type(message: str) -> str:
    """Bold and color the `type(scope):` prefix of the subject line."""
    subject, newline, body = message.partition('\n')
    match = COMMIT_PREFIX_RE.match(subject)
    color = COMMIT_TYPE_COLORS.get(match.group(1)) if match else None
    if not color:
        return message
    prefix = match.group(0)
    return paint(prefix, Colors.BOLD, color) + subject[len(prefix):] + newline + body


class Spinner:
    """Spinner on stdout while git runs. A no-op when stdout is not a terminal."""
    FRAMES = ['⠋', '⠙', '⠹', '⠸', '⠼', '⠴', '⠦', '⠧', '⠇', '⠏'] if UNICODE_ENABLED else ['-', '\\', '|', '/']

    def __init__(self, interval: float = 0.08):
        self.interval = interval
        self._stop = threading.Event()
        self._thread = None

    def _run(self):
        frame = 0
        while not self._stop.is_set():
            print(f"\r\033[K{self.FRAMES[frame % len(self.FRAMES)]} ", end='', flush=True)
            frame += 1
            self._stop.wait(self.interval)

    def __enter__(self):
        if sys.stdout.isatty():
            self._stop.clear()
            self._thread = threading.Thread(target=self._run, daemon=True)
            self._thread.start()
        return self

    def __exit__(self, *exc):
        if self._thread is None:
            return
        self._stop.set()
        self._thread.join()
        self._thread = None
        print('\r\033[K', end='', flush=True)


__all__ = [
    "Colors", "COLORS_ENABLED", "UNICODE_ENABLED",
    "CHECK", "CROSS", "ARROW", "WARN", "INFO",
    "paint", "success", "error", "warning", "info", "dim", "bold",
    "print_error", "print_warning", "print_info",
    "CHANGE_KIND_STYLES", "COMMIT_TYPE_COLORS",
    "change_heading", "change_line", "colorize_commit_type", "Spinner",
]
