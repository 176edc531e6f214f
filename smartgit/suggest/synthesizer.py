"""Message Synthesizer - Compose the description and the final commit message."""

from collections import Counter
from pathlib import PurePosixPath
import re
from typing import Optional, Sequence

from smartgit.git.changes import ChangeKind, FileChange
from smartgit.suggest.categorizer import CONFIGURATION, DOCS, SOURCE, STYLE, TEST

CAMEL_RE = re.compile(r'([A-Z])')
SEPARATOR_RE = re.compile(r'[-_\s]+')


def format_message(commit_type: str, scope: Optional[str], description: str) -> str:
    """Build `type(scope): description`, omitting an empty scope."""
    prefix = f"{commit_type}({scope})" if scope else commit_type
    return f"{prefix}: {description}"


def infer_feature(paths: Sequence[str]) -> Optional[str]:
    """Most frequent filename word (len > 2) seen more than once."""
    words = []
    for path in paths:
        stem = PurePosixPath(path).name.split('.')[0]
        spaced = CAMEL_RE.sub(r' \1', stem)
        words.extend(w.lower() for w in SEPARATOR_RE.split(spaced) if len(w) > 2)

    if not words:
        return None

    # Counter keeps first-seen order, so ties go to the earliest word
    best, best_count = None, 1
    for word, count in Counter(words).items():
        if count > best_count:
            best, best_count = word, count
    return best


class MessageSynthesizer:

    def describe(self, categorized: dict[str, list[str]],
                 by_kind: dict[ChangeKind, list[str]],
                 files: Sequence[FileChange]) -> str:
        docs = categorized.get(DOCS, [])
        tests = categorized.get(TEST, [])
        configs = categorized.get(CONFIGURATION, [])
        styles = categorized.get(STYLE, [])
        source = categorized.get(SOURCE, [])
        created = by_kind.get(ChangeKind.CREATED, [])
        modified = by_kind.get(ChangeKind.MODIFIED, [])
        deleted = by_kind.get(ChangeKind.DELETED, [])

        # Category-only changes are described by category, even for one file
        if docs and not source and not tests:
            return 'update documentation'

        if tests and not source:
            return 'add tests' if created else 'update tests'

        if configs and not source and not tests:
            return 'update configuration'

        if styles and not source:
            return 'update styles'

        if len(files) == 1:
            only = files[0]
            verb = {
                ChangeKind.CREATED: 'add',
                ChangeKind.DELETED: 'remove',
                ChangeKind.MODIFIED: 'update',
            }.get(only.kind)
            if verb:
                return f"{verb} {only.name}"

        if source:
            if len(created) > len(modified):
                feature = infer_feature(created)
                return f"add {feature}" if feature else 'add new features'
            if modified:
                feature = infer_feature(modified)
                return f"update {feature}" if feature else 'update implementation'
            if deleted:
                return 'remove deprecated code'

        if len(files) <= 3:
            return 'update project files'
        return 'update multiple components'

    def alternatives(self, commit_type: str, scope: Optional[str],
                     description: str, file_count: int) -> list[str]:
        """Primary message first, then looser variants, without duplicates."""
        messages = [
            format_message(commit_type, scope, description),
            format_message(commit_type, None, description),
        ]
        if file_count > 1:
            messages.append(format_message(commit_type, None, f"update {file_count} files"))
        return list(dict.fromkeys(messages))
