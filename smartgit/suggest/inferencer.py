"""Type & Scope Inferencer - Pick a commit type and scope from categorized changes."""

from pathlib import PurePosixPath
from typing import Optional, Sequence

from smartgit.config import Config
from smartgit.git.changes import ChangeKind
from smartgit.suggest.categorizer import CONFIGURATION, DOCS, SOURCE, STYLE, TEST

# Scope used when every file shares one bucket
BUCKET_SCOPES = {
    DOCS: 'docs',
    TEST: 'tests',
    CONFIGURATION: 'config',
}


def common_directory(paths: Sequence[str]) -> Optional[str]:
    """Longest shared directory prefix of paths, or None."""
    if not paths:
        return None
    split = [p.split('/') for p in paths]
    if len(split) == 1:
        return '/'.join(split[0][:-1]) or '.'

    first = split[0]
    common = []
    for i, part in enumerate(first[:-1]):
        if all(len(p) > i + 1 and p[i] == part for p in split):
            common.append(part)
        else:
            break
    return '/'.join(common) if common else None


class TypeInferencer:
    """Derives (type, scope) from bucketed paths and per-kind path lists."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()

    def infer_type(self, categorized: dict[str, list[str]],
                   by_kind: dict[ChangeKind, list[str]]) -> str:
        docs = categorized.get(DOCS, [])
        tests = categorized.get(TEST, [])
        configs = categorized.get(CONFIGURATION, [])
        styles = categorized.get(STYLE, [])
        source = categorized.get(SOURCE, [])
        created = by_kind.get(ChangeKind.CREATED, [])
        modified = by_kind.get(ChangeKind.MODIFIED, [])

        if docs and not source and not tests:
            return 'docs'
        if tests and not source:
            return 'test'
        if configs and not source and not tests and not docs:
            return 'chore'
        if styles and not source:
            return 'style'
        if created and not modified:
            return 'feat'

        haystack = ' '.join(source + tests).lower()
        if any(token in haystack for token in self.config.fix_tokens):
            return 'fix'
        if any(token in haystack for token in self.config.refactor_tokens):
            return 'refactor'

        if source:
            if len(created) > len(modified):
                return 'feat'
            # TODO: decide between fix and feat for modification-heavy changes
            return 'feat'

        return self.config.default_type

    def infer_scope(self, paths: Sequence[str], categorized: dict[str, list[str]]) -> Optional[str]:
        if not paths:
            return None

        if len(paths) == 1:
            stem = PurePosixPath(paths[0]).name.split('.')[0]
            return stem.lower() or None

        common = common_directory(paths)
        if common and common != '.':
            parts = [p for p in common.split('/') if p]
            if parts:
                return parts[-1]

        for bucket, scope in BUCKET_SCOPES.items():
            if len(categorized.get(bucket, [])) == len(paths):
                return scope

        return None

    def infer(self, paths: Sequence[str], categorized: dict[str, list[str]],
              by_kind: dict[ChangeKind, list[str]]) -> tuple[str, Optional[str]]:
        return self.infer_type(categorized, by_kind), self.infer_scope(paths, categorized)
