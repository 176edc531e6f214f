"""File Categorizer - Label changed paths with a semantic bucket."""

from typing import Callable, Iterable, Optional

from smartgit.config import Config

DOCS = "documentation"
TEST = "test"
CONFIGURATION = "configuration"
STYLE = "style"
SOURCE = "source"

BUCKET_ORDER = (DOCS, TEST, CONFIGURATION, STYLE, SOURCE)

Predicate = Callable[[str], bool]


def substring_predicate(patterns: Iterable[str]) -> Predicate:
    """Case-insensitive 'path contains any pattern' test."""
    lowered = tuple(p.lower() for p in patterns)

    def matches(path: str) -> bool:
        path = path.lower()
        return any(p in path for p in lowered)

    return matches


class FileCategorizer:
    """Ordered (bucket, predicate) table; first match wins, else source.

    Priority is always BUCKET_ORDER, whatever order the configured
    pattern table was written in. Unknown bucket names are ignored.
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()
        patterns = self.config.file_patterns
        self.rules: list[tuple[str, Predicate]] = [
            (bucket, substring_predicate(patterns[bucket]))
            for bucket in BUCKET_ORDER
            if bucket != SOURCE and bucket in patterns
        ]

    def bucket_for(self, path: str) -> str:
        for bucket, predicate in self.rules:
            if predicate(path):
                return bucket
        return SOURCE

    def categorize(self, paths: Iterable[str]) -> dict[str, list[str]]:
        """Every path lands in exactly one bucket. All buckets are present."""
        categories: dict[str, list[str]] = {bucket: [] for bucket in BUCKET_ORDER}
        for path in paths:
            categories[self.bucket_for(path)].append(path)
        return categories
