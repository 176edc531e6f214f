"""Configuration Package

Settings are passed explicitly to the analyzer and suggester. Values come
from built-in defaults, optionally overridden by environment variables:

    SMARTGIT_MODE       all | staged | unstaged
    SMARTGIT_MAX_FILES  files listed per change kind before collapsing
    SMARTGIT_NO_PUSH    commit without pushing when set to 1/true/yes
"""

import os
import sys
from dataclasses import dataclass, field
from typing import Mapping, Optional

from smartgit import COMMIT_TYPE_NAMES

VALID_MODES = ("all", "staged", "unstaged")

BUCKETS = ("documentation", "test", "configuration", "style", "source")


def _default_file_patterns() -> dict[str, list[str]]:
    # Evaluated in insertion order, first match wins
    return {
        "documentation": ['.md', '.txt', 'readme', 'license', 'changelog'],
        "test": ['.test.', '.spec.', '__tests__', 'test/', 'tests/'],
        "configuration": ['.json', '.yml', '.yaml', '.toml', '.config.', 'config/', '.env'],
        "style": ['.css', '.scss', '.sass', '.less', '.style.'],
    }


@dataclass
class Config:
    """Analysis and workflow settings with sensible defaults."""
    mode: str = "all"
    file_patterns: dict[str, list[str]] = field(default_factory=_default_file_patterns)
    fix_tokens: list[str] = field(default_factory=lambda: ['fix', 'bug', 'patch'])
    refactor_tokens: list[str] = field(default_factory=lambda: ['refactor'])
    default_type: str = "chore"
    max_files_to_show: int = 10
    push: bool = True

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults after warning.
        """
        warnings = []
        defaults = Config()

        if self.mode not in VALID_MODES:
            warnings.append(f"Invalid mode '{self.mode}', using '{defaults.mode}'")
            self.mode = defaults.mode

        unknown = [b for b in self.file_patterns if b not in BUCKETS or b == "source"]
        for bucket in unknown:
            warnings.append(f"Unknown file pattern bucket '{bucket}', ignoring")
            del self.file_patterns[bucket]

        if self.default_type not in COMMIT_TYPE_NAMES:
            warnings.append(f"Invalid default_type '{self.default_type}', using '{defaults.default_type}'")
            self.default_type = defaults.default_type

        if not isinstance(self.max_files_to_show, int) or self.max_files_to_show <= 0:
            warnings.append(f"Invalid max_files_to_show '{self.max_files_to_show}', using {defaults.max_files_to_show}")
            self.max_files_to_show = defaults.max_files_to_show

        return warnings

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        config = cls(**filtered)
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'Config':
        """Defaults overridden by SMARTGIT_* environment variables."""
        environ = os.environ if environ is None else environ
        data: dict = {}

        if environ.get('SMARTGIT_MODE'):
            data['mode'] = environ['SMARTGIT_MODE'].strip().lower()

        max_files = environ.get('SMARTGIT_MAX_FILES', '').strip()
        if max_files:
            data['max_files_to_show'] = int(max_files) if max_files.lstrip('-').isdigit() else max_files

        if environ.get('SMARTGIT_NO_PUSH', '').strip().lower() in ('1', 'true', 'yes'):
            data['push'] = False

        return cls.from_dict(data)


__all__ = [
    "Config",
    "VALID_MODES",
    "BUCKETS",
]
