"""
SmartGit

Analyze pending git changes, suggest a commit message, then stage, commit and push.
"""

__version__ = "2.0.0"

# Commit types the suggester can produce
COMMIT_TYPES = {
    'feat': 'A new feature',
    'fix': 'A bug fix',
    'refactor': 'Code refactoring',
    'docs': 'Documentation changes',
    'test': 'Test files',
    'style': 'Code style changes',
    'chore': 'Build process or auxiliary tool changes',
}

COMMIT_TYPE_NAMES = list(COMMIT_TYPES.keys())
