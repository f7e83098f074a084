"""
cmit

Commit message generation from staged git changes, with a rule-based
fallback when no AI provider is configured.
"""

__version__ = "1.0.0"

# Centralized commit types - single source of truth
# Used by: prompts/builder.py, output (colouring), message/classifier.py
COMMIT_TYPES = {
    'feat': 'A new feature or capability',
    'fix': 'A bug fix',
    'docs': 'Documentation only changes',
    'style': 'Formatting, whitespace, no code change',
    'refactor': 'Code restructuring without behavior change',
    'test': 'Adding or updating tests',
    'chore': 'Maintenance tasks, dependencies, tooling',
}

COMMIT_TYPE_NAMES = list(COMMIT_TYPES.keys())

COMMIT_EMOJIS = {
    'feat': '✨',
    'fix': '🐛',
    'docs': '📝',
    'style': '💄',
    'refactor': '♻️',
    'test': '✅',
    'chore': '🔧',
}
