"""Rule-Based Classifier - Deterministic messages from paths and change kinds.

Classification looks at file names, extensions and change kinds only.
Checks run in a fixed order and the first match wins:

    test > docs > style > config > all-script (feat/fix) > generic chore
"""

from cmit import COMMIT_EMOJIS
from cmit.git.changes import ChangeSet
from cmit.message.models import CandidateMessage, GenerationOptions, MessageSource


BODY_TEMPLATES = {
    'test': "Updated tests for {module}.",
    'docs': "Updated documentation for {module}.",
    'style': "Updated styles in {module}.",
    'config': "Updated configuration in {module}.",
    'feat': "Added new functionality to {module}.",
    'fix': "Fixed issues in {module}.",
}


def classify_type(change_set: ChangeSet) -> tuple[str, str]:
    """Return (commit_type, category). Category only differs for config chores."""
    if change_set.has_tests:
        return 'test', 'test'
    if change_set.has_docs:
        return 'docs', 'docs'
    if change_set.has_styles:
        return 'style', 'style'
    if change_set.has_config:
        return 'chore', 'config'
    if change_set.all_scripts:
        kind = 'feat' if change_set.all_added else 'fix'
        return kind, kind
    return 'chore', 'generic'


def _subject(commit_type: str, change_set: ChangeSet) -> str:
    if change_set.count == 1:
        verb = 'update' if commit_type == 'docs' else 'modify'
        return f"{commit_type}: {verb} {change_set.changes[0].name}"
    if commit_type == 'feat':
        return f"feat: add {change_set.module} feature"
    if commit_type == 'fix':
        return f"fix: add {change_set.module} fixes"
    verb = 'update' if commit_type == 'docs' else 'modify'
    return f"{commit_type}: {verb} {change_set.module}"


def _body(category: str, change_set: ChangeSet) -> str:
    if category == 'generic':
        if change_set.count == 1:
            return f"Modified {change_set.changes[0].name} in {change_set.module}."
        return f"Modified {change_set.count} files in {change_set.module}."
    return BODY_TEMPLATES[category].format(module=change_set.module)


def classify(change_set: ChangeSet, options: GenerationOptions) -> CandidateMessage:
    """Build a conventional-commit message without any I/O."""
    commit_type, category = classify_type(change_set)
    subject = _subject(commit_type, change_set)
    if options.use_emojis:
        subject = f"{COMMIT_EMOJIS[commit_type]} {subject}"
    return CandidateMessage(
        subject=subject,
        body=_body(category, change_set),
        source=MessageSource.RULE_BASED,
    )
