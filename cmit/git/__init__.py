"""Git Operations Package"""

from cmit.git.analyzer import GitAnalyzer, GitError, parse_name_status
from cmit.git.changes import (
    ChangeKind, ChangeSet, EmptyChangeSetError, StagedChange, normalize_changes,
)
from cmit.git.dispatcher import dispatch_commit

__all__ = [
    "GitAnalyzer",
    "GitError",
    "parse_name_status",
    "ChangeKind",
    "ChangeSet",
    "EmptyChangeSetError",
    "StagedChange",
    "normalize_changes",
    "dispatch_commit",
]
