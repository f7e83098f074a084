"""Commit Dispatcher - Hand the final message to git."""

from cmit.git.analyzer import GitError


def dispatch_commit(vcs, text: str) -> tuple[bool, str]:
    """Commit text. Returns (True, subject) or (False, failure_reason)."""
    try:
        vcs.commit(text)
    except GitError as e:
        return False, str(e)
    subject = text.strip().split('\n')[0]
    return True, subject
