"""Git Analyzer - Read staged changes from git and write commits."""

import os
import subprocess

from cmit.git.changes import StagedChange, normalize_changes


class GitError(Exception):
    """Raised when git operations fail."""
    pass


class GitAnalyzer:
    """Reads the index of the current repository and commits to it."""

    def __init__(self, cwd: str | None = None):
        self.cwd = cwd
        self._verify_git_available()
        self._verify_in_repo()
        self.root = self._run_git('rev-parse', '--show-toplevel').strip()

    def _run_git(self, *args: str, input: str | None = None) -> str:
        """Run a git command and return stdout."""
        try:
            result = subprocess.run(
                ['git', *args],
                cwd=self.cwd,
                input=input,
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace'
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or e.stdout or '').strip()
            raise GitError(f"Git command failed: git {' '.join(args)}\n{detail}")
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH")

    def _verify_git_available(self) -> None:
        """Fail fast if git isn't available."""
        try:
            self._run_git('--version')
        except GitError:
            raise GitError("Git is not installed or not in PATH")

    def _verify_in_repo(self) -> None:
        """Fail fast if we're not in a git work tree."""
        try:
            self._run_git('rev-parse', '--is-inside-work-tree')
        except GitError:
            raise GitError("Not inside a git repository")

    def get_staged_changes(self) -> list[StagedChange]:
        """Staged files with absolute paths and change kinds."""
        output = self._run_git('diff', '--staged', '--name-status', '-z')
        return normalize_changes((
            (os.path.join(self.root, path), code)
            for path, code in parse_name_status(output)
        ), root=self.root)

    def get_staged_diff(self) -> str:
        """Diff of the index against HEAD."""
        return self._run_git('diff', '--staged')

    def commit(self, message: str) -> None:
        """Commit the index with the given message, read from stdin."""
        self._run_git('commit', '--cleanup=verbatim', '-F', '-', input=message)


def parse_name_status(output: str) -> list[tuple[str, str]]:
    """Parse 'git diff --name-status -z' into (path, status) pairs.

    Renames and copies carry two paths; the destination is kept.
    """
    fields = output.split('\0')
    pairs = []
    i = 0
    while i < len(fields):
        status = fields[i].strip()
        if not status:
            i += 1
            continue
        if status[0] in 'RC' and i + 2 < len(fields):
            path = fields[i + 2]
            i += 3
        elif i + 1 < len(fields):
            path = fields[i + 1]
            i += 2
        else:
            break
        if path:
            pairs.append((path, status))
    return pairs
