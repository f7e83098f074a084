"""
Tests for git integration: name-status parsing, GitAnalyzer against a real
temporary repository, and the commit dispatcher.

Run with:
    pytest tests/test_git.py -v
"""

import os
import shutil
import subprocess

import pytest

from cmit.git import (
    ChangeKind, GitAnalyzer, GitError, dispatch_commit, parse_name_status,
)

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def git(repo, *args):
    return subprocess.run(
        ["git", *args], cwd=repo, check=True, capture_output=True, text=True
    ).stdout


@pytest.fixture
def repo(tmp_path):
    """An initialised repository with one commit."""
    git(tmp_path, "init", "-q")
    git(tmp_path, "config", "user.email", "dev@example.com")
    git(tmp_path, "config", "user.name", "Dev")
    git(tmp_path, "config", "commit.gpgsign", "false")
    (tmp_path / "README.md").write_text("# demo\n")
    (tmp_path / "old.js").write_text("module.exports = 1;\n")
    git(tmp_path, "add", "-A")
    git(tmp_path, "commit", "-q", "-m", "initial")
    return tmp_path


# ---------------------------------------------------------------------------
# parse_name_status
# ---------------------------------------------------------------------------

class TestParseNameStatus:

    def test_simple_entries(self):
        output = "M\0src/a.py\0A\0docs/b.md\0D\0gone.txt\0"
        assert parse_name_status(output) == [
            ("src/a.py", "M"),
            ("docs/b.md", "A"),
            ("gone.txt", "D"),
        ]

    def test_rename_keeps_destination(self):
        output = "R100\0old/name.js\0new/name.js\0M\0x.js\0"
        assert parse_name_status(output) == [("new/name.js", "R100"), ("x.js", "M")]

    def test_copy_keeps_destination(self):
        assert parse_name_status("C75\0a.js\0b.js\0") == [("b.js", "C75")]

    def test_paths_with_spaces_and_tabs(self):
        assert parse_name_status("A\0my file\twith tab.md\0") == [("my file\twith tab.md", "A")]

    @pytest.mark.parametrize("output", ["", "\0", "M\0"])
    def test_empty_or_truncated(self, output):
        assert parse_name_status(output) == []


# ---------------------------------------------------------------------------
# GitAnalyzer against a real repository
# ---------------------------------------------------------------------------

@requires_git
class TestGitAnalyzer:

    def test_not_a_repository(self, tmp_path):
        with pytest.raises(GitError, match="Not inside a git repository"):
            GitAnalyzer(cwd=str(tmp_path))

    def test_no_staged_changes(self, repo):
        assert GitAnalyzer(cwd=str(repo)).get_staged_changes() == []

    def test_staged_changes_are_absolute_with_kinds(self, repo):
        (repo / "src").mkdir()
        (repo / "src" / "login.js").write_text("export {};\n")
        (repo / "README.md").write_text("# demo\n\nmore\n")
        git(repo, "add", "-A")

        analyzer = GitAnalyzer(cwd=str(repo))
        changes = {os.path.basename(c.path): c for c in analyzer.get_staged_changes()}

        assert changes["login.js"].kind is ChangeKind.ADDED
        assert changes["README.md"].kind is ChangeKind.MODIFIED
        assert all(os.path.isabs(c.path) for c in changes.values())
        assert changes["login.js"].parent == "src"

    def test_repository_inside_tests_folder(self, tmp_path):
        repo_dir = tmp_path / "tests" / "myapp"
        repo_dir.mkdir(parents=True)
        git(repo_dir, "init", "-q")
        (repo_dir / "src").mkdir()
        (repo_dir / "src" / "login.js").write_text("export {};\n")
        git(repo_dir, "add", "-A")

        changes = GitAnalyzer(cwd=str(repo_dir)).get_staged_changes()
        assert [c.name for c in changes] == ["login.js"]
        assert not changes[0].is_test

    def test_rename_and_delete(self, repo):
        git(repo, "mv", "old.js", "new.js")
        git(repo, "rm", "-q", "README.md")

        kinds = {os.path.basename(c.path): c.kind for c in GitAnalyzer(cwd=str(repo)).get_staged_changes()}
        assert kinds == {"new.js": ChangeKind.RENAMED, "README.md": ChangeKind.DELETED}

    def test_staged_diff(self, repo):
        (repo / "README.md").write_text("# demo\nadded line\n")
        git(repo, "add", "README.md")
        diff = GitAnalyzer(cwd=str(repo)).get_staged_diff()
        assert "+added line" in diff

    def test_commit_uses_message_verbatim(self, repo):
        (repo / "notes.txt").write_text("hi\n")
        git(repo, "add", "notes.txt")

        GitAnalyzer(cwd=str(repo)).commit("docs: update notes.txt\n\nUpdated documentation for repo.")

        log = git(repo, "log", "-1", "--format=%B")
        assert log.strip() == "docs: update notes.txt\n\nUpdated documentation for repo."


# ---------------------------------------------------------------------------
# dispatch_commit
# ---------------------------------------------------------------------------

class FakeCommitter:

    def __init__(self, error=None):
        self.error = error
        self.messages = []

    def commit(self, message):
        if self.error is not None:
            raise self.error
        self.messages.append(message)


class TestDispatchCommit:

    def test_success_reports_subject(self):
        vcs = FakeCommitter()
        ok, detail = dispatch_commit(vcs, "feat: add x\n\nAdded x.")
        assert ok is True
        assert detail == "feat: add x"
        assert vcs.messages == ["feat: add x\n\nAdded x."]

    def test_failure_reason_verbatim(self):
        error = GitError("Git command failed: git commit\nnothing to commit")
        ok, detail = dispatch_commit(FakeCommitter(error), "feat: add x")
        assert ok is False
        assert detail == str(error)

    @requires_git
    def test_real_commit_with_nothing_staged(self, repo):
        ok, detail = dispatch_commit(GitAnalyzer(cwd=str(repo)), "chore: nothing")
        assert ok is False
        assert "git commit" in detail
