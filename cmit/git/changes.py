"""Staged Changes - Normalize raw git status into a uniform change set."""

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePath
from typing import Iterable


TEST_DIRECTORIES = {'test', 'tests', '__tests__'}
TEST_MARKERS = ('.test.', '.spec.')
DOCS_EXTENSIONS = {'.md', '.txt', '.rst'}
STYLE_EXTENSIONS = {'.css', '.scss', '.less'}
CONFIG_MARKERS = {'.json', '.yml', '.yaml', '.eslintrc', '.prettierrc'}
SCRIPT_EXTENSIONS = {'.js', '.jsx', '.ts', '.tsx'}

# Label used when changes span more than one parent directory
FALLBACK_MODULE = "files"


class ChangeKind(Enum):
    """What happened to a file in the index."""
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"
    COPIED = "copied"
    UNKNOWN = "unknown"

    @classmethod
    def from_code(cls, raw) -> 'ChangeKind':
        """Map a git status letter (A, M, R100, ...) or a word to a kind."""
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str) or not raw.strip():
            return cls.UNKNOWN

        code = raw.strip()
        if code.lower() in _WORDS:
            return _WORDS[code.lower()]
        if _STATUS_RE.match(code):
            return _LETTERS[code[0].upper()]
        return cls.UNKNOWN


_LETTERS = {
    'A': ChangeKind.ADDED,
    'M': ChangeKind.MODIFIED,
    'T': ChangeKind.MODIFIED,
    'D': ChangeKind.DELETED,
    'R': ChangeKind.RENAMED,
    'C': ChangeKind.COPIED,
}

_WORDS = {kind.value: kind for kind in ChangeKind}

# Status letter with an optional similarity score, e.g. "R100"
_STATUS_RE = re.compile(r"^[AMTDRC]\d*$", re.IGNORECASE)


@dataclass(frozen=True)
class StagedChange:
    """One staged file. root, when known, is the repository the path lives in."""
    path: str
    kind: ChangeKind = ChangeKind.UNKNOWN
    root: str | None = field(default=None, compare=False, repr=False)

    @property
    def name(self) -> str:
        return PurePath(self.path).name

    @property
    def extension(self) -> str:
        """Lowercased suffix. Dotfiles like '.eslintrc' are their own extension."""
        name = self.name.lower()
        if name.startswith('.') and name.count('.') == 1:
            return name
        return PurePath(name).suffix

    @property
    def parent(self) -> str:
        return PurePath(self.path).parent.name

    @property
    def directories(self) -> tuple[str, ...]:
        """Directory segments of the path, below root when the path is inside it."""
        path = PurePath(self.path)
        if self.root:
            try:
                path = path.relative_to(self.root)
            except ValueError:
                pass
        return path.parts[:-1]

    @property
    def is_test(self) -> bool:
        if any(part in TEST_DIRECTORIES for part in self.directories):
            return True
        return any(marker in self.name for marker in TEST_MARKERS)


class EmptyChangeSetError(ValueError):
    """Raised when a change set is built from nothing."""
    pass


class ChangeSet:
    """Ordered, non-empty collection of staged changes for one request."""

    def __init__(self, changes: Iterable[StagedChange]):
        self.changes = tuple(changes)
        if not self.changes:
            raise EmptyChangeSetError("No staged changes to describe")

        self.extensions = frozenset(c.extension for c in self.changes)
        parents = {c.parent for c in self.changes}
        self.module = parents.pop() if len(parents) == 1 else FALLBACK_MODULE

        self.has_tests = any(c.is_test for c in self.changes)
        self.has_docs = bool(self.extensions & DOCS_EXTENSIONS)
        self.has_styles = bool(self.extensions & STYLE_EXTENSIONS)
        self.has_config = bool(self.extensions & CONFIG_MARKERS) or any(
            c.name.lower() in CONFIG_MARKERS for c in self.changes
        )
        self.all_scripts = all(c.extension in SCRIPT_EXTENSIONS for c in self.changes)
        self.all_added = all(c.kind is ChangeKind.ADDED for c in self.changes)

    @property
    def count(self) -> int:
        return len(self.changes)

    def __len__(self) -> int:
        return len(self.changes)

    def __iter__(self):
        return iter(self.changes)

    def __repr__(self) -> str:
        return f"ChangeSet({len(self.changes)} files, module={self.module!r})"


def normalize_changes(raw: Iterable[tuple[str, object]], root: str | None = None) -> list[StagedChange]:
    """Turn (path, status code) pairs into StagedChange records."""
    return [StagedChange(path=path, kind=ChangeKind.from_code(code), root=root) for path, code in raw]
