"""Message Synthesis Pipeline - Try the remote provider, fall back to rules."""

import re
from typing import Callable

from cmit import COMMIT_TYPE_NAMES
from cmit.git.analyzer import GitError
from cmit.git.changes import ChangeSet
from cmit.llm import generate
from cmit.message.classifier import classify
from cmit.message.models import CandidateMessage, GenerationOptions, MessageSource
from cmit.output import print_warning
from cmit.prompts import summarize_changes

TYPES_PATTERN = '|'.join(COMMIT_TYPE_NAMES)

# Diff output or code fences that models sometimes echo after the message
JUNK_PATTERNS = re.compile(r'^(diff --git |@@\s|[+-]{3}\s[ab]/|index [0-9a-f]|```)')


def clean_commit_message(text: str) -> str:
    """Clean up LLM response to extract just the commit message."""
    lines = text.strip().split('\n')
    start_idx = 0
    for i, line in enumerate(lines):
        if re.match(rf'^[`\s]*({TYPES_PATTERN})[\(!:]', line):
            start_idx = i
            break

    end_idx = len(lines)
    for i in range(start_idx + 1, len(lines)):
        if JUNK_PATTERNS.match(lines[i]):
            end_idx = i
            break

    cleaned = '\n'.join(lines[start_idx:end_idx]).rstrip()
    lines = cleaned.split('\n')
    if lines:
        lines[0] = lines[0].strip('`').strip()

    return '\n'.join(lines)


def synthesize(
    change_set: ChangeSet,
    options: GenerationOptions,
    vcs=None,
    generator: Callable[..., str | None] = generate,
    warn: Callable[[str], None] = print_warning,
) -> CandidateMessage:
    """Produce a candidate message. Always succeeds.

    The remote provider is only tried when one is configured, a credential
    is present and a diff can be read from vcs. Every other path ends in
    the rule-based classifier.
    """
    if options.wants_ai:
        candidate = _attempt_remote(change_set, options, vcs, generator, warn)
        if candidate is not None:
            return candidate
    return classify(change_set, options)


def _attempt_remote(change_set, options, vcs, generator, warn) -> CandidateMessage | None:
    if vcs is None:
        warn("No repository available to read the staged diff, using rule-based message")
        return None
    try:
        diff_text = vcs.get_staged_diff()
    except (GitError, OSError) as e:
        warn(f"Could not read staged diff, using rule-based message: {e}")
        return None

    if not diff_text or not diff_text.strip():
        return None

    text = generator(
        options.ai_provider,
        options.api_key,
        diff_text,
        summarize_changes(change_set, getattr(vcs, 'root', None)),
        model=options.model,
        warn=warn,
    )
    if not text:
        return None

    candidate = CandidateMessage.from_text(clean_commit_message(text), MessageSource.AI)
    if not candidate.subject:
        warn("AI generation returned no subject line, using rule-based message")
        return None
    return candidate
