"""Prompt Builder - Construct LLM prompts for commit message generation."""

from dataclasses import dataclass

from cmit import COMMIT_TYPES
from cmit.git.changes import ChangeSet


@dataclass
class PromptConfig:
    """Knobs that shape the prompt."""
    subject_length: int = 50
    max_diff_chars: int | None = None  # None sends the whole diff


class PromptBuilder:
    """Constructs the fixed commit-message prompt."""

    def build(self, file_summaries: list[str], diff_text: str, config: PromptConfig | None = None) -> str:
        config = config or PromptConfig()
        sections = [
            self._build_role_section(),
            self._build_format_section(config),
            self._build_changes_section(file_summaries, diff_text, config),
            self._build_final_instructions(),
        ]
        return "\n\n".join(filter(None, sections))

    def _build_role_section(self) -> str:
        return "Write a git commit message for the staged changes below."

    def _build_format_section(self, config: PromptConfig) -> str:
        types_list = "\n".join(f"  - {t}: {desc}" for t, desc in COMMIT_TYPES.items())
        return f"""<format>
Use the Conventional Commits format:

type: description (about {config.subject_length} characters)

Then a blank line and a body of 1-2 sentences describing only what changed.
Do not mention future work, possible follow-ups or anything not in the diff.

Choose the most appropriate type:
{types_list}
</format>"""

    def _build_changes_section(self, file_summaries: list[str], diff_text: str, config: PromptConfig) -> str:
        diff, truncated = self._truncate(diff_text, config.max_diff_chars)
        parts = [
            "<changes>",
            f"FILES CHANGED: {len(file_summaries)}",
            *file_summaries,
            "",
            "DIFF:",
            diff,
        ]
        if truncated:
            parts.append("\n[Note: Diff was truncated due to size. Use the file list above for scope.]")
        parts.append("</changes>")
        return "\n".join(parts)

    def _truncate(self, diff_text: str, limit: int | None) -> tuple[str, bool]:
        if not limit or len(diff_text) <= limit:
            return diff_text, False
        cut = diff_text.rfind('\n', 0, limit)
        return diff_text[:cut if cut > 0 else limit], True

    def _build_final_instructions(self) -> str:
        return """<instructions>
- Start directly with the type: description line
- No markdown formatting (no ```, no bold)
- No preamble like "Here's a commit message:"
- Just the raw commit message, ready to use
</instructions>"""


def summarize_changes(change_set: ChangeSet, root: str | None = None) -> list[str]:
    """One 'kind: path' line per change, relative to root when given."""
    lines = []
    for change in change_set:
        path = change.path
        if root and path.startswith(root.rstrip('/\\') + '/'):
            path = path[len(root.rstrip('/\\')) + 1:]
        lines.append(f"{change.kind.value}: {path}")
    return lines
