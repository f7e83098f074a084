"""Message Models - Options in, candidate messages out."""

from dataclasses import dataclass
from enum import Enum

from cmit.llm.base import Provider


class MessageSource(Enum):
    AI = "ai"
    RULE_BASED = "rule-based"


@dataclass(frozen=True)
class GenerationOptions:
    """Read-only settings for one generation request."""
    use_emojis: bool = True
    max_message_length: int | None = None
    ai_provider: Provider = Provider.NONE
    api_key: str | None = None
    model: str | None = None

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key and self.api_key.strip())

    @property
    def wants_ai(self) -> bool:
        return self.ai_provider is not Provider.NONE and self.has_credential

    @classmethod
    def from_config(cls, config, provider=None, model=None, api_key=None) -> 'GenerationOptions':
        """Snapshot a Config, with already-resolved overrides on top."""
        return cls(
            use_emojis=config.use_emojis,
            max_message_length=config.max_length,
            ai_provider=Provider.parse(provider or config.provider),
            api_key=api_key or config.api_key or None,
            model=model or config.model,
        )


@dataclass(frozen=True)
class CandidateMessage:
    """A synthesized commit message, before the user edits it."""
    subject: str
    body: str
    source: MessageSource

    @property
    def text(self) -> str:
        if not self.body:
            return self.subject
        return f"{self.subject}\n\n{self.body}"

    @classmethod
    def from_text(cls, text: str, source: MessageSource) -> 'CandidateMessage':
        """First line is the subject, everything after it the body."""
        subject, _, rest = text.strip().partition('\n')
        return cls(subject=subject.strip(), body=rest.strip(), source=source)
