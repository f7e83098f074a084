"""LLM Base Classes and Shared Code"""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


SYSTEM_PROMPT = """You are a senior software engineer who writes precise git commit messages.

Your standards:
- Conventional Commits format: type: description
- Describe only what the change does, never what might come later
- Short, specific, no filler"""

MAX_OUTPUT_TOKENS = 100
TEMPERATURE = 0.7
DEFAULT_TIMEOUT = 15  # seconds


class Provider(Enum):
    """Remote text-generation providers."""
    NONE = "none"
    OPENAI = "openai"
    GEMINI = "gemini"
    CLAUDE = "claude"

    @classmethod
    def parse(cls, value) -> 'Provider':
        """Case-insensitive lookup. Raises ValueError for unknown names."""
        if isinstance(value, cls):
            return value
        if value is None or value == "":
            return cls.NONE
        return cls(str(value).strip().lower())


PROVIDER_NAMES = [p.value for p in Provider]


@dataclass
class LLMResponse:
    """Structured response from any LLM provider."""
    content: str
    model: str = ""
    tokens_used: int = 0


class LLMError(Exception):
    """Raised when LLM operations fail."""
    pass


def request_timeout() -> float:
    """Seconds to wait for a provider, from CMIT_TIMEOUT when set."""
    raw = os.environ.get("CMIT_TIMEOUT", "").strip()
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        raise LLMError(f"Invalid CMIT_TIMEOUT '{raw}': expected a number of seconds")
    if timeout <= 0:
        raise LLMError(f"Invalid CMIT_TIMEOUT '{raw}': must be greater than zero")
    return timeout


class LLMClient(ABC):
    """Abstract base for LLM clients."""

    @abstractmethod
    def generate(self, prompt: str) -> LLMResponse:
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass
