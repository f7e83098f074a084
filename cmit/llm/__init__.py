"""LLM Client Package"""

from typing import Callable

from cmit.llm.base import (
    LLMClient, LLMResponse, LLMError, Provider, PROVIDER_NAMES, SYSTEM_PROMPT,
)
from cmit.llm.claude import ClaudeClient
from cmit.llm.http import HttpClient, HTTP_PROVIDERS, ProviderSpec
from cmit.output import print_warning
from cmit.prompts import PromptBuilder

PROVIDERS = {
    Provider.OPENAI: lambda api_key, model: HttpClient(Provider.OPENAI, api_key, model),
    Provider.GEMINI: lambda api_key, model: HttpClient(Provider.GEMINI, api_key, model),
    Provider.CLAUDE: lambda api_key, model: ClaudeClient(api_key=api_key, model=model),
}


def get_client(provider, api_key: str | None, model: str | None = None) -> LLMClient:
    """Get an LLM client for a provider. Raises LLMError when unavailable."""
    try:
        provider = Provider.parse(provider)
    except ValueError:
        raise LLMError(f"Unsupported provider '{provider}'")

    factory = PROVIDERS.get(provider)
    if factory is None:
        raise LLMError(f"Unsupported provider '{provider.value}'")
    return factory(api_key, model)


def generate(
    provider,
    api_key: str | None,
    diff_text: str,
    file_summaries: list[str],
    model: str | None = None,
    warn: Callable[[str], None] = print_warning,
) -> str | None:
    """Ask a remote provider for a commit message.

    Returns the generated text, or None on any failure. Failures are
    reported once through warn and never raised.
    """
    if not diff_text or not diff_text.strip():
        return None

    try:
        client = get_client(provider, api_key, model)
        prompt = PromptBuilder().build(file_summaries, diff_text)
        response = client.generate(prompt)
    except LLMError as e:
        warn(f"AI generation failed: {e}")
        return None

    if not response.content.strip():
        warn("AI generation failed: empty response")
        return None
    return response.content


__all__ = [
    "LLMClient", "LLMResponse", "LLMError", "Provider", "PROVIDER_NAMES",
    "SYSTEM_PROMPT", "ClaudeClient", "HttpClient", "HTTP_PROVIDERS",
    "ProviderSpec", "PROVIDERS", "get_client", "generate",
]
