"""HTTP LLM Clients - One JSON POST per generation, shaped per provider."""

import http.client
import json
import socket
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass
from typing import Callable

from cmit.llm.base import (
    LLMClient, LLMError, LLMResponse, MAX_OUTPUT_TOKENS,
    Provider, SYSTEM_PROMPT, TEMPERATURE, request_timeout,
)


@dataclass(frozen=True)
class ProviderSpec:
    """Everything that differs between two HTTP providers."""
    endpoint: str
    default_model: str
    build_url: Callable[[str, str, str], str]
    build_headers: Callable[[str], dict]
    build_body: Callable[[str, str], dict]
    extract_text: Callable[[dict], str]
    tokens_used: Callable[[dict], int] = lambda data: 0


# OpenAI: bearer token, chat-style messages array

def _openai_url(endpoint: str, model: str, api_key: str) -> str:
    return endpoint


def _openai_headers(api_key: str) -> dict:
    return {"Authorization": f"Bearer {api_key}"}


def _openai_body(prompt: str, model: str) -> dict:
    return {
        "model": model,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ],
        "max_tokens": MAX_OUTPUT_TOKENS,
        "temperature": TEMPERATURE,
    }


def _openai_text(data: dict) -> str:
    return data["choices"][0]["message"]["content"]


def _openai_tokens(data: dict) -> int:
    return (data.get("usage") or {}).get("total_tokens", 0)


# Gemini: API key in the query string, content-parts array

def _gemini_url(endpoint: str, model: str, api_key: str) -> str:
    query = urllib.parse.urlencode({"key": api_key})
    return f"{endpoint.format(model=model)}?{query}"


def _gemini_headers(api_key: str) -> dict:
    return {}


def _gemini_body(prompt: str, model: str) -> dict:
    return {
        "systemInstruction": {"parts": [{"text": SYSTEM_PROMPT}]},
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        "generationConfig": {
            "maxOutputTokens": MAX_OUTPUT_TOKENS,
            "temperature": TEMPERATURE,
        },
    }


def _gemini_text(data: dict) -> str:
    return data["candidates"][0]["content"]["parts"][0]["text"]


def _gemini_tokens(data: dict) -> int:
    return (data.get("usageMetadata") or {}).get("totalTokenCount", 0)


HTTP_PROVIDERS: dict[Provider, ProviderSpec] = {
    Provider.OPENAI: ProviderSpec(
        endpoint="https://api.openai.com/v1/chat/completions",
        default_model="gpt-4o-mini",
        build_url=_openai_url,
        build_headers=_openai_headers,
        build_body=_openai_body,
        extract_text=_openai_text,
        tokens_used=_openai_tokens,
    ),
    Provider.GEMINI: ProviderSpec(
        endpoint="https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent",
        default_model="gemini-1.5-flash",
        build_url=_gemini_url,
        build_headers=_gemini_headers,
        build_body=_gemini_body,
        extract_text=_gemini_text,
        tokens_used=_gemini_tokens,
    ),
}


class HttpClient(LLMClient):
    """Client for providers reachable with a single JSON POST."""

    def __init__(self, provider: Provider, api_key: str | None, model: str | None = None):
        if provider not in HTTP_PROVIDERS:
            raise LLMError(f"Provider '{provider.value}' is not an HTTP provider")
        if not api_key:
            raise LLMError(f"No API key configured for {provider.value}")

        self.provider = provider
        self.spec = HTTP_PROVIDERS[provider]
        self.api_key = api_key
        self.model = model or self.spec.default_model
        self.timeout = request_timeout()

    @property
    def name(self) -> str:
        return f"{self.provider.value} ({self.model})"

    def _call_api(self, prompt: str) -> dict:
        """Make a single API call."""
        url = self.spec.build_url(self.spec.endpoint, self.model, self.api_key)
        headers = {"Content-Type": "application/json", **self.spec.build_headers(self.api_key)}
        data = json.dumps(self.spec.build_body(prompt, self.model)).encode('utf-8')

        req = urllib.request.Request(url, data=data, headers=headers, method="POST")
        with urllib.request.urlopen(req, timeout=self.timeout) as response:
            return json.loads(response.read().decode('utf-8'))

    def generate(self, prompt: str) -> LLMResponse:
        label = self.provider.value
        try:
            result = self._call_api(prompt)
        except urllib.error.HTTPError as e:
            raise LLMError(f"{label} error ({e.code}): {e.reason}")
        except urllib.error.URLError as e:
            if isinstance(e.reason, socket.timeout):
                raise LLMError(f"{label} request timed out after {self.timeout}s")
            raise LLMError(f"{label} request failed: {e.reason}")
        except socket.timeout:
            raise LLMError(f"{label} request timed out after {self.timeout}s")
        except json.JSONDecodeError:
            raise LLMError(f"Invalid JSON response from {label}")
        except UnicodeDecodeError:
            raise LLMError(f"Invalid response encoding from {label}")
        except http.client.HTTPException as e:
            raise LLMError(f"Incomplete response from {label}: {e}")
        except OSError as e:
            raise LLMError(f"Connection to {label} lost: {e}")

        try:
            content = self.spec.extract_text(result)
        except (KeyError, IndexError, TypeError):
            raise LLMError(f"Unexpected response shape from {label}")
        if not isinstance(content, str):
            raise LLMError(f"Unexpected response shape from {label}")

        return LLMResponse(
            content=content.strip(),
            model=self.model,
            tokens_used=self.spec.tokens_used(result),
        )
