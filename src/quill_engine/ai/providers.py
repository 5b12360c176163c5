"""HTTP generation backends selected by ``AIConfig.provider``."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import httpx

from quill_engine.runtime import telemetry
from quill_engine.runtime.config import AIConfig

from .generation import GenerationError, TextGenerator, chat_messages, compose_prompt

_SNIPPET_LIMIT = 200


class HTTPGenerator:
    """Shared POST/decode plumbing for every backend."""

    label = "AI"
    path = ""

    def __init__(self, config: AIConfig, *, client: Optional[httpx.Client] = None) -> None:
        self.config = config
        self._client = client or httpx.Client(timeout=config.timeout)

    @property
    def endpoint(self) -> str:
        return self.config.base_url.rstrip("/") + self.path

    def headers(self) -> Dict[str, str]:
        return {"Content-Type": "application/json"}

    def payload(self, prompt: str, context: str) -> Dict[str, Any]:  # pragma: no cover - abstract override
        raise NotImplementedError

    def extract(self, data: Mapping[str, Any]) -> str:  # pragma: no cover - abstract override
        raise NotImplementedError

    def generate(self, prompt: str, context: str) -> str:
        with telemetry.span(
            "ai::generate",
            component="ai",
            metadata={"provider": self.config.provider, "model": self.config.model},
        ) as handle:
            data = self._post(self.payload(prompt, context))
            text = self.extract(data).strip()
            handle.add_metadata("chars", len(text))
            return text

    def close(self) -> None:
        self._client.close()

    def _post(self, payload: Dict[str, Any]) -> Mapping[str, Any]:
        # InvalidURL (a malformed base_url) is not an HTTPError subclass.
        try:
            response = self._client.post(self.endpoint, json=payload, headers=self.headers())
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise GenerationError(
                f"failed to call {self.label} API: {exc}", provider=self.config.provider
            ) from exc

        if not response.is_success:
            snippet = (response.text or "").strip()
            if len(snippet) > _SNIPPET_LIMIT:
                snippet = f"{snippet[:_SNIPPET_LIMIT - 3]}..."
            raise GenerationError(
                f"{self.label} API error ({response.status_code}): {snippet}",
                provider=self.config.provider,
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise GenerationError(
                f"{self.label} API returned invalid JSON", provider=self.config.provider
            ) from exc
        if not isinstance(data, Mapping):
            raise GenerationError(
                f"{self.label} API returned an unexpected payload", provider=self.config.provider
            )
        return data


class OllamaGenerator(HTTPGenerator):
    label = "Ollama"
    path = "/api/generate"

    def payload(self, prompt: str, context: str) -> Dict[str, Any]:
        return {
            "model": self.config.model,
            "prompt": compose_prompt(prompt, context),
            "stream": False,
        }

    def extract(self, data: Mapping[str, Any]) -> str:
        response = data.get("response")
        if not isinstance(response, str):
            raise GenerationError("no response from API", provider=self.config.provider)
        return response


class ChatCompletionsGenerator(HTTPGenerator):
    """OpenAI-compatible ``chat/completions`` endpoint."""

    label = "OpenAI"
    path = "/v1/chat/completions"

    def headers(self) -> Dict[str, str]:
        headers = super().headers()
        headers["Authorization"] = f"Bearer {self.config.api_key}"
        return headers

    def payload(self, prompt: str, context: str) -> Dict[str, Any]:
        return {"model": self.config.model, "messages": chat_messages(prompt, context)}

    def extract(self, data: Mapping[str, Any]) -> str:
        choices = data.get("choices") or []
        if not choices:
            raise GenerationError("no response from API", provider=self.config.provider)
        try:
            content = choices[0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise GenerationError(
                "malformed response from API", provider=self.config.provider
            ) from exc
        return content or ""


class OpenRouterGenerator(ChatCompletionsGenerator):
    label = "OpenRouter"
    path = "/api/v1/chat/completions"
    referer = "https://github.com/quill-editor/quill_engine"
    title = "quill Editor"

    def headers(self) -> Dict[str, str]:
        headers = super().headers()
        headers["HTTP-Referer"] = self.referer
        headers["X-Title"] = self.title
        return headers


class DisabledGenerator:
    """Stand-in used while ``ai.enabled`` is false."""

    def generate(self, prompt: str, context: str) -> str:
        del prompt, context
        raise GenerationError("AI is not enabled in config")


_BACKENDS = {
    "ollama": OllamaGenerator,
    "openai": ChatCompletionsGenerator,
    "openrouter": OpenRouterGenerator,
}


def create_generator(
    config: AIConfig, *, client: Optional[httpx.Client] = None
) -> TextGenerator:
    if not config.enabled:
        return DisabledGenerator()
    try:
        backend = _BACKENDS[config.provider]
    except KeyError as exc:
        raise GenerationError(
            f"unsupported AI provider: {config.provider}", provider=config.provider
        ) from exc
    return backend(config, client=client)


__all__ = [
    "ChatCompletionsGenerator",
    "DisabledGenerator",
    "HTTPGenerator",
    "OllamaGenerator",
    "OpenRouterGenerator",
    "create_generator",
]
