"""Chat-completion clients for the supported LLM providers.

Every provider sends a single user message and returns the raw reply text.
Failures are surfaced once: SDK-level retries are disabled and upstream
status errors are re-raised as :class:`ProviderError`.
"""

import logging
from functools import lru_cache
from typing import Any

import anthropic
import google.generativeai as genai
import openai
from google.api_core import exceptions as google_exceptions

from backend.config import Settings

logger = logging.getLogger(__name__)


class ProviderConfigError(Exception):
    """The provider cannot be used because its API key is missing or malformed."""


class ProviderError(Exception):
    """The upstream API answered with an error status or could not be reached."""

    def __init__(self, status_code: int, message: str | None = None):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message or 'Unknown error'}")


def _error_message(body: Any) -> str | None:
    # OpenAI hands back the inner error object, Anthropic the whole envelope
    if not isinstance(body, dict):
        return None
    if isinstance(body.get("message"), str):
        return body["message"]
    error = body.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]
    return None


class LLMProvider:
    name = "LLM"

    def __init__(self, settings: Settings):
        self.model = settings.model
        self.max_tokens = settings.max_tokens
        self.timeout = settings.timeout

    def complete(self, prompt: str) -> str:
        logger.info(
            "Making %s API request: model=%s max_tokens=%s message_length=%d",
            self.name, self.model, self.max_tokens, len(prompt),
        )
        text = self._complete(prompt)
        logger.info("%s API request succeeded, reply length=%d", self.name, len(text))
        return text

    def _complete(self, prompt: str) -> str:
        raise NotImplementedError


class OpenAIProvider(LLMProvider):
    name = "OpenAI"

    def __init__(self, settings: Settings):
        super().__init__(settings)
        self._client = openai.OpenAI(
            api_key=settings.api_key,
            timeout=settings.timeout,
            max_retries=0,
        )

    def _complete(self, prompt: str) -> str:
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except openai.APIStatusError as e:
            logger.error("OpenAI API error: status=%s body=%s", e.status_code, e.body)
            raise ProviderError(e.status_code, _error_message(e.body)) from e
        except openai.APITimeoutError as e:
            raise ProviderError(504, "OpenAI API request timed out") from e
        except openai.APIConnectionError as e:
            raise ProviderError(502, f"Could not reach OpenAI API: {e}") from e

        return response.choices[0].message.content or ""


class AnthropicProvider(LLMProvider):
    name = "Anthropic"

    def __init__(self, settings: Settings):
        super().__init__(settings)
        self._client = anthropic.Anthropic(
            api_key=settings.api_key,
            timeout=settings.timeout,
            max_retries=0,
        )

    def _complete(self, prompt: str) -> str:
        try:
            response = self._client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIStatusError as e:
            logger.error("Anthropic API error: status=%s body=%s", e.status_code, e.body)
            raise ProviderError(e.status_code, _error_message(e.body)) from e
        except anthropic.APITimeoutError as e:
            raise ProviderError(504, "Anthropic API request timed out") from e
        except anthropic.APIConnectionError as e:
            raise ProviderError(502, f"Could not reach Anthropic API: {e}") from e

        return "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )


class GeminiProvider(LLMProvider):
    name = "Gemini"

    def __init__(self, settings: Settings):
        super().__init__(settings)
        genai.configure(api_key=settings.api_key)
        self._model = genai.GenerativeModel(settings.model)

    def _complete(self, prompt: str) -> str:
        try:
            response = self._model.generate_content(
                prompt,
                generation_config={"max_output_tokens": self.max_tokens},
                request_options={"timeout": self.timeout},
            )
        except google_exceptions.GoogleAPICallError as e:
            logger.error("Gemini API error: code=%s message=%s", e.code, e.message)
            raise ProviderError(int(e.code or 502), e.message) from e

        return response.text


PROVIDERS = {
    "openai": OpenAIProvider,
    "anthropic": AnthropicProvider,
    "gemini": GeminiProvider,
}


def check_api_key(settings: Settings) -> None:
    """Raise :class:`ProviderConfigError` unless the configured key looks usable."""

    if not settings.api_key:
        raise ProviderConfigError(f"{settings.api_key_env} not configured")
    if settings.provider == "openai" and not settings.api_key.startswith("sk-"):
        raise ProviderConfigError("Invalid OPENAI_API_KEY format. Should start with sk-")


@lru_cache(maxsize=8)
def get_provider(provider: str, api_key: str, model: str, max_tokens: int, timeout: float) -> LLMProvider:
    """Return the shared provider instance for one configuration."""
    settings = Settings(
        provider=provider,
        api_key=api_key,
        model=model,
        max_tokens=max_tokens,
        timeout=timeout,
    )
    return PROVIDERS[provider](settings)


def build_provider(settings: Settings) -> LLMProvider:
    check_api_key(settings)
    return get_provider(
        settings.provider,
        settings.api_key,
        settings.model,
        settings.max_tokens,
        settings.timeout,
    )
