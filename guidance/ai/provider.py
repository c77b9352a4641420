"""
Generative text providers.

A provider turns (prompt, schema hint) into raw text within a caller supplied
timeout, or raises a ProviderError.
"""

import logging
from typing import Optional, Protocol

import openai

from ..config import Settings, get_settings
from ..logic.errors import ProviderError, ProviderMalformedResponseError, ProviderTimeoutError
from .prompt_builder import build_system_prompt

logger = logging.getLogger(__name__)


class GenerativeTextProvider(Protocol):
    def request(self, prompt: str, schema_hint: str, timeout: float) -> str:
        ...


class OpenAIProvider:
    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.api_key = settings.openai_api_key
        self.model = settings.openai_model
        self.max_tokens = settings.ai_max_tokens
        self.temperature = settings.ai_temperature

        self.client = None
        if self.api_key:
            # Retries are handled by the augmenter
            self.client = openai.OpenAI(api_key=self.api_key, max_retries=0)

    @property
    def available(self) -> bool:
        return self.client is not None

    def request(self, prompt: str, schema_hint: str, timeout: float) -> str:
        if not self.client:
            raise ProviderError("OpenAI API key not configured")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": build_system_prompt(schema_hint)},
                    {"role": "user", "content": prompt},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                response_format={"type": "json_object"},
                timeout=timeout,
            )
        except openai.APITimeoutError:
            raise ProviderTimeoutError(timeout)
        except openai.OpenAIError as e:
            raise ProviderError(f"OpenAI request failed: {e}") from e

        if not response.choices:
            raise ProviderMalformedResponseError("Empty choices in provider response")
        content = response.choices[0].message.content
        if not content:
            raise ProviderMalformedResponseError("Empty content in provider response")
        return content


def build_default_provider(settings: Optional[Settings] = None) -> Optional[GenerativeTextProvider]:
    """OpenAI provider when enabled and configured, otherwise None (fallback only)."""
    settings = settings or get_settings()
    if not settings.use_real_ai:
        logger.info("🤖 Generative recommendations disabled (USE_REAL_AI=false)")
        return None
    provider = OpenAIProvider(settings)
    if not provider.available:
        logger.warning("⚠️ OPENAI_API_KEY not set; recommendations will use rule-based fallback")
        return None
    return provider
