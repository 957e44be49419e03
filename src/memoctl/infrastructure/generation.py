"""Text generation providers — one prompt in, one completion out.

Each provider sends a single user message and returns the completion text.
There is no retry or backoff; any SDK error, empty completion or missing
credential surfaces as :class:`GenerationError` so the calling workflow can
abort before anything is written.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import anthropic
import openai
from anthropic import AsyncAnthropic
from openai import AsyncOpenAI

from memoctl.domain.types import Provider

if TYPE_CHECKING:
    from memoctl.config.models import GenerationConfig

logger = logging.getLogger(__name__)

GROQ_BASE_URL = "https://api.groq.com/openai/v1"


class GenerationError(Exception):
    """A provider call failed or returned nothing usable."""


@runtime_checkable
class TextGenerator(Protocol):
    """Anything that turns a prompt into completion text."""

    async def complete(self, prompt: str) -> str: ...


class OpenAIGenerator:
    """Chat completions over the OpenAI API, or any compatible endpoint (Groq)."""

    def __init__(
        self,
        api_key: str,
        model: str,
        *,
        base_url: str | None = None,
        label: str = "OpenAI",
    ) -> None:
        self.model = model
        self.label = label
        self._client = AsyncOpenAI(api_key=api_key, base_url=base_url)

    async def complete(self, prompt: str) -> str:
        logger.debug("%s completion with %s", self.label, self.model)
        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
            )
        except openai.OpenAIError as exc:
            msg = f"{self.label} API error: {exc}"
            raise GenerationError(msg) from exc

        content = response.choices[0].message.content if response.choices else None
        if not content or not content.strip():
            msg = f"{self.label} returned an empty completion"
            raise GenerationError(msg)
        return content


class ClaudeGenerator:
    """Messages API over the Anthropic SDK."""

    def __init__(self, api_key: str, model: str, *, max_tokens: int = 1024) -> None:
        self.model = model
        self.max_tokens = max_tokens
        self._client = AsyncAnthropic(api_key=api_key)

    async def complete(self, prompt: str) -> str:
        logger.debug("Claude completion with %s", self.model)
        try:
            response = await self._client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.AnthropicError as exc:
            msg = f"Claude API error: {exc}"
            raise GenerationError(msg) from exc

        text = "".join(block.text for block in response.content if block.type == "text")
        if not text.strip():
            msg = "Claude returned an empty completion"
            raise GenerationError(msg)
        return text


def build_generator(config: GenerationConfig) -> TextGenerator:
    """Construct the generator selected by ``[generation] provider``.

    Raises :class:`GenerationError` when the provider's API key is not set.
    """
    api_key = config.api_key()
    if api_key is None:
        msg = f"No API key configured for provider '{config.provider}'"
        raise GenerationError(msg)

    if config.provider == Provider.OPENAI:
        return OpenAIGenerator(api_key, config.model)
    if config.provider == Provider.GROQ:
        return OpenAIGenerator(api_key, config.model, base_url=GROQ_BASE_URL, label="Groq")
    if config.provider == Provider.CLAUDE:
        return ClaudeGenerator(api_key, config.model, max_tokens=config.max_tokens)

    msg = f"Unknown provider: {config.provider!r}"
    raise GenerationError(msg)
