"""Tests for generator construction."""

from __future__ import annotations

import pytest

from memoctl.config.models import GenerationConfig
from memoctl.infrastructure.generation import (
    GROQ_BASE_URL,
    ClaudeGenerator,
    GenerationError,
    OpenAIGenerator,
    TextGenerator,
    build_generator,
)


class TestBuildGenerator:
    def test_missing_key(self) -> None:
        with pytest.raises(GenerationError, match="No API key"):
            build_generator(GenerationConfig())

    def test_blank_key_counts_as_missing(self) -> None:
        with pytest.raises(GenerationError):
            build_generator(GenerationConfig(openai_api_key=""))

    def test_key_for_other_provider_ignored(self) -> None:
        config = GenerationConfig(provider="claude", openai_api_key="sk-test")
        with pytest.raises(GenerationError, match="claude"):
            build_generator(config)

    def test_openai(self) -> None:
        generator = build_generator(GenerationConfig(openai_api_key="sk-test"))
        assert isinstance(generator, OpenAIGenerator)
        assert generator.label == "OpenAI"
        assert isinstance(generator, TextGenerator)

    def test_groq_uses_openai_compatible_endpoint(self) -> None:
        config = GenerationConfig(provider="groq", groq_api_key="gsk-test", model="llama3")
        generator = build_generator(config)
        assert isinstance(generator, OpenAIGenerator)
        assert generator.label == "Groq"
        assert str(generator._client.base_url).rstrip("/") == GROQ_BASE_URL

    def test_claude(self) -> None:
        config = GenerationConfig(
            provider="claude", claude_api_key="sk-ant-test", model="claude-x", max_tokens=256
        )
        generator = build_generator(config)
        assert isinstance(generator, ClaudeGenerator)
        assert generator.max_tokens == 256

    def test_key_not_in_repr(self) -> None:
        config = GenerationConfig(openai_api_key="sk-secret")
        assert "sk-secret" not in repr(config)
