"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, memoctl.toml only contains overrides.
A fresh vault needs nothing at all; an API key is only needed to generate.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, SecretStr

from memoctl.domain.timestamps import DEFAULT_TIMESTAMP_FORMAT
from memoctl.domain.types import Provider

# --- memoctl.toml sections ---


class VaultConfig(BaseModel):
    """[vault] section."""

    model_config = {"frozen": True}

    name: str = "my-vault"
    notification_folder: str = "Archives/Notifications"
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT


class TopicsConfig(BaseModel):
    """[topics] section."""

    model_config = {"frozen": True}

    folder: str = "Topics"
    fallback_label: str = "Deep Dive"


class GenerationConfig(BaseModel):
    """[generation] section.

    Keys are kept as secrets so they never show up in reprs or logs.
    """

    model_config = {"frozen": True}

    provider: Provider = Provider.OPENAI
    model: str = "gpt-4o-mini"
    openai_api_key: SecretStr | None = None
    claude_api_key: SecretStr | None = None
    groq_api_key: SecretStr | None = None
    max_tokens: int = Field(default=1024, gt=0)

    def api_key(self) -> str | None:
        """Credential for the selected provider, if configured."""
        secret = {
            Provider.OPENAI: self.openai_api_key,
            Provider.CLAUDE: self.claude_api_key,
            Provider.GROQ: self.groq_api_key,
        }.get(self.provider)
        if secret is None:
            return None
        return secret.get_secret_value() or None


class QueryConfig(BaseModel):
    """[query] section."""

    model_config = {"frozen": True}

    preview_lines: int = Field(default=3, ge=0)


class MemoConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    vault: VaultConfig = Field(default_factory=VaultConfig)
    topics: TopicsConfig = Field(default_factory=TopicsConfig)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    query: QueryConfig = Field(default_factory=QueryConfig)
