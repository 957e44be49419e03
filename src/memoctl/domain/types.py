"""Document types and provider enums."""

from __future__ import annotations

from enum import StrEnum


class DocType(StrEnum):
    """Value of the ``type`` frontmatter field."""

    MEMO = "memo"
    LISTIFY = "listify"
    DEEP_DIVE = "deepDive"
    ARTICLE = "article"
    TOPIC_NOTIFICATION = "topic-notification"


class Provider(StrEnum):
    """External text-generation providers."""

    OPENAI = "openai"
    CLAUDE = "claude"
    GROQ = "groq"
