"""Jinja2 prompt templates, overridable per vault."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import (
    BaseLoader,
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    StrictUndefined,
)

OVERRIDE_DIR = Path(".memoctl") / "templates"


def build_template_environment(group: str, *, vault_root: Path | None = None) -> Environment:
    """Environment that looks in the vault first, then in the packaged defaults.

    Vault overrides live in ``.memoctl/templates/<group>/`` or directly in
    ``.memoctl/templates/``.
    """
    loaders: list[BaseLoader] = []
    if vault_root is not None:
        override_root = vault_root / OVERRIDE_DIR
        loaders.append(FileSystemLoader([str(override_root / group), str(override_root)]))
    loaders.append(PackageLoader("memoctl", f"templates/{group}"))
    return Environment(
        loader=ChoiceLoader(loaders),
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )


def render_prompt(name: str, *, vault_root: Path | None = None, **context: Any) -> str:
    """Render ``templates/prompts/<name>.md.j2`` with *context*."""
    env = build_template_environment("prompts", vault_root=vault_root)
    return env.get_template(f"{name}.md.j2").render(**context).strip()
