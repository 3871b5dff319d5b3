"""Coding-assistant configuration.

Writes ``.gemini.json`` or ``.claude.json`` (named after the selected
assistant), its install script, and optionally ``docs/ASSISTANT_USAGE.md``.
Nothing is written when no assistant was selected.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from ..resolver.context import ResolvedContext
from ..utils import make_executable, write_json
from .templates import TemplateRenderer, template_vars


def assistant_config(ctx: ResolvedContext) -> dict[str, Any]:
    """The assistant's project settings document."""
    plan = ctx.toolchain.assistant
    variables = template_vars(ctx)
    document: dict[str, Any] = {
        "assistant": plan.label if plan else None,
        "project": {
            "name": ctx.config.repo_name,
            "slug": ctx.slug,
            "description": ctx.config.description,
            "type": ctx.config.project_type_label,
        },
        "language": ctx.profile.label,
        "packageManager": ctx.toolchain.package_manager,
        "testFramework": ctx.toolchain.test_framework,
        "port": ctx.port,
        "commands": variables["assistant_commands"],
    }
    if ctx.workspace_mode:
        document["workspace"] = {
            "tool": "nx",
            "preset": ctx.preset.identity,
            "app": f"apps/{ctx.slug}",
            "docs": ctx.preset.doc_url,
        }
    return document


class AssistantGenerator:
    """Generates assistant config, install script and usage docs."""

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    async def generate(self, project_root: Path, ctx: ResolvedContext) -> list[Path]:
        plan = ctx.toolchain.assistant
        if plan is None:
            return []

        variables = template_vars(ctx)
        config_path = project_root / plan.config_file
        await asyncio.to_thread(write_json, config_path, assistant_config(ctx))
        written = [config_path]

        script = await self.renderer.render_to_file(
            "scripts/install-assistant.sh.j2",
            project_root / "scripts" / f"install-{plan.slug}.sh",
            variables,
        )
        await asyncio.to_thread(make_executable, script)
        written.append(script)

        if ctx.config.include_docs:
            written.append(
                await self.renderer.render_to_file(
                    "repo/ASSISTANT_USAGE.md.j2",
                    project_root / "docs" / "ASSISTANT_USAGE.md",
                    variables,
                )
            )
        return written
