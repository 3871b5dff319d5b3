"""Devbox toolchain descriptor (``devbox.json``) generation.

``devbox.json`` is the one descriptor every run writes.  Its package list is
the toolchain's filtered system-package list; free-text dependencies only
reach it through the allow-list in ``resolver.toolchain``.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from ..answers.models import LanguageFamily
from ..resolver.context import ResolvedContext
from ..utils import write_json

DEVBOX_SCHEMA = "https://raw.githubusercontent.com/jetify-com/devbox/main/.schema/devbox.schema.json"


class DevboxGenerator:
    """Builds and writes ``devbox.json``."""

    def build_descriptor(self, ctx: ResolvedContext) -> dict[str, Any]:
        """Return the ``devbox.json`` document for *ctx*."""
        toolchain = ctx.toolchain
        init_hook = [f"echo 'Entered the {ctx.slug} development environment'"]
        if ctx.profile.family == LanguageFamily.PYTHON and not ctx.workspace_mode:
            init_hook.extend([
                "test -d .venv || python3 -m venv .venv",
                ". .venv/bin/activate",
            ])
        if ctx.workspace_mode:
            init_hook.append("test -d node_modules || npm install")

        scripts: dict[str, Any] = toolchain.commands.as_dict()
        if toolchain.assistant is not None:
            scripts[f"install-{toolchain.assistant.slug}"] = (
                f"bash scripts/install-{toolchain.assistant.slug}.sh"
            )

        return {
            "$schema": DEVBOX_SCHEMA,
            "packages": list(toolchain.system_packages),
            "env": {"PORT": str(ctx.port)},
            "shell": {
                "init_hook": init_hook,
                "scripts": scripts,
            },
        }

    async def generate(self, project_root: Path, ctx: ResolvedContext) -> Path:
        """Write ``devbox.json`` into *project_root*."""
        out = project_root / "devbox.json"
        await asyncio.to_thread(write_json, out, self.build_descriptor(ctx))
        return out
