"""Starter layout and source files.

Outside workspace mode this produces the minimal single-project layout
(``src/``, ``tests/``, ``docs/``, ``scripts/build.sh``) plus the starter main
file.  In workspace mode the same starter files form the static fallback
scaffold under ``apps/<slug>/``.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from ..answers.models import JavaFramework, LanguageFamily
from ..resolver.context import ResolvedContext
from ..utils import ensure_dir, make_executable, write_text
from .templates import TemplateRenderer, template_vars

LAYOUT_DIRS: tuple[str, ...] = ("src", "tests", "docs", "scripts")


def starter_files(ctx: ResolvedContext) -> list[tuple[str, str]]:
    """``(template, relative output path)`` pairs for the starter sources.

    Java branches on the resolved framework only.
    """
    family = ctx.profile.family
    identity = ctx.identity
    if family == LanguageFamily.JAVASCRIPT:
        return [("source/index.js.j2", "src/index.js")]
    if family == LanguageFamily.PYTHON:
        return [
            ("source/main.py.j2", "src/main.py"),
            ("source/test_main.py.j2", "tests/test_main.py"),
        ]
    if family == LanguageFamily.RUST:
        return [("source/main.rs.j2", "src/main.rs")]
    if family == LanguageFamily.DOTNET:
        return [("source/Program.cs.j2", "Program.cs")]
    if family == LanguageFamily.JAVA:
        java_dir = f"src/main/java/{identity.java_package_path}"
        framework = ctx.profile.framework
        if framework == JavaFramework.SPRING_BOOT:
            return [
                ("source/SpringApplication.java.j2", f"{java_dir}/{identity.java_class}.java"),
                ("source/application.properties.j2", "src/main/resources/application.properties"),
            ]
        if framework == JavaFramework.QUARKUS:
            return [
                ("source/QuarkusResource.java.j2", f"{java_dir}/{identity.class_prefix}Resource.java"),
                ("source/application.properties.j2", "src/main/resources/application.properties"),
            ]
        return [("source/App.java.j2", f"{java_dir}/App.java")]
    return []


class SourceGenerator:
    """Renders the starter layout and sources."""

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    async def create_layout(self, project_root: Path) -> list[Path]:
        """Create the single-project directory layout (create-if-absent)."""
        dirs = [project_root / d for d in LAYOUT_DIRS]
        await asyncio.gather(*[asyncio.to_thread(ensure_dir, d) for d in dirs])
        return dirs

    async def generate_starter(
        self,
        base_dir: Path,
        ctx: ResolvedContext,
        variables: dict[str, Any] | None = None,
    ) -> list[Path]:
        """Render the starter sources into *base_dir*."""
        variables = variables or template_vars(ctx)
        written: list[Path] = []
        for template_name, relative in starter_files(ctx):
            written.append(
                await self.renderer.render_to_file(template_name, base_dir / relative, variables)
            )
        return written

    async def generate(self, project_root: Path, ctx: ResolvedContext) -> list[Path]:
        """Produce the full single-project layout. Used outside workspace mode."""
        variables = template_vars(ctx)
        await self.create_layout(project_root)
        written = await self.generate_starter(project_root, ctx, variables)

        for keep_dir in ("src", "tests", "docs"):
            if not any((project_root / keep_dir).iterdir()):
                keep = project_root / keep_dir / ".gitkeep"
                await asyncio.to_thread(write_text, keep, "")
                written.append(keep)

        build_script = await self.renderer.render_to_file(
            "scripts/build.sh.j2", project_root / "scripts" / "build.sh", variables
        )
        await asyncio.to_thread(make_executable, build_script)
        written.append(build_script)
        return written
