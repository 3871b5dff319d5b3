"""Language-native dependency manifests.

One manifest per language family: ``package.json``, ``requirements.txt``,
``pom.xml``, ``Cargo.toml`` or ``<Namespace>.csproj``.  Free-text
dependencies go here unfiltered by the system-package allow-list; structured
formats only take entries that are valid package names.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Optional

from ..answers.models import LanguageFamily
from ..resolver.context import ResolvedContext
from ..resolver.toolchain import manifest_dependencies
from ..utils import write_json
from .templates import TemplateRenderer, template_vars

_TEMPLATES: dict[LanguageFamily, str] = {
    LanguageFamily.PYTHON: "manifests/requirements.txt.j2",
    LanguageFamily.JAVA: "manifests/pom.xml.j2",
    LanguageFamily.RUST: "manifests/Cargo.toml.j2",
    LanguageFamily.DOTNET: "manifests/project.csproj.j2",
}


def manifest_name(ctx: ResolvedContext) -> Optional[str]:
    """File name of the manifest for *ctx*'s family, or ``None`` for Other."""
    family = ctx.profile.family
    if family == LanguageFamily.JAVASCRIPT:
        return "package.json"
    if family == LanguageFamily.PYTHON:
        return "requirements.txt"
    if family == LanguageFamily.JAVA:
        return "pom.xml"
    if family == LanguageFamily.RUST:
        return "Cargo.toml"
    if family == LanguageFamily.DOTNET:
        return f"{ctx.identity.namespace}.csproj"
    return None


def package_json(ctx: ResolvedContext) -> dict[str, Any]:
    """``package.json`` for a plain (non-workspace) JavaScript project."""
    dependencies = {dep: "latest" for dep in manifest_dependencies(ctx.config.dependencies)}
    if ctx.database:
        dependencies.setdefault("pg", "^8.12.0")
    return {
        "name": ctx.slug,
        "version": "0.1.0",
        "description": ctx.config.description,
        "main": "src/index.js",
        "private": True,
        "scripts": {
            "dev": "node --watch src/index.js",
            "start": "node src/index.js",
            "build": "echo \"Nothing to build\"",
            "test": "jest --passWithNoTests",
        },
        "dependencies": dependencies,
        "devDependencies": {"jest": "^29.7.0"},
    }


class ManifestGenerator:
    """Writes the language-native manifest."""

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    async def generate(self, base_dir: Path, ctx: ResolvedContext) -> list[Path]:
        """Write the manifest for *ctx* into *base_dir*.

        Returns an empty list for the Other family, which has no manifest.
        """
        name = manifest_name(ctx)
        if name is None:
            return []
        out = base_dir / name
        if ctx.profile.family == LanguageFamily.JAVASCRIPT:
            await asyncio.to_thread(write_json, out, package_json(ctx))
            return [out]
        await self.renderer.render_to_file(
            _TEMPLATES[ctx.profile.family], out, template_vars(ctx)
        )
        return [out]
