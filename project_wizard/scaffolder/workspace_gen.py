"""Nx workspace generation.

The workspace descriptors (``nx.json`` and the root ``package.json``) are
mandatory.  The application scaffold under ``apps/<slug>/`` is fail-soft: the
preset's Nx code generator is tried first and any failure falls back to a
static scaffold whose ``project.json`` carries the serve port.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

from ..answers.models import LanguageFamily
from ..config import WizardConfig
from ..resolver.context import ResolvedContext
from ..resolver.toolchain import manifest_dependencies
from ..utils import run_command, write_json
from .manifest_gen import ManifestGenerator, manifest_name
from .report import GenerationReport
from .source_gen import SourceGenerator, starter_files
from .templates import TemplateRenderer, template_vars


# ---------------------------------------------------------------------------
# Descriptor documents
# ---------------------------------------------------------------------------

def nx_json() -> dict[str, Any]:
    """The ``nx.json`` document. Identical for every preset."""
    return {
        "$schema": "./node_modules/nx/schemas/nx-schema.json",
        "defaultBase": "main",
        "workspaceLayout": {"appsDir": "apps", "libsDir": "libs"},
        "namedInputs": {
            "default": ["{projectRoot}/**/*"],
            "production": ["default"],
        },
        "targetDefaults": {
            "build": {
                "dependsOn": ["^build"],
                "inputs": ["production", "^production"],
                "cache": True,
            },
            "test": {"inputs": ["default", "^production"], "cache": True},
        },
    }


def root_package_json(ctx: ResolvedContext, nx_version: str) -> dict[str, Any]:
    """Root ``package.json``: Nx plus the preset's plugins.

    First-party ``@nx/*`` plugins are pinned to the Nx version; community
    plugins track their latest release.
    """
    dev_dependencies = {"nx": nx_version}
    for plugin in ctx.preset.plugins:
        dev_dependencies[plugin] = nx_version if plugin.startswith("@nx/") else "latest"

    document: dict[str, Any] = {
        "name": ctx.slug,
        "version": "0.0.0",
        "private": True,
        "description": ctx.config.description,
        "scripts": {
            "dev": f"nx serve {ctx.slug}",
            "build": "nx run-many -t build",
            "test": "nx run-many -t test",
        },
        "devDependencies": dev_dependencies,
    }
    if ctx.profile.family == LanguageFamily.JAVASCRIPT:
        dependencies = {d: "latest" for d in manifest_dependencies(ctx.config.dependencies)}
        if ctx.database:
            dependencies.setdefault("pg", "^8.12.0")
        if dependencies:
            document["dependencies"] = dependencies
    return document


def static_project_json(ctx: ResolvedContext) -> dict[str, Any]:
    """``apps/<slug>/project.json`` for the static scaffold."""
    app_dir = f"apps/{ctx.slug}"
    commands = ctx.toolchain.app_commands

    def _target(command: str, **extra: Any) -> dict[str, Any]:
        return {
            "executor": "nx:run-commands",
            "options": {"command": command, "cwd": app_dir, "forwardAllArgs": False, **extra},
        }

    return {
        "name": ctx.slug,
        "$schema": "../../node_modules/nx/schemas/project-schema.json",
        "projectType": "application",
        "sourceRoot": f"{app_dir}/src",
        "targets": {
            "serve": _target(commands.dev, port=ctx.port, env={"PORT": str(ctx.port)}),
            "build": _target(commands.build),
            "test": _target(commands.test),
        },
        "tags": [f"preset:{ctx.preset.identity}"],
    }


def set_serve_port(project_json: Path, ctx: ResolvedContext) -> None:
    """Point a generated project's serve target at the application port."""
    if project_json.is_file():
        document = json.loads(project_json.read_text(encoding="utf-8"))
    else:
        document = {"name": ctx.slug}
    targets = document.setdefault("targets", {})
    options = targets.setdefault("serve", {}).setdefault("options", {})
    options["port"] = ctx.port
    write_json(project_json, document)


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------

# Families whose Dockerfile copies the manifest by name.
_COPIED_MANIFESTS = (LanguageFamily.PYTHON, LanguageFamily.JAVA, LanguageFamily.RUST)


class WorkspaceGenerator:
    """Writes the Nx workspace and scaffolds the application inside it."""

    def __init__(self, renderer: TemplateRenderer, settings: WizardConfig) -> None:
        self.renderer = renderer
        self.settings = settings
        self.source_gen = SourceGenerator(renderer)
        self.manifest_gen = ManifestGenerator(renderer)

    async def write_descriptors(self, project_root: Path, ctx: ResolvedContext) -> list[Path]:
        """Write ``nx.json`` and the root ``package.json``. Errors propagate."""
        nx_path = project_root / "nx.json"
        package_path = project_root / "package.json"
        await asyncio.to_thread(write_json, nx_path, nx_json())
        await asyncio.to_thread(
            write_json, package_path, root_package_json(ctx, self.settings.nx_version)
        )
        return [nx_path, package_path]

    async def scaffold_app(
        self,
        project_root: Path,
        ctx: ResolvedContext,
        report: GenerationReport,
    ) -> list[Path]:
        """Scaffold ``apps/<slug>``: code generator first, static fallback second."""
        app_dir = project_root / "apps" / ctx.slug
        if self.settings.run_generators:
            if ctx.preset.generator is None:
                report.warn(
                    f"Preset '{ctx.preset.identity}' has no code generator; "
                    "using the static scaffold."
                )
            else:
                failure = await self._run_generator(project_root, ctx)
                if failure is None:
                    project_json = app_dir / "project.json"
                    await asyncio.to_thread(set_serve_port, project_json, ctx)
                    report.generator_used = True
                    return [project_json, *await self.complete_generated_app(app_dir, ctx)]
                report.warn(f"{failure}; using the static scaffold.")

        return await self.scaffold_static(project_root, ctx)

    async def complete_generated_app(self, app_dir: Path, ctx: ResolvedContext) -> list[Path]:
        """Add the files the Dockerfile copies that the Nx generator did not write.

        Only missing files are written; generator output is never replaced.
        """
        family = ctx.profile.family
        written: list[Path] = []
        name = manifest_name(ctx)
        if family in _COPIED_MANIFESTS and not (app_dir / name).exists():
            written.extend(await self.manifest_gen.generate(app_dir, ctx))
        # Python runs src/main.py directly; compiled families build from the generator's sources.
        if family == LanguageFamily.PYTHON:
            variables = template_vars(ctx)
            for template_name, relative in starter_files(ctx):
                out = app_dir / relative
                if not out.exists():
                    written.append(
                        await self.renderer.render_to_file(template_name, out, variables)
                    )
        return written

    async def scaffold_static(self, project_root: Path, ctx: ResolvedContext) -> list[Path]:
        """The minimal app scaffold: project.json, starter sources, manifest."""
        app_dir = project_root / "apps" / ctx.slug
        project_json = app_dir / "project.json"
        await asyncio.to_thread(write_json, project_json, static_project_json(ctx))
        written = [project_json]
        written.extend(await self.source_gen.generate_starter(app_dir, ctx))
        # JavaScript dependencies live in the root package.json.
        if ctx.profile.family != LanguageFamily.JAVASCRIPT:
            written.extend(await self.manifest_gen.generate(app_dir, ctx))
        return written

    async def _run_generator(self, project_root: Path, ctx: ResolvedContext) -> str | None:
        """Install the workspace and run the preset generator.

        Returns ``None`` on success, otherwise a one-line failure description.
        """
        timeouts = self.settings.timeouts
        try:
            rc, _, stderr = await run_command(
                ["npm", "install", "--no-audit", "--no-fund"],
                cwd=project_root,
                timeout=timeouts.install,
            )
            if rc != 0:
                return f"npm install failed ({_first_line(stderr)})"

            generator = ctx.preset.generator.split()
            rc, _, stderr = await run_command(
                [
                    "npx",
                    *generator,
                    f"--name={ctx.slug}",
                    f"--directory=apps/{ctx.slug}",
                    "--no-interactive",
                ],
                cwd=project_root,
                timeout=timeouts.generator,
            )
        except OSError as exc:
            return f"Could not run the workspace generator: {exc}"
        if rc != 0:
            return f"'{ctx.preset.generator}' failed ({_first_line(stderr)})"
        return None


def _first_line(text: str) -> str:
    lines = [line for line in text.splitlines() if line.strip()]
    return lines[0].strip() if lines else "no output"
