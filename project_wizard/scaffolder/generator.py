"""Main scaffolding orchestrator.

Takes a ``ResolvedContext`` and writes the project tree.  Each artifact group
is gated by one toggle of the resolved configuration and is either
*mandatory* (a failure raises ``GenerationError`` and aborts the run) or
*optional* (a failure is recorded as a warning and the run continues).
Directories are created before anything is written into them.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Awaitable

from ..config import WizardConfig
from ..resolver.context import ResolvedContext
from ..utils import ensure_dir
from .assistant_gen import AssistantGenerator
from .devbox_gen import DevboxGenerator
from .docker_gen import DockerGenerator
from .manifest_gen import ManifestGenerator
from .repo_gen import RepoGenerator
from .report import GenerationError, GenerationReport
from .source_gen import SourceGenerator
from .templates import TemplateRenderer
from .workspace_gen import WorkspaceGenerator

__all__ = ["GenerationError", "GenerationReport", "ProjectGenerator"]


def _as_paths(result: Any) -> list[Path]:
    if result is None:
        return []
    if isinstance(result, Path):
        return [result]
    if isinstance(result, dict):
        return list(result.values())
    return list(result)


class ProjectGenerator:
    """Artifact composer.

    Generators only ever see the ``ResolvedContext``; none of them reads raw
    answers or recomputes a resolved fact.
    """

    def __init__(
        self,
        ctx: ResolvedContext,
        settings: WizardConfig | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.ctx = ctx
        self.settings = settings or WizardConfig()
        self.renderer = renderer or TemplateRenderer()
        self.devbox_gen = DevboxGenerator()
        self.workspace_gen = WorkspaceGenerator(self.renderer, self.settings)
        self.source_gen = SourceGenerator(self.renderer)
        self.manifest_gen = ManifestGenerator(self.renderer)
        self.docker_gen = DockerGenerator(self.renderer)
        self.assistant_gen = AssistantGenerator(self.renderer)
        self.repo_gen = RepoGenerator(self.renderer, self.settings)

    @property
    def project_root(self) -> Path:
        return self.settings.project_path(self.ctx.slug).absolute()

    # -- Public API --------------------------------------------------------

    async def generate(self) -> GenerationReport:
        """Generate the project and return what was written.

        Raises:
            GenerationError: The project directory or a mandatory descriptor
                could not be written.
        """
        ctx = self.ctx
        config = ctx.config
        root = self.project_root
        report = GenerationReport(project_root=root, warnings=list(ctx.warnings))

        # 1. Project directory (an existing directory is fine)
        try:
            await asyncio.to_thread(ensure_dir, root)
        except OSError as exc:
            raise GenerationError(f"Cannot create project directory: {exc}", root) from exc

        # 2. Toolchain descriptor
        await self._mandatory(report, "devbox.json", self.devbox_gen.generate(root, ctx))

        # 3. Workspace or single-project layout
        if config.workspace_mode:
            await self._mandatory(
                report, "workspace descriptors", self.workspace_gen.write_descriptors(root, ctx)
            )
            await self._optional(
                report, f"apps/{ctx.slug}", self.workspace_gen.scaffold_app(root, ctx, report)
            )
        else:
            await self._mandatory(report, "project layout", self.source_gen.generate(root, ctx))
            await self._optional(report, "dependency manifest", self.manifest_gen.generate(root, ctx))

        # 4. Containers
        if config.container:
            await self._optional(report, "container files", self.docker_gen.generate_all(root, ctx))

        # 5. Coding assistant
        if ctx.has_assistant:
            await self._optional(report, "assistant config", self.assistant_gen.generate(root, ctx))

        # 6. Helper scripts
        if config.generate_scripts:
            await self._optional(report, "helper scripts", self.repo_gen.generate_scripts(root, ctx))

        # 7. Environment files
        await self._optional(report, "environment files", self.repo_gen.generate_env_files(root, ctx))

        # 8. README
        if config.generate_readme:
            await self._optional(report, "README.md", self.repo_gen.generate_readme(root, ctx))

        # 9. Versioning
        if config.setup_versioning:
            await self._optional(
                report, "versioning files", self.repo_gen.generate_versioning(root, ctx)
            )

        # 10. Version control (last, so the initial commit holds everything)
        if config.init_git:
            await self._optional(report, ".gitignore", self.repo_gen.generate_gitignore(root, ctx))
            failure = await self.repo_gen.init_git(root)
            if failure is None:
                report.git_initialized = True
            else:
                report.warn(f"Git initialisation skipped: {failure}")

        return report

    # -- Helpers -----------------------------------------------------------

    async def _mandatory(
        self, report: GenerationReport, label: str, step: Awaitable[Any]
    ) -> None:
        try:
            result = await step
        except OSError as exc:
            path = Path(exc.filename) if exc.filename else None
            raise GenerationError(f"Could not write {label}: {exc.strerror or exc}", path) from exc
        report.add(*_as_paths(result))

    async def _optional(
        self, report: GenerationReport, label: str, step: Awaitable[Any]
    ) -> None:
        try:
            result = await step
        except OSError as exc:
            report.warn(f"Skipped {label}: {exc}")
            return
        report.add(*_as_paths(result))
