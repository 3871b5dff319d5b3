"""Repository-level artifacts: README, ignore and environment files, helper
scripts, versioning support and the initial git commit.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from ..config import WizardConfig
from ..resolver.context import ResolvedContext
from ..utils import make_executable, run_command, write_text
from .templates import TemplateRenderer, one_line, template_vars


class RepoGenerator:
    """Generates repository files and initialises version control."""

    def __init__(self, renderer: TemplateRenderer, settings: WizardConfig) -> None:
        self.renderer = renderer
        self.settings = settings

    # -- Documents ---------------------------------------------------------

    async def generate_readme(self, project_root: Path, ctx: ResolvedContext) -> Path:
        return await self.renderer.render_to_file(
            "repo/README.md.j2", project_root / "README.md", template_vars(ctx)
        )

    async def generate_gitignore(self, project_root: Path, ctx: ResolvedContext) -> Path:
        return await self.renderer.render_to_file(
            "repo/gitignore.j2", project_root / ".gitignore", template_vars(ctx)
        )

    async def generate_env_files(self, project_root: Path, ctx: ResolvedContext) -> list[Path]:
        """``.env.example`` always; ``.env`` only when a GitHub handle was given."""
        written = [
            await self.renderer.render_to_file(
                "repo/env.example.j2", project_root / ".env.example", template_vars(ctx)
            )
        ]
        if ctx.config.github_user:
            env_path = project_root / ".env"
            content = f"PORT={ctx.port}\nGITHUB_USER={one_line(ctx.config.github_user)}\n"
            await asyncio.to_thread(write_text, env_path, content)
            written.append(env_path)
        return written

    # -- Scripts -----------------------------------------------------------

    async def generate_scripts(self, project_root: Path, ctx: ResolvedContext) -> list[Path]:
        """Render ``scripts/dev.sh`` and ``scripts/test.sh``."""
        return await self._render_scripts(
            project_root, ctx, ["scripts/dev.sh.j2", "scripts/test.sh.j2"]
        )

    async def generate_versioning(self, project_root: Path, ctx: ResolvedContext) -> list[Path]:
        """``CHANGELOG.md`` and ``scripts/release.sh``."""
        changelog = await self.renderer.render_to_file(
            "repo/CHANGELOG.md.j2", project_root / "CHANGELOG.md", template_vars(ctx)
        )
        scripts = await self._render_scripts(project_root, ctx, ["scripts/release.sh.j2"])
        return [changelog, *scripts]

    async def _render_scripts(
        self, project_root: Path, ctx: ResolvedContext, templates: list[str]
    ) -> list[Path]:
        variables = template_vars(ctx)
        written: list[Path] = []
        for template_name in templates:
            out = project_root / template_name[: -len(".j2")]
            await self.renderer.render_to_file(template_name, out, variables)
            await asyncio.to_thread(make_executable, out)
            written.append(out)
        return written

    # -- Version control ---------------------------------------------------

    async def init_git(self, project_root: Path) -> str | None:
        """Initialise a repository and create the initial commit.

        Returns ``None`` on success, otherwise a one-line failure description.
        """
        author = [
            "-c", f"user.name={self.settings.git_author_name}",
            "-c", f"user.email={self.settings.git_author_email}",
            "-c", "commit.gpgsign=false",
        ]
        steps = [
            ("git init", ["git", "init", "--initial-branch=main"]),
            ("git add", ["git", "add", "--all"]),
            (
                "git commit",
                ["git", *author, "commit", "--quiet", "-m", "Initial commit from project-wizard"],
            ),
        ]
        for label, cmd in steps:
            try:
                rc, _, stderr = await run_command(
                    cmd, cwd=project_root, timeout=self.settings.timeouts.git
                )
            except OSError as exc:
                return f"git is not available: {exc}"
            if rc != 0:
                return f"'{label}' failed: {stderr or 'no output'}"
        return None
