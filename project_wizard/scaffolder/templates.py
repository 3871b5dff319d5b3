"""Jinja2 template rendering for generated artifacts.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``project_wizard/scaffolder/templates/`` directory, and ``template_vars`` which
flattens a ``ResolvedContext`` into the variables every template sees.
Templates only read these variables; they never derive ports, names or
commands themselves.
"""

from __future__ import annotations

import asyncio
import json
import re
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..answers.models import JavaFramework, LanguageFamily
from ..resolver.context import ResolvedContext
from ..resolver.toolchain import assistant_actions, manifest_dependencies
from ..utils import write_text


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for project scaffolding.

    Undefined variables are errors: a template that references a value the
    context does not provide fails loudly instead of rendering a blank.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["json_str"] = _json_str_filter
        self.env.filters["one_line"] = one_line

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"docker/Dockerfile.j2"``).
            context: Dictionary of variables available inside the template.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    async def render_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> Path:
        """Render a template and write the result to *output_path*.

        Parent directories are created automatically.
        """
        content = self.render(template_path, context)
        out = Path(output_path)
        await asyncio.to_thread(write_text, out, content)
        return out


# ---------------------------------------------------------------------------
# Template variables
# ---------------------------------------------------------------------------

def template_vars(ctx: ResolvedContext) -> dict[str, Any]:
    """Flatten a ``ResolvedContext`` into template variables.

    ``app_dir`` is where the application sources live relative to the project
    root: the root itself for a plain project, ``apps/<slug>`` in a workspace.
    """
    config = ctx.config
    profile = ctx.profile
    identity = ctx.identity
    toolchain = ctx.toolchain
    plan = toolchain.assistant
    return {
        "project_name": config.repo_name,
        "slug": identity.slug,
        "description": config.description,
        "project_type": config.project_type_label,
        "github_user": config.github_user,
        "identity": identity,
        "family": profile.family.value,
        "framework": profile.framework.value,
        "language_label": profile.label,
        "is_javascript": profile.family == LanguageFamily.JAVASCRIPT,
        "is_python": profile.family == LanguageFamily.PYTHON,
        "is_java": profile.family == LanguageFamily.JAVA,
        "is_rust": profile.family == LanguageFamily.RUST,
        "is_dotnet": profile.family == LanguageFamily.DOTNET,
        "is_spring": profile.framework == JavaFramework.SPRING_BOOT,
        "is_quarkus": profile.framework == JavaFramework.QUARKUS,
        "workspace_mode": config.workspace_mode,
        "app_dir": f"apps/{identity.slug}" if config.workspace_mode else ".",
        "preset": ctx.preset,
        "port": ctx.port,
        "database": ctx.database,
        "container": config.container,
        "kubernetes": ctx.kubernetes,
        "deployment_target": config.deployment_label,
        "base_image": config.base_image.value,
        "assistant": config.assistant.value,
        "has_assistant": plan is not None,
        "assistant_slug": plan.slug if plan else "",
        "assistant_command": plan.command if plan else "",
        "assistant_config": plan.config_file if plan else "",
        "assistant_package": plan.npm_package if plan else "",
        "api_key_var": plan.api_key_var if plan else "",
        "assistant_commands": assistant_actions(
            config.expected_commands, toolchain.commands, config.container
        ),
        "expected_commands": list(config.expected_commands),
        "commands": toolchain.commands,
        "package_manager": toolchain.package_manager,
        "test_framework": toolchain.test_framework,
        "images": toolchain.container,
        "os_packages": list(toolchain.os_packages),
        "dependencies": list(config.dependencies),
        "manifest_dependencies": manifest_dependencies(config.dependencies),
        "crate_dependencies": [
            d for d in config.dependencies if re.fullmatch(r"[A-Za-z][A-Za-z0-9_-]*", d)
        ],
        "generate_scripts": config.generate_scripts,
        "include_docs": config.include_docs,
        "setup_versioning": config.setup_versioning,
    }


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _json_str_filter(value: Any) -> str:
    """Render a scalar as a double-quoted string (valid JSON, YAML and TOML)."""
    return json.dumps(str(value), ensure_ascii=False)


def one_line(value: Any) -> str:
    """Collapse *value* to a single line for comment positions."""
    return " ".join(str(value).split())
