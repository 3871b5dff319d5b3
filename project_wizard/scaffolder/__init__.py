"""Project Wizard scaffolder -- writes the project tree for a resolved context.

Quick usage::

    from project_wizard.answers.normalizer import build_config
    from project_wizard.resolver import resolve_context
    from project_wizard.scaffolder import ProjectGenerator

    ctx = resolve_context(build_config({"language": "Python", "repo_name": "demo"}))
    report = await ProjectGenerator(ctx).generate()
"""

from project_wizard.scaffolder.generator import ProjectGenerator
from project_wizard.scaffolder.report import GenerationError, GenerationReport
from project_wizard.scaffolder.templates import TemplateRenderer, template_vars

__all__ = [
    "GenerationError",
    "GenerationReport",
    "ProjectGenerator",
    "TemplateRenderer",
    "template_vars",
]
