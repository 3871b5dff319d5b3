"""Project Wizard command-line entry point.

Flags on the command line select the non-interactive path; with none the
wizard runs its question sequence.  Either way the answers are normalised
once, resolved once, and handed to the ``ProjectGenerator``.

Usage::

    project-wizard
    project-wizard --java --spring-boot --api-service --name demo --docker --db
    python -m project_wizard --python --no-nx -o ~/code
"""

from __future__ import annotations

import asyncio
import sys
from typing import Optional, Sequence

from project_wizard import __version__
from project_wizard.answers.flags import FlagError, parse_flags
from project_wizard.answers.models import RawAnswers
from project_wizard.answers.normalizer import build_config
from project_wizard.answers.prompts import collect_answers
from project_wizard.config import WizardConfig
from project_wizard.resolver import ResolvedContext, resolve_context
from project_wizard.scaffolder import GenerationError, GenerationReport, ProjectGenerator
from project_wizard.utils import (
    console,
    print_banner,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)


def _summary(ctx: ResolvedContext, report: GenerationReport) -> dict[str, str]:
    config = ctx.config
    data = {
        "Project": f"{config.repo_name} ({ctx.slug})",
        "Location": str(report.project_root),
        "Type": config.project_type_label,
        "Language": ctx.profile.label,
        "Layout": f"Nx workspace ({ctx.preset.label})" if ctx.workspace_mode else "Devbox only",
        "Port": str(ctx.port),
        "Container": config.deployment_label if config.container else "no",
        "Database": "PostgreSQL" if ctx.database else "no",
        "Assistant": config.assistant.value,
        "Files written": str(len(report.files)),
    }
    if ctx.workspace_mode:
        data["App scaffold"] = "Nx generator" if report.generator_used else "static"
    if config.init_git:
        data["Git"] = "initialised" if report.git_initialized else "skipped"
    return data


def _next_steps(ctx: ResolvedContext, report: GenerationReport) -> str:
    steps = [
        f"cd {report.project_root}",
        "devbox shell",
        f"{ctx.toolchain.commands.dev}    # serves on port {ctx.port}",
    ]
    plan = ctx.toolchain.assistant
    if plan is not None:
        steps.append(f"./scripts/install-{plan.slug}.sh && {plan.command}")
    return "\n".join(f"  {step}" for step in steps)


def _collect(argv: Sequence[str]) -> tuple[RawAnswers, WizardConfig]:
    settings = WizardConfig.from_env()
    if argv:
        result = parse_flags(argv)
        if result.output_dir is not None:
            settings = settings.model_copy(update={"output_dir": result.output_dir})
        return result.answers, settings

    print_banner(
        f"Project Wizard {__version__}",
        "Answer each question or press Enter to accept the default.",
    )
    return collect_answers(), settings


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entry point for ``project-wizard`` and ``python -m project_wizard``."""
    args = list(sys.argv[1:] if argv is None else argv)

    try:
        answers, settings = _collect(args)
    except FlagError as exc:
        print_error(f"Error: {exc}")
        console.print("Run 'project-wizard --help' for usage.")
        sys.exit(2)
    except (KeyboardInterrupt, EOFError):
        console.print()
        print_warning("Aborted; nothing was written.")
        sys.exit(130)

    config = build_config(answers)
    ctx = resolve_context(config, warn=print_warning)

    try:
        report = asyncio.run(ProjectGenerator(ctx, settings).generate())
    except GenerationError as exc:
        print_error(f"Generation failed: {exc}")
        sys.exit(1)

    for message in report.warnings[len(ctx.warnings):]:
        print_warning(message)

    print_summary_table(_summary(ctx, report), title="Project Wizard")
    print_success(f"Project '{config.repo_name}' created at {report.project_root}")
    console.print("\nNext steps:")
    console.print(_next_steps(ctx, report), markup=False)


if __name__ == "__main__":
    main()
