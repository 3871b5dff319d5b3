"""Non-interactive answer source: command-line flags -> ``RawAnswers``.

Any flag on the command line switches the wizard to non-interactive mode.
All conflict and missing-value checks run here, before resolution starts and
before anything touches the filesystem.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from ..resolver.presets import PRESETS
from .models import (
    FRAMEWORK_OPTIONS,
    LANGUAGE_OPTIONS,
    AnswerKey,
    JavaFramework,
    LanguageFamily,
    ProjectType,
    RawAnswers,
)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class FlagError(Exception):
    """Invalid command line. Fatal; reported before any generation work."""


class FlagConflictError(FlagError):
    """Mutually exclusive flags were given together."""


class MissingFlagValueError(FlagError):
    """A flag that takes a value was not followed by one."""


# ---------------------------------------------------------------------------
# Flag tables
# ---------------------------------------------------------------------------

SUB_FRAMEWORK_FLAGS: dict[str, JavaFramework] = {
    "spring-boot": JavaFramework.SPRING_BOOT,
    "quarkus": JavaFramework.QUARKUS,
}

PRESET_FLAGS: list[str] = [p for p in PRESETS if p not in SUB_FRAMEWORK_FLAGS]

PROJECT_TYPE_FLAGS: dict[str, ProjectType] = {
    "web-app": ProjectType.WEB_APP,
    "cli-tool": ProjectType.CLI_TOOL,
    "library": ProjectType.LIBRARY,
    "api-service": ProjectType.API_SERVICE,
    "mobile-app": ProjectType.MOBILE_APP,
}

_TOGGLE_HELP: dict[str, str] = {
    "docker": "container files (Dockerfile, compose, .dockerignore)",
    "db": "the database service, where the project type offers one",
    "nx": "the Nx workspace layout",
}

TOGGLE_FLAGS: dict[str, AnswerKey] = {
    "docker": AnswerKey.CONTAINER,
    "db": AnswerKey.DATABASE,
    "nx": AnswerKey.WORKSPACE_MODE,
}

# Language answer text that the normaliser classifies back to each family.
_FAMILY_LANGUAGE_TEXT: dict[LanguageFamily, str] = {
    LanguageFamily.JAVASCRIPT: LANGUAGE_OPTIONS[0],
    LanguageFamily.JAVA: LANGUAGE_OPTIONS[1],
    LanguageFamily.PYTHON: LANGUAGE_OPTIONS[2],
    LanguageFamily.RUST: LANGUAGE_OPTIONS[3],
    LanguageFamily.DOTNET: LANGUAGE_OPTIONS[4],
}

_FRAMEWORK_TEXT: dict[JavaFramework, str] = {
    JavaFramework.SPRING_BOOT: FRAMEWORK_OPTIONS[0],
    JavaFramework.QUARKUS: FRAMEWORK_OPTIONS[1],
    JavaFramework.NONE: FRAMEWORK_OPTIONS[2],
}


def _dest(flag: str) -> str:
    return flag.replace("-", "_")


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

class _FlagParser(argparse.ArgumentParser):
    """ArgumentParser that raises ``FlagError`` instead of exiting."""

    def error(self, message: str) -> None:  # type: ignore[override]
        if "expected one argument" in message:
            raise MissingFlagValueError(message)
        raise FlagError(message)


def build_parser() -> argparse.ArgumentParser:
    """Construct the flag parser. ``-h`` prints usage and exits with status 0."""
    parser = _FlagParser(
        prog="project-wizard",
        description=(
            "Scaffold a new project. Without flags the wizard asks its "
            "questions interactively; any flag switches to non-interactive mode."
        ),
        allow_abbrev=False,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "examples:\n"
            "  project-wizard --react --name storefront\n"
            "  project-wizard --java --spring-boot --api-service --name demo --docker --db\n"
            "  project-wizard --python --no-nx --deps fastapi,numpy -o ~/code"
        ),
    )

    presets = parser.add_argument_group("workspace presets (at most one)")
    for identity in PRESET_FLAGS:
        presets.add_argument(
            f"--{identity}",
            dest=f"preset_{_dest(identity)}",
            action="store_true",
            help=PRESETS[identity].label,
        )

    frameworks = parser.add_argument_group("Java frameworks (imply --java)")
    for flag, framework in SUB_FRAMEWORK_FLAGS.items():
        frameworks.add_argument(
            f"--{flag}",
            dest=f"framework_{_dest(flag)}",
            action="store_true",
            help=_FRAMEWORK_TEXT[framework],
        )

    types = parser.add_argument_group("project type (at most one)")
    for flag, project_type in PROJECT_TYPE_FLAGS.items():
        types.add_argument(
            f"--{flag}",
            dest=f"type_{_dest(flag)}",
            action="store_true",
            help=project_type.value,
        )

    values = parser.add_argument_group("values")
    values.add_argument("--name", "--project-name", dest="name", metavar="NAME",
                        help="Repository name (default: my-project)")
    values.add_argument("--user", "--github-user", dest="user", metavar="HANDLE",
                        help="GitHub handle, written to the generated .env")
    values.add_argument("--description", metavar="TEXT", help="Short project description")
    values.add_argument("--deps", metavar="LIST", help="Comma-separated dependencies")
    values.add_argument("--assistant", metavar="NAME",
                        help="Coding assistant: gemini, claude or none")
    values.add_argument("-o", "--output", metavar="DIR", type=Path,
                        help="Directory the project folder is created in")

    toggles = parser.add_argument_group("toggles (each pair is mutually exclusive)")
    for flag in TOGGLE_FLAGS:
        toggles.add_argument(f"--{flag}", dest=f"on_{flag}", action="store_true",
                             help=f"Generate {_TOGGLE_HELP[flag]}")
        toggles.add_argument(f"--no-{flag}", dest=f"off_{flag}", action="store_true",
                             help=f"Skip {_TOGGLE_HELP[flag]}")

    return parser


# ---------------------------------------------------------------------------
# Parse result
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FlagResult:
    """Raw answers produced by the flag path, plus where to write the project."""

    answers: RawAnswers
    output_dir: Optional[Path] = None


def _selected(namespace: argparse.Namespace, prefix: str, flags: Sequence[str]) -> list[str]:
    return [f for f in flags if getattr(namespace, f"{prefix}_{_dest(f)}")]


def _validate(namespace: argparse.Namespace) -> tuple[Optional[str], Optional[str], Optional[str]]:
    """Enforce every mutual-exclusion rule; return (preset, framework, type) flags."""
    presets = _selected(namespace, "preset", PRESET_FLAGS)
    if len(presets) > 1:
        raise FlagConflictError(
            "Only one preset flag may be given: " + ", ".join(f"--{p}" for p in presets)
        )

    frameworks = _selected(namespace, "framework", list(SUB_FRAMEWORK_FLAGS))
    if len(frameworks) > 1:
        raise FlagConflictError("--spring-boot and --quarkus are mutually exclusive")

    types = _selected(namespace, "type", list(PROJECT_TYPE_FLAGS))
    if len(types) > 1:
        raise FlagConflictError(
            "Only one project type flag may be given: " + ", ".join(f"--{t}" for t in types)
        )

    preset = presets[0] if presets else None
    framework = frameworks[0] if frameworks else None
    if preset and framework and PRESETS[preset].family != LanguageFamily.JAVA:
        raise FlagConflictError(f"--{framework} cannot be combined with --{preset}")

    for flag in TOGGLE_FLAGS:
        if getattr(namespace, f"on_{flag}") and getattr(namespace, f"off_{flag}"):
            raise FlagConflictError(f"--{flag} and --no-{flag} are mutually exclusive")

    return preset, framework, types[0] if types else None


def parse_flags(argv: Sequence[str]) -> FlagResult:
    """Parse *argv* (without the program name) into a raw answer bag.

    Raises:
        FlagConflictError: Two mutually exclusive flags were given.
        MissingFlagValueError: A value flag had no value.
        FlagError: Any other malformed command line (e.g. an unknown flag).
    """
    namespace = build_parser().parse_args(list(argv))
    preset, framework, project_type = _validate(namespace)

    answers: RawAnswers = {}

    if project_type:
        answers[AnswerKey.PROJECT_TYPE.value] = PROJECT_TYPE_FLAGS[project_type].value

    if framework:
        fw = SUB_FRAMEWORK_FLAGS[framework]
        answers[AnswerKey.LANGUAGE.value] = _FAMILY_LANGUAGE_TEXT[LanguageFamily.JAVA]
        answers[AnswerKey.FRAMEWORK.value] = _FRAMEWORK_TEXT[fw]
    elif preset:
        family = PRESETS[preset].family
        answers[AnswerKey.LANGUAGE.value] = _FAMILY_LANGUAGE_TEXT[family]
        if family == LanguageFamily.JAVA:
            answers[AnswerKey.FRAMEWORK.value] = _FRAMEWORK_TEXT[JavaFramework.NONE]

    if preset:
        answers[AnswerKey.PRESET.value] = framework or preset
        # A preset flag asks for a workspace unless --no-nx says otherwise.
        answers[AnswerKey.WORKSPACE_MODE.value] = True

    for flag, key in TOGGLE_FLAGS.items():
        if getattr(namespace, f"on_{flag}"):
            answers[key.value] = True
        elif getattr(namespace, f"off_{flag}"):
            answers[key.value] = False

    if namespace.name is not None:
        answers[AnswerKey.REPO_NAME.value] = namespace.name
    if namespace.user is not None:
        answers[AnswerKey.GITHUB_USER.value] = namespace.user
    if namespace.description is not None:
        answers[AnswerKey.DESCRIPTION.value] = namespace.description
    if namespace.deps is not None:
        answers[AnswerKey.DEPENDENCIES.value] = namespace.deps
    if namespace.assistant is not None:
        answers[AnswerKey.ASSISTANT.value] = namespace.assistant

    return FlagResult(answers=answers, output_dir=namespace.output)
