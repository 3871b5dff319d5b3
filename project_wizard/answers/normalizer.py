"""Input normalisation: raw answers -> ``ResolvedConfig``.

Every prompt with a fixed option list accepts either the 1-based option
number or the option text.  Anything else is kept verbatim as free text (the
"Other" escape hatch); there is no error path here.
"""

from __future__ import annotations

from typing import Optional

from ..resolver.profile import detect_language, recommend_workspace
from .models import (
    ASSISTANT_OPTIONS,
    BASE_IMAGE_OPTIONS,
    DEFAULT_ASSISTANT,
    DEFAULT_BASE_IMAGE,
    DEFAULT_COMMANDS,
    DEFAULT_DEPLOYMENT,
    DEFAULT_DESCRIPTION,
    DEFAULT_FRAMEWORK,
    DEFAULT_LANGUAGE,
    DEFAULT_PROJECT_TYPE,
    DEFAULT_REPO_NAME,
    DEPLOYMENT_OPTIONS,
    FRAMEWORK_OPTIONS,
    LANGUAGE_OPTIONS,
    PROJECT_TYPE_OPTIONS,
    AnswerKey,
    Assistant,
    BaseImage,
    DeploymentTarget,
    LanguageFamily,
    ProjectType,
    RawAnswers,
    RawAnswerValue,
    ResolvedConfig,
)

_YES = {"y", "yes", "true", "1"}
_NO = {"n", "no", "false", "0"}


def normalize_choice(
    raw: Optional[RawAnswerValue],
    options: list[str],
    default: str = "",
) -> str:
    """Resolve a raw answer against an ordered option list.

    * ``"2"`` -> ``options[1]`` when 2 is within range.
    * Text equal to an option (ignoring case and surrounding whitespace)
      -> that option's canonical spelling.
    * Empty -> *default*.
    * Anything else -> the trimmed text, unchanged.
    """
    text = "" if raw is None or isinstance(raw, bool) else str(raw).strip()
    if not text:
        return default

    try:
        index = int(text)
    except ValueError:
        index = 0
    if 1 <= index <= len(options):
        return options[index - 1]

    lowered = text.lower()
    for option in options:
        if option.lower() == lowered:
            return option
    return text


def parse_yes_no(raw: Optional[RawAnswerValue], default: bool) -> bool:
    """Interpret a yes/no answer; unknown or empty input yields *default*."""
    if isinstance(raw, bool):
        return raw
    if raw is None:
        return default
    text = str(raw).strip().lower()
    if text in _YES:
        return True
    if text in _NO:
        return False
    return default


def split_list(raw: Optional[RawAnswerValue]) -> tuple[str, ...]:
    """Split a comma-separated answer, trimming and de-duplicating entries."""
    if raw is None or isinstance(raw, bool):
        return ()
    seen: list[str] = []
    for item in str(raw).split(","):
        item = item.strip()
        if item and item not in seen:
            seen.append(item)
    return tuple(seen)


def _text(raw: Optional[RawAnswerValue], default: str = "") -> str:
    if raw is None or isinstance(raw, bool):
        return default
    return str(raw).strip() or default


def _enum_or_other(value: str, enum_cls, other):
    try:
        return enum_cls(value)
    except ValueError:
        return other


def _match_assistant(label: str) -> Assistant:
    lowered = label.lower()
    if "gemini" in lowered:
        return Assistant.GEMINI
    if "claude" in lowered:
        return Assistant.CLAUDE
    return Assistant.NONE


def build_config(raw: RawAnswers) -> ResolvedConfig:
    """Normalise a raw answer bag into the frozen ``ResolvedConfig``.

    Missing keys take the documented defaults, so an empty bag and a prompt
    run where every question was answered with "enter" produce the same
    record.
    """
    get = raw.get

    project_type_label = normalize_choice(
        get(AnswerKey.PROJECT_TYPE.value), PROJECT_TYPE_OPTIONS, DEFAULT_PROJECT_TYPE
    )
    project_type = _enum_or_other(project_type_label, ProjectType, ProjectType.OTHER)

    language_label = normalize_choice(
        get(AnswerKey.LANGUAGE.value), LANGUAGE_OPTIONS, DEFAULT_LANGUAGE
    )
    framework_raw = get(AnswerKey.FRAMEWORK.value)
    framework_label = None
    if framework_raw is not None:
        framework_label = normalize_choice(framework_raw, FRAMEWORK_OPTIONS)
        # A blank framework answer only defaults for a Java language answer.
        if not framework_label and detect_language(language_label)[0] == LanguageFamily.JAVA:
            framework_label = DEFAULT_FRAMEWORK
    language, framework = detect_language(language_label, framework_label or None)

    workspace_mode = parse_yes_no(
        get(AnswerKey.WORKSPACE_MODE.value), recommend_workspace(language, project_type)
    )

    preset_choice = _text(get(AnswerKey.PRESET.value)) or None

    assistant_label = normalize_choice(
        get(AnswerKey.ASSISTANT.value), ASSISTANT_OPTIONS, DEFAULT_ASSISTANT
    )
    deployment_label = normalize_choice(
        get(AnswerKey.DEPLOYMENT_TARGET.value), DEPLOYMENT_OPTIONS, DEFAULT_DEPLOYMENT
    )
    base_image_label = normalize_choice(
        get(AnswerKey.BASE_IMAGE.value), BASE_IMAGE_OPTIONS, DEFAULT_BASE_IMAGE
    )

    commands = split_list(get(AnswerKey.EXPECTED_COMMANDS.value)) or split_list(
        DEFAULT_COMMANDS
    )

    return ResolvedConfig(
        project_type=project_type,
        project_type_label=project_type_label,
        language=language,
        language_label=language_label,
        framework=framework,
        description=_text(get(AnswerKey.DESCRIPTION.value), DEFAULT_DESCRIPTION),
        dependencies=split_list(get(AnswerKey.DEPENDENCIES.value)),
        workspace_mode=workspace_mode,
        preset_choice=preset_choice,
        assistant=_match_assistant(assistant_label),
        expected_commands=commands,
        generate_scripts=parse_yes_no(get(AnswerKey.GENERATE_SCRIPTS.value), True),
        include_docs=parse_yes_no(get(AnswerKey.INCLUDE_DOCS.value), True),
        deployment_target=_enum_or_other(
            deployment_label, DeploymentTarget, DeploymentTarget.OTHER
        ),
        deployment_label=deployment_label,
        container=parse_yes_no(get(AnswerKey.CONTAINER.value), True),
        base_image=_enum_or_other(base_image_label, BaseImage, BaseImage.OTHER),
        database=parse_yes_no(get(AnswerKey.DATABASE.value), False),
        repo_name=_text(get(AnswerKey.REPO_NAME.value), DEFAULT_REPO_NAME),
        github_user=_text(get(AnswerKey.GITHUB_USER.value)),
        init_git=parse_yes_no(get(AnswerKey.INIT_GIT.value), True),
        generate_readme=parse_yes_no(get(AnswerKey.GENERATE_README.value), True),
        setup_versioning=parse_yes_no(get(AnswerKey.SETUP_VERSIONING.value), True),
    )
