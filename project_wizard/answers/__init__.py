"""Project Wizard answer collection and normalisation.

Two adapters produce the same raw answer bag: ``answers.flags`` (non-interactive
CLI flags) and ``answers.prompts`` (the interactive question sequence).
``answers.normalizer.build_config`` turns either into the frozen
``ResolvedConfig``.

Only the models are re-exported here; the adapters and the normaliser depend
on ``project_wizard.resolver`` and are imported from their own modules.
"""

from project_wizard.answers.models import (
    AnswerKey,
    Assistant,
    BaseImage,
    DeploymentTarget,
    JavaFramework,
    LanguageFamily,
    ProjectType,
    RawAnswers,
    ResolvedConfig,
)

__all__ = [
    "AnswerKey",
    "Assistant",
    "BaseImage",
    "DeploymentTarget",
    "JavaFramework",
    "LanguageFamily",
    "ProjectType",
    "RawAnswers",
    "ResolvedConfig",
]
