"""Pydantic v2 models for collected and resolved wizard answers.

Defines the closed option sets offered by the prompts, the raw answer bag both
input paths produce, and the immutable ``ResolvedConfig`` that every later
stage reads from.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ProjectType(str, Enum):
    """Kind of project being scaffolded."""
    WEB_APP = "Web app"
    CLI_TOOL = "CLI tool"
    LIBRARY = "Library"
    API_SERVICE = "API service"
    MOBILE_APP = "Mobile app"
    OTHER = "Other"


class LanguageFamily(str, Enum):
    """Primary language family of the generated project."""
    JAVASCRIPT = "javascript"
    JAVA = "java"
    PYTHON = "python"
    RUST = "rust"
    DOTNET = "dotnet"
    OTHER = "other"


class JavaFramework(str, Enum):
    """Sub-framework of the Java family. ``NONE`` for every other family."""
    NONE = "none"
    SPRING_BOOT = "spring-boot"
    QUARKUS = "quarkus"


class Assistant(str, Enum):
    """Coding assistant wired into the generated toolchain."""
    GEMINI = "Gemini CLI"
    CLAUDE = "Claude Code"
    NONE = "None"


class DeploymentTarget(str, Enum):
    """Where the generated project is expected to run."""
    DOCKER = "Docker container"
    KUBERNETES = "Kubernetes"
    SERVERLESS = "Serverless/cloud platform"
    OTHER = "Other"


class BaseImage(str, Enum):
    """Base OS family for container images."""
    ALPINE = "Alpine"
    UBUNTU = "Ubuntu"
    DEBIAN = "Debian"
    OTHER = "Other"


class AnswerKey(str, Enum):
    """Keys of the raw answer bag, shared by the flag and prompt paths."""
    PROJECT_TYPE = "project_type"
    LANGUAGE = "language"
    FRAMEWORK = "framework"
    DESCRIPTION = "description"
    WORKSPACE_MODE = "workspace_mode"
    PRESET = "preset"
    DEPENDENCIES = "dependencies"
    ASSISTANT = "assistant"
    EXPECTED_COMMANDS = "expected_commands"
    GENERATE_SCRIPTS = "generate_scripts"
    INCLUDE_DOCS = "include_docs"
    DEPLOYMENT_TARGET = "deployment_target"
    CONTAINER = "container"
    BASE_IMAGE = "base_image"
    DATABASE = "database"
    REPO_NAME = "repo_name"
    GITHUB_USER = "github_user"
    INIT_GIT = "init_git"
    GENERATE_README = "generate_readme"
    SETUP_VERSIONING = "setup_versioning"


# ---------------------------------------------------------------------------
# Option lists (prompt order)
# ---------------------------------------------------------------------------

PROJECT_TYPE_OPTIONS: list[str] = [t.value for t in ProjectType]

LANGUAGE_OPTIONS: list[str] = [
    "JavaScript/TypeScript",
    "Java (Spring Boot/Quarkus)",
    "Python",
    "Rust",
    ".NET",
    "Other",
]

FRAMEWORK_OPTIONS: list[str] = ["Spring Boot", "Quarkus", "None (plain Maven)"]

ASSISTANT_OPTIONS: list[str] = [a.value for a in Assistant]

DEPLOYMENT_OPTIONS: list[str] = [d.value for d in DeploymentTarget]

BASE_IMAGE_OPTIONS: list[str] = [b.value for b in BaseImage]

ASSISTANT_COMMANDS: list[str] = [
    "scaffold", "build", "test", "deploy", "refactor", "debug", "optimize", "document",
]


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_PROJECT_TYPE = ProjectType.WEB_APP.value
DEFAULT_LANGUAGE = LANGUAGE_OPTIONS[0]
DEFAULT_FRAMEWORK = FRAMEWORK_OPTIONS[0]
DEFAULT_DESCRIPTION = "A new development project"
DEFAULT_ASSISTANT = Assistant.GEMINI.value
DEFAULT_COMMANDS = "scaffold,build,test"
DEFAULT_DEPLOYMENT = DeploymentTarget.DOCKER.value
DEFAULT_BASE_IMAGE = BaseImage.ALPINE.value
DEFAULT_REPO_NAME = "my-project"


RawAnswerValue = Union[str, bool]
RawAnswers = dict[str, RawAnswerValue]
"""Answer bag keyed by ``AnswerKey`` values. Produced once per run."""


# ---------------------------------------------------------------------------
# Resolved configuration
# ---------------------------------------------------------------------------

class ResolvedConfig(BaseModel):
    """Single source of truth for a generation run.

    Constructed once by ``build_config`` and frozen; later stages derive
    everything they need from it and never write back.
    """

    model_config = ConfigDict(frozen=True)

    project_type: ProjectType = Field(default=ProjectType.WEB_APP)
    project_type_label: str = Field(
        default=DEFAULT_PROJECT_TYPE,
        description="Display text, may be free text when the type is Other",
    )
    language: LanguageFamily = Field(default=LanguageFamily.JAVASCRIPT)
    language_label: str = Field(default=DEFAULT_LANGUAGE, description="Display text")
    framework: JavaFramework = Field(default=JavaFramework.NONE)
    description: str = Field(default=DEFAULT_DESCRIPTION)
    dependencies: tuple[str, ...] = Field(default=())
    workspace_mode: bool = Field(default=True, description="Generate an Nx workspace")
    preset_choice: Optional[str] = Field(
        default=None, description="Explicit workspace preset answer, if one was given"
    )
    assistant: Assistant = Field(default=Assistant.GEMINI)
    expected_commands: tuple[str, ...] = Field(default=("scaffold", "build", "test"))
    generate_scripts: bool = Field(default=True)
    include_docs: bool = Field(default=True)
    deployment_target: DeploymentTarget = Field(default=DeploymentTarget.DOCKER)
    deployment_label: str = Field(default=DEFAULT_DEPLOYMENT)
    container: bool = Field(default=True)
    base_image: BaseImage = Field(default=BaseImage.ALPINE)
    database: bool = Field(
        default=False,
        description="Database service requested; only honoured where offered",
    )
    repo_name: str = Field(default=DEFAULT_REPO_NAME)
    github_user: str = Field(default="")
    init_git: bool = Field(default=True)
    generate_readme: bool = Field(default=True)
    setup_versioning: bool = Field(default=True)
