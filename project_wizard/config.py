"""Project Wizard runtime configuration.

Settings that control *how* a generation run behaves (where projects are
written, whether external generators are invoked, timeouts) as opposed to
*what* gets generated, which comes from the user's answers.  All settings use
Pydantic v2 models so they are validated at construction time and can be read
from environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


_TRUTHY = {"1", "true", "yes", "on"}


class ToolTimeouts(BaseModel):
    """Timeouts (seconds) for the external tools a run may invoke."""

    install: int = Field(default=600, ge=10, description="npm install in a new workspace")
    generator: int = Field(default=300, ge=10, description="Nx code generator invocation")
    git: int = Field(default=60, ge=5, description="Each git command")


class WizardConfig(BaseModel):
    """Global Project Wizard configuration.

    Instances are created once by the CLI entry point and passed to the
    ``ProjectGenerator``.  Nothing here is persisted; every run is stateless.
    """

    output_dir: Path = Field(default=Path("."))
    run_generators: bool = Field(
        default=True,
        description="Invoke npm/Nx to generate richer workspace scaffolding",
    )
    nx_version: str = Field(default="^19.0.0")
    git_author_name: str = Field(default="Project Wizard")
    git_author_email: str = Field(default="wizard@localhost")
    timeouts: ToolTimeouts = Field(default_factory=ToolTimeouts)

    def project_path(self, slug: str) -> Path:
        """Directory a project with the given slug is generated into."""
        return self.output_dir / slug

    @classmethod
    def from_env(cls) -> "WizardConfig":
        """Build a ``WizardConfig`` from environment variables.

        Recognised variables (all optional):
            WIZARD_OUTPUT_DIR, WIZARD_RUN_GENERATORS, WIZARD_NX_VERSION,
            WIZARD_GIT_AUTHOR_NAME, WIZARD_GIT_AUTHOR_EMAIL,
            WIZARD_INSTALL_TIMEOUT, WIZARD_GENERATOR_TIMEOUT, WIZARD_GIT_TIMEOUT.
        """
        timeout_kwargs: dict[str, Any] = {}
        if os.environ.get("WIZARD_INSTALL_TIMEOUT"):
            timeout_kwargs["install"] = int(os.environ["WIZARD_INSTALL_TIMEOUT"])
        if os.environ.get("WIZARD_GENERATOR_TIMEOUT"):
            timeout_kwargs["generator"] = int(os.environ["WIZARD_GENERATOR_TIMEOUT"])
        if os.environ.get("WIZARD_GIT_TIMEOUT"):
            timeout_kwargs["git"] = int(os.environ["WIZARD_GIT_TIMEOUT"])

        kwargs: dict[str, Any] = {}
        if os.environ.get("WIZARD_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["WIZARD_OUTPUT_DIR"])
        if os.environ.get("WIZARD_RUN_GENERATORS"):
            kwargs["run_generators"] = (
                os.environ["WIZARD_RUN_GENERATORS"].strip().lower() in _TRUTHY
            )
        if os.environ.get("WIZARD_NX_VERSION"):
            kwargs["nx_version"] = os.environ["WIZARD_NX_VERSION"]
        if os.environ.get("WIZARD_GIT_AUTHOR_NAME"):
            kwargs["git_author_name"] = os.environ["WIZARD_GIT_AUTHOR_NAME"]
        if os.environ.get("WIZARD_GIT_AUTHOR_EMAIL"):
            kwargs["git_author_email"] = os.environ["WIZARD_GIT_AUTHOR_EMAIL"]

        return cls(timeouts=ToolTimeouts(**timeout_kwargs), **kwargs)
