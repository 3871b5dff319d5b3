"""Generation outcome: the report model and the fatal error type."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class GenerationError(Exception):
    """A mandatory artifact could not be produced. Aborts the run."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        self.message = message
        self.path = path
        super().__init__(f"{message} ({path})" if path is not None else message)


class GenerationReport(BaseModel):
    """What a generation run wrote and which soft fallbacks it took."""

    project_root: Path
    files: list[Path] = Field(default_factory=list, description="Paths relative to project_root")
    warnings: list[str] = Field(default_factory=list)
    generator_used: bool = Field(
        default=False, description="The workspace code generator produced the app scaffold"
    )
    git_initialized: bool = Field(default=False)

    def add(self, *paths: Path) -> None:
        """Record written files (absolute or root-relative)."""
        for path in paths:
            try:
                rel = path.relative_to(self.project_root)
            except ValueError:
                rel = path
            if rel not in self.files:
                self.files.append(rel)

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def has(self, relative: str) -> bool:
        return Path(relative) in self.files
