"""Shared pytest fixtures for the Project Wizard test suite.

Provides reusable fixtures for:
- Temporary output directories
- Offline wizard settings (no npm/Nx invocations)
- Resolved contexts built from raw answer bags
- Mock subprocess helpers
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from project_wizard.answers.normalizer import build_config
from project_wizard.config import WizardConfig
from project_wizard.resolver.context import ResolvedContext, resolve_context
from project_wizard.scaffolder.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Temporary directory that generated projects are written into."""
    output_dir = tmp_path / "output"
    output_dir.mkdir()
    yield output_dir


# ---------------------------------------------------------------------------
# Settings & rendering
# ---------------------------------------------------------------------------

@pytest.fixture
def offline_settings(tmp_project_dir: Path) -> WizardConfig:
    """Settings that never shell out to npm or Nx."""
    return WizardConfig(output_dir=tmp_project_dir, run_generators=False)


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


# ---------------------------------------------------------------------------
# Resolved contexts
# ---------------------------------------------------------------------------

@pytest.fixture
def make_context() -> Callable[..., ResolvedContext]:
    """Factory building a ``ResolvedContext`` from raw answers.

    Usage:
        def test_java(make_context):
            ctx = make_context(language="Java", framework="Quarkus", repo_name="demo")
    """
    def factory(**answers: Any) -> ResolvedContext:
        return resolve_context(build_config(answers))

    return factory


@pytest.fixture
def default_context(make_context) -> ResolvedContext:
    """Context for an all-defaults run (JavaScript web app in a workspace)."""
    return make_context()


@pytest.fixture
def python_context(make_context) -> ResolvedContext:
    """Plain (non-workspace) Python API service with a database."""
    return make_context(
        project_type="API service",
        language="Python",
        workspace_mode=False,
        database=True,
        repo_name="Data Service",
        github_user="octo-cat",
        dependencies="fastapi,numpy,ffmpeg-python,left-pad",
    )


# ---------------------------------------------------------------------------
# Subprocess mocks
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory
