"""Tests for the command-line entry point (project_wizard.wizard)."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from project_wizard.scaffolder import GenerationError, GenerationReport
from project_wizard.wizard import _next_steps, _summary, main


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


@pytest.fixture
def wizard_env(tmp_path: Path, monkeypatch) -> Path:
    """Offline settings through the environment, output under ``tmp_path``."""
    monkeypatch.setenv("WIZARD_RUN_GENERATORS", "no")
    monkeypatch.setenv("WIZARD_OUTPUT_DIR", str(tmp_path))
    git = AsyncMock(return_value=(0, "", ""))
    with patch("project_wizard.scaffolder.repo_gen.run_command", new=git):
        yield tmp_path


# ---------------------------------------------------------------------------
# main()
# ---------------------------------------------------------------------------


class TestMain:
    def test_flag_run(self, wizard_env, capsys):
        main(["--python", "--no-nx", "--name", "demo"])
        root = wizard_env / "demo"
        assert (root / "devbox.json").is_file()
        assert (root / "src" / "main.py").is_file()
        out = capsys.readouterr().out
        assert "Project 'demo' created" in out
        assert "devbox shell" in out

    def test_output_flag_overrides_environment(self, wizard_env, tmp_path_factory):
        elsewhere = tmp_path_factory.mktemp("elsewhere")
        main(["--rust", "--name", "tool", "-o", str(elsewhere)])
        assert (elsewhere / "tool" / "devbox.json").is_file()
        assert not (wizard_env / "tool").exists()

    def test_interactive_run(self, wizard_env):
        with patch("project_wizard.wizard.collect_answers", return_value={}) as collect:
            main([])
        collect.assert_called_once_with()
        assert (wizard_env / "my-project" / "nx.json").is_file()

    def test_help_exits_zero(self, wizard_env, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["--help"])
        assert excinfo.value.code == 0
        assert "--spring-boot" in capsys.readouterr().out

    def test_conflict_exits_two(self, wizard_env, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["--docker", "--no-docker"])
        assert excinfo.value.code == 2
        assert "mutually exclusive" in capsys.readouterr().out
        assert list(wizard_env.iterdir()) == []

    def test_missing_value_exits_two(self, wizard_env):
        with pytest.raises(SystemExit) as excinfo:
            main(["--name"])
        assert excinfo.value.code == 2

    def test_interrupt_exits_130(self, wizard_env):
        with patch("project_wizard.wizard.collect_answers", side_effect=KeyboardInterrupt):
            with pytest.raises(SystemExit) as excinfo:
                main([])
        assert excinfo.value.code == 130
        assert list(wizard_env.iterdir()) == []

    def test_generation_failure_exits_one(self, wizard_env, capsys):
        failing = AsyncMock(side_effect=GenerationError("Could not write devbox.json: denied"))
        with patch("project_wizard.wizard.ProjectGenerator.generate", new=failing):
            with pytest.raises(SystemExit) as excinfo:
                main(["--react"])
        assert excinfo.value.code == 1
        assert "Generation failed" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# Summary output
# ---------------------------------------------------------------------------


class TestSummary:
    def test_workspace_summary(self, default_context, tmp_path):
        report = GenerationReport(project_root=tmp_path, files=[Path("nx.json")], git_initialized=True)
        data = _summary(default_context, report)
        assert data["Port"] == "3001"
        assert data["Layout"] == "Nx workspace (JavaScript/TypeScript library)"
        assert data["App scaffold"] == "static"
        assert data["Git"] == "initialised"
        assert data["Files written"] == "1"

    def test_plain_summary(self, python_context, tmp_path):
        data = _summary(python_context, GenerationReport(project_root=tmp_path))
        assert data["Layout"] == "Devbox only"
        assert data["Database"] == "PostgreSQL"
        assert "App scaffold" not in data

    def test_next_steps(self, python_context, tmp_path):
        steps = _next_steps(python_context, GenerationReport(project_root=tmp_path))
        assert f"cd {tmp_path}" in steps
        assert "# serves on port 8001" in steps
        assert "./scripts/install-gemini.sh && gemini" in steps

    def test_next_steps_without_assistant(self, make_context, tmp_path):
        steps = _next_steps(make_context(assistant="None"), GenerationReport(project_root=tmp_path))
        assert "install-" not in steps
