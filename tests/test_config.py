"""Unit tests for WizardConfig and ToolTimeouts (project_wizard.config).

Tests cover:
- Defaults
- project_path
- from_env (every recognised variable)
- Validation of timeout bounds
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from project_wizard.config import ToolTimeouts, WizardConfig


# ---------------------------------------------------------------------------
# ToolTimeouts
# ---------------------------------------------------------------------------


class TestToolTimeouts:
    @pytest.mark.unit
    def test_defaults(self):
        timeouts = ToolTimeouts()
        assert timeouts.install == 600
        assert timeouts.generator == 300
        assert timeouts.git == 60

    @pytest.mark.unit
    def test_rejects_tiny_timeouts(self):
        with pytest.raises(ValidationError):
            ToolTimeouts(install=1)


# ---------------------------------------------------------------------------
# WizardConfig
# ---------------------------------------------------------------------------


class TestWizardConfig:
    @pytest.mark.unit
    def test_defaults(self):
        config = WizardConfig()
        assert config.output_dir == Path(".")
        assert config.run_generators is True
        assert config.nx_version == "^19.0.0"
        assert isinstance(config.timeouts, ToolTimeouts)

    @pytest.mark.unit
    def test_project_path(self, tmp_path):
        config = WizardConfig(output_dir=tmp_path)
        assert config.project_path("demo") == tmp_path / "demo"

    @pytest.mark.unit
    def test_from_env_empty(self):
        with patch.dict("os.environ", {}, clear=True):
            config = WizardConfig.from_env()
        assert config == WizardConfig()

    @pytest.mark.unit
    def test_from_env_reads_all_variables(self, tmp_path):
        env = {
            "WIZARD_OUTPUT_DIR": str(tmp_path),
            "WIZARD_RUN_GENERATORS": "no",
            "WIZARD_NX_VERSION": "^20.1.0",
            "WIZARD_GIT_AUTHOR_NAME": "Ada",
            "WIZARD_GIT_AUTHOR_EMAIL": "ada@example.com",
            "WIZARD_INSTALL_TIMEOUT": "120",
            "WIZARD_GENERATOR_TIMEOUT": "90",
            "WIZARD_GIT_TIMEOUT": "15",
        }
        with patch.dict("os.environ", env, clear=True):
            config = WizardConfig.from_env()

        assert config.output_dir == tmp_path
        assert config.run_generators is False
        assert config.nx_version == "^20.1.0"
        assert config.git_author_name == "Ada"
        assert config.git_author_email == "ada@example.com"
        assert config.timeouts == ToolTimeouts(install=120, generator=90, git=15)

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["1", "true", "YES", " on "])
    def test_run_generators_truthy_values(self, value):
        with patch.dict("os.environ", {"WIZARD_RUN_GENERATORS": value}, clear=True):
            assert WizardConfig.from_env().run_generators is True
