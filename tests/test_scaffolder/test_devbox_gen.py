"""Tests for devbox.json generation (project_wizard.scaffolder.devbox_gen)."""

from __future__ import annotations

import json

import pytest

from project_wizard.resolver.toolchain import ALLOWED_SYSTEM_PACKAGES
from project_wizard.scaffolder.devbox_gen import DevboxGenerator


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


class TestDevboxDescriptor:
    def test_packages_are_allow_listed(self, python_context):
        descriptor = DevboxGenerator().build_descriptor(python_context)
        assert descriptor["packages"] == list(python_context.toolchain.system_packages)
        assert set(descriptor["packages"]) <= ALLOWED_SYSTEM_PACKAGES
        assert "left-pad" not in descriptor["packages"]

    def test_port_env(self, python_context):
        descriptor = DevboxGenerator().build_descriptor(python_context)
        assert descriptor["env"] == {"PORT": "8001"}

    def test_python_venv_hook(self, python_context):
        hooks = DevboxGenerator().build_descriptor(python_context)["shell"]["init_hook"]
        assert "test -d .venv || python3 -m venv .venv" in hooks

    def test_workspace_installs_node_modules(self, default_context):
        hooks = DevboxGenerator().build_descriptor(default_context)["shell"]["init_hook"]
        assert "test -d node_modules || npm install" in hooks

    def test_scripts(self, default_context):
        scripts = DevboxGenerator().build_descriptor(default_context)["shell"]["scripts"]
        assert scripts["dev"] == "npx nx serve my-project"
        assert scripts["install-gemini"] == "bash scripts/install-gemini.sh"

    def test_no_assistant_script(self, make_context):
        scripts = DevboxGenerator().build_descriptor(make_context(assistant="None"))["shell"]["scripts"]
        assert set(scripts) == {"dev", "build", "test"}

    @pytest.mark.asyncio
    async def test_generate_writes_json(self, tmp_path, default_context):
        path = await DevboxGenerator().generate(tmp_path, default_context)
        assert path == tmp_path / "devbox.json"
        document = json.loads(path.read_text())
        assert document["$schema"].endswith("devbox.schema.json")
        assert "git" in document["packages"]
