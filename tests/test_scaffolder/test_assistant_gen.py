"""Tests for coding-assistant artifacts (project_wizard.scaffolder.assistant_gen)."""

from __future__ import annotations

import json
import os

import pytest

from project_wizard.scaffolder.assistant_gen import AssistantGenerator, assistant_config


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


@pytest.fixture
def assistant_gen(renderer) -> AssistantGenerator:
    return AssistantGenerator(renderer)


class TestAssistantConfig:
    def test_workspace_document(self, default_context):
        document = assistant_config(default_context)
        assert document["assistant"] == "Gemini CLI"
        assert document["port"] == default_context.port
        assert document["workspace"]["app"] == "apps/my-project"
        assert document["commands"]["build"] == "npx nx run-many -t build"

    def test_plain_document(self, python_context):
        document = assistant_config(python_context)
        assert "workspace" not in document
        assert document["packageManager"] == "pip"
        assert document["project"]["slug"] == "data-service"


class TestAssistantGenerator:
    @pytest.mark.asyncio
    async def test_gemini_files(self, assistant_gen, tmp_path, default_context):
        paths = await assistant_gen.generate(tmp_path, default_context)
        assert paths == [
            tmp_path / ".gemini.json",
            tmp_path / "scripts" / "install-gemini.sh",
            tmp_path / "docs" / "ASSISTANT_USAGE.md",
        ]
        assert json.loads((tmp_path / ".gemini.json").read_text())["language"] == "JavaScript/TypeScript"
        script = (tmp_path / "scripts" / "install-gemini.sh").read_text()
        assert "npm install -g @google/gemini-cli" in script
        assert '"${GEMINI_API_KEY:-}"' in script
        assert os.access(tmp_path / "scripts" / "install-gemini.sh", os.X_OK)

    @pytest.mark.asyncio
    async def test_claude_without_docs(self, assistant_gen, tmp_path, make_context):
        ctx = make_context(assistant="Claude Code", include_docs=False)
        paths = await assistant_gen.generate(tmp_path, ctx)
        assert [p.name for p in paths] == [".claude.json", "install-claude.sh"]
        assert not (tmp_path / ".gemini.json").exists()
        assert not (tmp_path / "docs").exists()

    @pytest.mark.asyncio
    async def test_usage_doc_lists_commands(self, assistant_gen, tmp_path, make_context):
        ctx = make_context(expected_commands="build,debug")
        await assistant_gen.generate(tmp_path, ctx)
        usage = (tmp_path / "docs" / "ASSISTANT_USAGE.md").read_text()
        assert "| build | npx nx run-many -t build |" in usage
        assert "| debug |" in usage

    @pytest.mark.asyncio
    async def test_no_assistant_writes_nothing(self, assistant_gen, tmp_path, make_context):
        assert await assistant_gen.generate(tmp_path, make_context(assistant="None")) == []
        assert list(tmp_path.iterdir()) == []
