"""Tests for language-native manifests (project_wizard.scaffolder.manifest_gen)."""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET

import pytest

from project_wizard.scaffolder.manifest_gen import ManifestGenerator, manifest_name, package_json

POM_NS = {"m": "http://maven.apache.org/POM/4.0.0"}


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


@pytest.fixture
def manifest_gen(renderer) -> ManifestGenerator:
    return ManifestGenerator(renderer)


class TestManifestName:
    @pytest.mark.parametrize(
        "language, name",
        [
            ("JavaScript/TypeScript", "package.json"),
            ("Python", "requirements.txt"),
            ("Java", "pom.xml"),
            ("Rust", "Cargo.toml"),
            (".NET", "MyProject.csproj"),
            ("Elixir", None),
        ],
    )
    def test_names(self, make_context, language, name):
        assert manifest_name(make_context(language=language)) == name


class TestPackageJson:
    def test_dependencies(self, make_context):
        ctx = make_context(workspace_mode=False, dependencies="express,bad name", database=True,
                           project_type="API service")
        document = package_json(ctx)
        assert document["name"] == "my-project"
        assert document["dependencies"] == {"express": "latest", "pg": "^8.12.0"}
        assert document["scripts"]["start"] == "node src/index.js"


class TestManifestGenerator:
    @pytest.mark.asyncio
    async def test_requirements_take_raw_dependencies(self, manifest_gen, tmp_path, python_context):
        [path] = await manifest_gen.generate(tmp_path, python_context)
        lines = path.read_text().splitlines()
        assert "fastapi" in lines
        assert "ffmpeg-python" in lines
        assert "left-pad" in lines
        assert "psycopg[binary]" in lines
        assert "pytest" in lines

    @pytest.mark.asyncio
    async def test_pom_for_spring_boot(self, manifest_gen, tmp_path, make_context):
        ctx = make_context(language="Java", framework="Spring Boot", repo_name="demo",
                           github_user="acme", database=True, project_type="API service")
        [path] = await manifest_gen.generate(tmp_path, ctx)
        root = ET.parse(path).getroot()
        assert root.findtext("m:groupId", namespaces=POM_NS) == "com.acme"
        assert root.findtext("m:artifactId", namespaces=POM_NS) == "demo"
        artifacts = [a.text for a in root.iterfind(".//m:dependency/m:artifactId", POM_NS)]
        assert "spring-boot-starter-web" in artifacts
        assert "postgresql" in artifacts
        assert not any("quarkus" in a for a in artifacts)

    @pytest.mark.asyncio
    async def test_pom_for_quarkus(self, manifest_gen, tmp_path, make_context):
        ctx = make_context(language="Java", framework="Quarkus")
        [path] = await manifest_gen.generate(tmp_path, ctx)
        root = ET.parse(path).getroot()
        artifacts = [a.text for a in root.iterfind(".//m:dependency/m:artifactId", POM_NS)]
        assert "quarkus-rest" in artifacts
        assert not any("spring" in a for a in artifacts)

    @pytest.mark.asyncio
    async def test_cargo_toml(self, manifest_gen, tmp_path, make_context):
        ctx = make_context(language="Rust", repo_name="fast-cli", dependencies="serde,@bad/x",
                           description='Says "hi"')
        [path] = await manifest_gen.generate(tmp_path, ctx)
        text = path.read_text()
        assert 'name = "fast_cli"' in text
        assert '"serde" = "*"' in text
        assert "@bad/x" not in text
        assert 'description = "Says \\"hi\\""' in text

    @pytest.mark.asyncio
    async def test_csproj(self, manifest_gen, tmp_path, make_context):
        ctx = make_context(language=".NET", repo_name="orders-api", dependencies="Serilog")
        [path] = await manifest_gen.generate(tmp_path, ctx)
        assert path.name == "OrdersApi.csproj"
        root = ET.parse(path).getroot()
        assert root.findtext(".//RootNamespace") == "OrdersApi"
        includes = [r.get("Include") for r in root.iter("PackageReference")]
        assert includes == ["Serilog"]

    @pytest.mark.asyncio
    async def test_javascript_writes_package_json(self, manifest_gen, tmp_path, make_context):
        ctx = make_context(workspace_mode=False)
        [path] = await manifest_gen.generate(tmp_path, ctx)
        assert json.loads(path.read_text())["devDependencies"] == {"jest": "^29.7.0"}

    @pytest.mark.asyncio
    async def test_other_family_has_no_manifest(self, manifest_gen, tmp_path, make_context):
        assert await manifest_gen.generate(tmp_path, make_context(language="Elixir")) == []
