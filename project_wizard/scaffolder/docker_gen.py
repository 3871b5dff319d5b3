"""Container artifact generation.

Renders the Dockerfile, ``docker-compose.yml`` and ``.dockerignore`` (plus a
Kubernetes deployment for the Kubernetes target).  Every port in these files
is the context's application port.
"""

from __future__ import annotations

from pathlib import Path

from ..resolver.context import ResolvedContext
from .templates import TemplateRenderer, template_vars


class DockerGenerator:
    """Generates container files for the project root."""

    # Template name -> output file name
    _FILES: dict[str, str] = {
        "docker/Dockerfile.j2": "Dockerfile",
        "docker/docker-compose.yml.j2": "docker-compose.yml",
        "docker/dockerignore.j2": ".dockerignore",
    }

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    async def generate_all(self, project_root: Path, ctx: ResolvedContext) -> dict[str, Path]:
        """Write the container files to *project_root*.

        Returns:
            Mapping of output file name to written path, e.g.
            ``{"Dockerfile": Path(".../Dockerfile"), ...}``.
        """
        variables = template_vars(ctx)
        result: dict[str, Path] = {}
        for template_name, output_name in self._FILES.items():
            result[output_name] = await self.renderer.render_to_file(
                template_name, project_root / output_name, variables
            )
        if ctx.kubernetes:
            result["k8s/deployment.yaml"] = await self.generate_kubernetes(project_root, ctx)
        return result

    async def generate_kubernetes(self, project_root: Path, ctx: ResolvedContext) -> Path:
        """Write ``k8s/deployment.yaml`` (Deployment + Service)."""
        return await self.renderer.render_to_file(
            "docker/k8s-deployment.yaml.j2",
            project_root / "k8s" / "deployment.yaml",
            template_vars(ctx),
        )
