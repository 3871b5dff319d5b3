"""Resolved context: every derived fact for a run, computed once.

``resolve_context`` runs the profile, preset/service, identity/port and
toolchain stages in dependency order and bundles their outputs.  Artifact
generators receive a ``ResolvedContext`` and nothing else.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from ..answers.models import Assistant, DeploymentTarget, ResolvedConfig
from .identity import PortAssignment, ProjectIdentity, allocate_ports, derive_identity
from .presets import PresetDescriptor, ServicePlan, plan_services, resolve_preset
from .profile import LanguageProfile, resolve_profile
from .toolchain import Toolchain, derive_toolchain


@dataclass(frozen=True)
class ResolvedContext:
    """Frozen bundle handed to the artifact composer."""

    config: ResolvedConfig
    profile: LanguageProfile
    preset: PresetDescriptor
    services: ServicePlan
    identity: ProjectIdentity
    ports: PortAssignment
    toolchain: Toolchain
    warnings: tuple[str, ...] = field(default=())

    @property
    def slug(self) -> str:
        return self.identity.slug

    @property
    def port(self) -> int:
        """The application port. The only port any artifact mentions."""
        return self.ports.application_port

    @property
    def workspace_mode(self) -> bool:
        return self.config.workspace_mode

    @property
    def database(self) -> bool:
        return self.services.database_enabled

    @property
    def has_assistant(self) -> bool:
        return self.config.assistant != Assistant.NONE

    @property
    def kubernetes(self) -> bool:
        return (
            self.config.container
            and self.config.deployment_target == DeploymentTarget.KUBERNETES
        )


def resolve_context(
    config: ResolvedConfig,
    warn: Optional[Callable[[str], None]] = None,
) -> ResolvedContext:
    """Derive the full context from a ``ResolvedConfig``.

    Soft fallbacks (unknown preset, database not offered) are reported
    through *warn* and collected on ``ResolvedContext.warnings``.
    """
    collected: list[str] = []

    def _warn(message: str) -> None:
        collected.append(message)
        if warn is not None:
            warn(message)

    profile = resolve_profile(config.language, config.framework)
    preset = resolve_preset(config, profile, _warn)
    services = plan_services(config, preset, profile, _warn)
    identity = derive_identity(config.repo_name, config.github_user)
    # Preset ports only apply to a workspace; a plain project uses family defaults.
    ports = allocate_ports(profile, preset if config.workspace_mode else None)
    toolchain = derive_toolchain(
        profile,
        preset,
        identity,
        workspace_mode=config.workspace_mode,
        container=config.container,
        database=services.database_enabled,
        assistant=config.assistant,
        base_image=config.base_image,
        dependencies=config.dependencies,
    )
    return ResolvedContext(
        config=config,
        profile=profile,
        preset=preset,
        services=services,
        identity=identity,
        ports=ports,
        toolchain=toolchain,
        warnings=tuple(collected),
    )
