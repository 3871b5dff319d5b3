"""Project Wizard resolution stages.

Derives every fact a generation run needs from a ``ResolvedConfig``, in
dependency order:

    LanguageProfile   - closed-set language family and Java sub-framework
    PresetDescriptor  - workspace preset metadata, plus the ServicePlan
    ProjectIdentity   - slug and host-language identifiers
    PortAssignment    - the single application port
    Toolchain         - package manager, commands, images, system packages

``resolve_context`` runs them all and returns the ``ResolvedContext`` the
scaffolder consumes.
"""

from .context import ResolvedContext, resolve_context
from .identity import PortAssignment, ProjectIdentity, allocate_ports, derive_identity, slugify
from .presets import (
    PRESETS,
    PresetDescriptor,
    PresetKind,
    ServicePlan,
    database_offered,
    lookup_preset,
    presets_for,
    resolve_preset,
)
from .profile import LanguageProfile, detect_language, resolve_profile
from .toolchain import CommandSet, ContainerPlan, Toolchain, derive_toolchain

__all__ = [
    # Context
    "ResolvedContext",
    "resolve_context",
    # Profile
    "LanguageProfile",
    "detect_language",
    "resolve_profile",
    # Presets & services
    "PRESETS",
    "PresetDescriptor",
    "PresetKind",
    "ServicePlan",
    "database_offered",
    "lookup_preset",
    "presets_for",
    "resolve_preset",
    # Identity & ports
    "PortAssignment",
    "ProjectIdentity",
    "allocate_ports",
    "derive_identity",
    "slugify",
    # Toolchain
    "CommandSet",
    "ContainerPlan",
    "Toolchain",
    "derive_toolchain",
]
