"""Project identity and port allocation.

Derives the filesystem-safe slug, the host-language identifiers and the one
canonical network port for a run.  Every artifact that mentions a port reads
``PortAssignment.application_port``; nothing recomputes it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from ..answers.models import LanguageFamily
from .presets import PresetDescriptor
from .profile import LanguageProfile

DEFAULT_SLUG = "app"
DEFAULT_PORT = 3000

FAMILY_PORTS: dict[LanguageFamily, int] = {
    LanguageFamily.JAVASCRIPT: 3000,
    LanguageFamily.PYTHON: 8000,
    LanguageFamily.JAVA: 8080,
    LanguageFamily.RUST: 8000,
    LanguageFamily.DOTNET: 5000,
}


# ---------------------------------------------------------------------------
# Names
# ---------------------------------------------------------------------------

def slugify(name: str) -> str:
    """Convert a repository name to a filesystem/identifier-safe slug.

    * Lowercases the input.
    * Replaces runs of characters other than ``a-z``, ``0-9``, ``_`` and ``-``
      with a single hyphen.
    * Collapses consecutive hyphens and strips leading/trailing hyphens.
    * Falls back to ``"app"`` when nothing is left.

    The function is idempotent: ``slugify(slugify(x)) == slugify(x)``.

    Examples::

        slugify("My Cool Project!") -> "my-cool-project"
        slugify("  ***  ") -> "app"
    """
    result = re.sub(r"[^a-z0-9_-]+", "-", (name or "").lower())
    result = re.sub(r"-{2,}", "-", result)
    result = result.strip("-")
    return result or DEFAULT_SLUG


def _words(slug: str) -> list[str]:
    return [w for w in re.split(r"[-_]+", slug) if w]


def _pascal(slug: str) -> str:
    ident = "".join(w.capitalize() for w in _words(slug)) or "App"
    if ident[0].isdigit():
        ident = f"App{ident}"
    return ident


def _identifier(slug: str, sep: str) -> str:
    ident = sep.join(_words(slug)) or DEFAULT_SLUG
    if ident[0].isdigit():
        ident = f"{DEFAULT_SLUG}{sep}{ident}"
    return ident


@dataclass(frozen=True)
class ProjectIdentity:
    """Names derived from the repository name and GitHub handle."""

    slug: str
    python_module: str
    class_prefix: str
    java_package: str
    crate_name: str
    namespace: str

    @property
    def java_group(self) -> str:
        return self.java_package.rsplit(".", 1)[0]

    @property
    def java_package_path(self) -> str:
        return self.java_package.replace(".", "/")

    @property
    def java_class(self) -> str:
        return f"{self.class_prefix}Application"


def derive_identity(repo_name: str, github_user: str = "") -> ProjectIdentity:
    """Build every host-language identifier from one slug."""
    slug = slugify(repo_name)
    owner = re.sub(r"[^a-z0-9]", "", github_user.lower()) or "example"
    if owner[0].isdigit():
        owner = f"u{owner}"
    package_leaf = _identifier(slug, "")
    return ProjectIdentity(
        slug=slug,
        python_module=_identifier(slug, "_"),
        class_prefix=_pascal(slug),
        java_package=f"com.{owner}.{package_leaf}",
        crate_name=_identifier(slug, "_"),
        namespace=_pascal(slug),
    )


# ---------------------------------------------------------------------------
# Ports
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PortAssignment:
    """The base port for the stack and the port the application listens on."""

    base_port: int
    application_port: int


def base_port(profile: LanguageProfile, preset: Optional[PresetDescriptor]) -> int:
    """Base port: preset table, then language-family default, then 3000.

    *preset* is ``None`` outside workspace mode.
    """
    if preset is not None and preset.base_port is not None:
        return preset.base_port
    return FAMILY_PORTS.get(profile.family, DEFAULT_PORT)


def allocate_ports(
    profile: LanguageProfile, preset: Optional[PresetDescriptor]
) -> PortAssignment:
    """Allocate the single port assignment for a run."""
    base = base_port(profile, preset)
    return PortAssignment(base_port=base, application_port=base + 1)
