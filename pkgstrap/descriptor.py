"""
descriptor.py

Responsibility: Turn raw CLI input into a validated, typed `PackageDescriptor`.

Validation happens exactly once, here, before anything touches the filesystem.
The renderer treats the resulting descriptor as the single source of truth.
"""

from __future__ import annotations

from dataclasses import dataclass

from pkgstrap.errors import DescriptorError

DEFAULT_VERSION = "0.0.1"


@dataclass(frozen=True)
class PackageDescriptor:
    """Final package name (possibly scoped), version and description."""

    name: str
    version: str
    description: str


def scoped_name(name: str, scope: str = "") -> str:
    """
    Combine a bare name with an optional scope into `@scope/name`.

    A leading `@` on the scope is accepted, so `acme` and `@acme` are equivalent.
    """
    scope = (scope or "").strip().lstrip("@")
    if not scope:
        return name
    return f"@{scope}/{name}"


def build_descriptor(
    name: str | None,
    scope: str | None = "",
    version: str | None = "",
    description: str | None = "",
    *,
    default_version: str = DEFAULT_VERSION,
) -> PackageDescriptor:
    """
    Validate inputs and apply defaults:
    - name: required, non-empty
    - version: falls back to `default_version` when empty
    - description: falls back to "<final name> package" when empty
    """
    bare = (name or "").strip()
    if not bare:
        raise DescriptorError(
            "You haven't provided a package name, so I cannot bootstrap a new package for you."
        )

    final_name = scoped_name(bare, scope or "")
    return PackageDescriptor(
        name=final_name,
        version=version if version else default_version,
        description=description if description else f"{final_name} package",
    )
