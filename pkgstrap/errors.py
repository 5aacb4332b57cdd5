"""
errors.py

Exception hierarchy shared by all pkgstrap modules. Everything derives from
`PkgstrapError` so the CLI can convert failures into a single exit code.
"""

from __future__ import annotations


class PkgstrapError(RuntimeError):
    pass


class DescriptorError(PkgstrapError):
    """Invalid package name/scope/version/description input."""


class ConfigError(PkgstrapError):
    pass


class RenderError(PkgstrapError):
    pass


class DestinationExistsError(PkgstrapError):
    """Something already exists at the output location."""


class UsageError(PkgstrapError):
    """Unrecognized or malformed command-line arguments."""
