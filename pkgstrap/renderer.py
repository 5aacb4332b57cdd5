"""
renderer.py

Responsibility: Deterministically render a `PackageDescriptor` into a file tree.

Rules:
- Pure: no filesystem writes, same input -> same tree.
- Text templates live in `pkgstrap/templates` and are rendered with Jinja2
  (StrictUndefined, so a missing variable is an error rather than an empty string).
- The license text comes from `ToolConfig`, never from disk at this stage.

This module intentionally does NOT know about the target directory, symlinks, or CLI parsing.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from pkgstrap.config import ToolConfig
from pkgstrap.descriptor import PackageDescriptor
from pkgstrap.errors import RenderError
from pkgstrap.tree import Directory, Leaf

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

GITIGNORE_ENTRIES = ["lib"]
NPMIGNORE_ENTRIES = [
    ".gitignore",
    ".npmignore",
    "node_modules",
    "src",
    "tsconfig",
    "tsconfig.json",
]


def _environment(templates_dir: Path) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )


def _render(env: Environment, template_name: str, context: dict[str, Any]) -> str:
    try:
        return env.get_template(template_name).render(**context)
    except TemplateError as e:
        raise RenderError(f"Failed rendering template file: {template_name}") from e


def dot_file(entries: list[str]) -> str:
    """One path per line, newline-terminated."""
    return "\n".join(entries) + "\n"


def package_manifest(descriptor: PackageDescriptor, config: ToolConfig) -> dict[str, Any]:
    fields = {
        "name": descriptor.name,
        "version": descriptor.version,
        "description": descriptor.description,
    }
    # Descriptor fields first, then static metadata; the descriptor always wins.
    manifest = {**fields, **config.manifest_defaults}
    manifest.update(fields)
    return manifest


def render_manifest(descriptor: PackageDescriptor, config: ToolConfig) -> str:
    return json.dumps(package_manifest(descriptor, config), indent=2, ensure_ascii=False) + "\n"


def render_package(
    descriptor: PackageDescriptor,
    config: ToolConfig,
    *,
    templates_dir: str | Path = TEMPLATES_DIR,
) -> Directory:
    """
    Build the full package skeleton for `descriptor`.

    Layout (in write order):
    - src/index.ts
    - .gitignore, .npmignore
    - LICENSE
    - package.json
    - README.md
    """
    env = _environment(Path(templates_dir))
    context = {
        "name": descriptor.name,
        "version": descriptor.version,
        "description": descriptor.description,
        "license": config.manifest_defaults.get("license", ""),
        "copyright_notice": config.copyright_notice,
    }

    return Directory(
        {
            "src": Directory({"index.ts": Leaf(_render(env, "index.ts.j2", context))}),
            ".gitignore": Leaf(dot_file(GITIGNORE_ENTRIES)),
            ".npmignore": Leaf(dot_file(NPMIGNORE_ENTRIES)),
            "LICENSE": Leaf(config.license_text),
            "package.json": Leaf(render_manifest(descriptor, config)),
            "README.md": Leaf(_render(env, "README.md.j2", context)),
        }
    )
