"""
config.py

Responsibility: Load the tool configuration once at process start.

The resulting `ToolConfig` is passed explicitly to the renderer and the
materializer; nothing reads configuration from module globals.

Defaults point at the data directory shipped inside the package:
- `<package_root>/LICENSE`: canonical license text copied into every package
- `<package_root>/shared/`: build configuration linked into every package

An optional YAML file can override the defaults:

    package_root: ../my-monorepo
    default_version: 1.0.0
    copyright_notice: Copyright (c) 2024 Example Ltd. All rights reserved.
    manifest:
      author: Example Ltd
      scripts:
        test: jest
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from pkgstrap.descriptor import DEFAULT_VERSION
from pkgstrap.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_PACKAGE_ROOT = Path(__file__).resolve().parent / "data"

DEFAULT_MANIFEST: dict[str, Any] = {
    "author": "Automorph Ltd (https://www.automorph.com)",
    "license": "MIT",
    "browser": "lib/index.js",
    "main": "lib/index",
    "module": "lib/index.mjs",
    "typings": "lib/index.d.ts",
    "scripts": {
        "prepublishOnly": "tsc-mjs -b tsconfig.json --force",
    },
}

DEFAULT_COPYRIGHT = "Copyright (c) 2018 Automorph Ltd. All rights reserved."

# link name inside the new package -> path under <package_root>/shared
DEFAULT_SHARED_LINKS: dict[str, str] = {
    "tsconfig.json": "tsconfig.json",
    "tsconfig": "tsconfig",
}

_KNOWN_KEYS = {"package_root", "default_version", "copyright_notice", "manifest"}
# Owned by the descriptor, never by static manifest defaults.
_DESCRIPTOR_KEYS = {"name", "version", "description"}


@dataclass(frozen=True)
class ToolConfig:
    """Static inputs shared by every invocation of the scaffolder."""

    package_root: Path
    license_text: str
    default_version: str = DEFAULT_VERSION
    copyright_notice: str = DEFAULT_COPYRIGHT
    manifest_defaults: dict[str, Any] = field(default_factory=lambda: _copy_manifest(DEFAULT_MANIFEST))
    shared_links: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_SHARED_LINKS))

    @property
    def shared_dir(self) -> Path:
        return self.package_root / "shared"


def _copy_manifest(manifest: dict[str, Any]) -> dict[str, Any]:
    return {k: dict(v) if isinstance(v, dict) else v for k, v in manifest.items()}


def _merge_manifest(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """
    Merge manifest overrides one level deep: nested mappings (e.g. `scripts`)
    are merged by key, everything else replaces the default.
    """
    merged = _copy_manifest(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = {**merged[key], **value}
        else:
            merged[key] = value
    return merged


def _read_license(package_root: Path) -> str:
    license_path = package_root / "LICENSE"
    try:
        # Bytes as-is: CRLF line endings must survive into generated packages.
        return license_path.read_bytes().decode("utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read canonical license file: {license_path}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"Canonical license file is not valid UTF-8: {license_path}") from e


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Config file does not exist: {path}")
    try:
        data = yaml.safe_load(path.read_bytes().decode("utf-8")) or {}
    except UnicodeDecodeError as e:
        raise ConfigError(f"Config file is not valid UTF-8: {path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Config file is not valid YAML: {path}") from e
    if not isinstance(data, dict):
        raise ConfigError("Config file must be a mapping/object at the top level.")
    unknown = sorted(set(map(str, data)) - _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
    return data


def load_config(path: str | Path | None = None) -> ToolConfig:
    """
    Build the `ToolConfig`, optionally overridden by a YAML file.

    The license text is read here, once, so later stages never touch it on disk.
    A relative `package_root` is resolved against the YAML file's directory.
    """
    data: dict[str, Any] = {}
    base_dir = Path.cwd()
    if path is not None:
        cfg_path = Path(path).resolve()
        data = _load_yaml(cfg_path)
        base_dir = cfg_path.parent
        logger.debug("Loaded config overrides from %s", cfg_path)

    package_root = DEFAULT_PACKAGE_ROOT
    if data.get("package_root"):
        package_root = (base_dir / str(data["package_root"])).resolve()

    manifest_raw = data.get("manifest") or {}
    if not isinstance(manifest_raw, dict):
        raise ConfigError("`manifest` must be an object/mapping when provided.")
    reserved = sorted(_DESCRIPTOR_KEYS & set(map(str, manifest_raw)))
    if reserved:
        raise ConfigError(f"`manifest` must not override package fields: {', '.join(reserved)}")

    default_version = str(data.get("default_version") or DEFAULT_VERSION).strip()
    copyright_notice = str(data.get("copyright_notice") or DEFAULT_COPYRIGHT).strip()

    return ToolConfig(
        package_root=package_root,
        license_text=_read_license(package_root),
        default_version=default_version,
        copyright_notice=copyright_notice,
        manifest_defaults=_merge_manifest(DEFAULT_MANIFEST, manifest_raw),
    )
