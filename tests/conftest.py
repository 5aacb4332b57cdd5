"""
Shared pytest fixtures: tool configurations backed by the bundled data
directory or by a throwaway package root under tmp_path.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from pkgstrap.config import ToolConfig, load_config

_LICENSE_TEXT = "Test License\n\nDo what you like.\n"


@pytest.fixture(autouse=True)
def _reset_root_logging():
    # cli.main() installs a stderr handler bound to the captured stream.
    root = logging.getLogger()
    before = list(root.handlers)
    yield
    for handler in list(root.handlers):
        if handler not in before:
            root.removeHandler(handler)


@pytest.fixture
def tool_config() -> ToolConfig:
    """The default configuration, using the data shipped inside the package."""
    return load_config()


@pytest.fixture
def license_text() -> str:
    """Canonical license text written into the throwaway package root."""
    return _LICENSE_TEXT


@pytest.fixture
def package_root(tmp_path: Path, license_text: str) -> Path:
    """A minimal package root: LICENSE plus shared/tsconfig.json and shared/tsconfig/."""
    root = tmp_path / "tooling"
    shared = root / "shared"
    (shared / "tsconfig").mkdir(parents=True)
    (shared / "tsconfig.json").write_text('{"extends": "./tsconfig/base.json"}\n', encoding="utf-8")
    (shared / "tsconfig" / "base.json").write_text("{}\n", encoding="utf-8")
    (root / "LICENSE").write_bytes(license_text.encode("utf-8"))
    return root


@pytest.fixture
def config_file(tmp_path: Path, package_root: Path) -> Path:
    path = tmp_path / "pkgstrap.yaml"
    path.write_text(f"package_root: {package_root}\n", encoding="utf-8")
    return path
