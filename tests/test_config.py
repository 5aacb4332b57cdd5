from __future__ import annotations

from pathlib import Path

import pytest

from pkgstrap.config import DEFAULT_MANIFEST, DEFAULT_PACKAGE_ROOT, load_config
from pkgstrap.errors import ConfigError


def test_default_config_reads_bundled_license(tool_config):
    assert tool_config.package_root == DEFAULT_PACKAGE_ROOT
    assert tool_config.license_text == (DEFAULT_PACKAGE_ROOT / "LICENSE").read_text(encoding="utf-8")
    assert tool_config.default_version == "0.0.1"
    assert tool_config.manifest_defaults == DEFAULT_MANIFEST
    assert set(tool_config.shared_links) == {"tsconfig.json", "tsconfig"}


def test_bundled_shared_config_exists(tool_config):
    assert (tool_config.shared_dir / "tsconfig.json").is_file()
    assert (tool_config.shared_dir / "tsconfig").is_dir()


def test_yaml_overrides(tmp_path: Path, package_root: Path, license_text: str):
    cfg = tmp_path / "tool.yaml"
    cfg.write_text(
        "\n".join(
            [
                f"package_root: {package_root}",
                "default_version: 1.0.0",
                "copyright_notice: Copyright (c) 2024 Example Ltd.",
                "manifest:",
                "  author: Example Ltd",
                "  scripts:",
                "    test: jest",
                "",
            ]
        ),
        encoding="utf-8",
    )
    config = load_config(cfg)

    assert config.package_root == package_root.resolve()
    assert config.license_text == license_text
    assert config.default_version == "1.0.0"
    assert config.copyright_notice == "Copyright (c) 2024 Example Ltd."
    assert config.manifest_defaults["author"] == "Example Ltd"
    assert config.manifest_defaults["license"] == "MIT"
    assert config.manifest_defaults["scripts"] == {
        "prepublishOnly": "tsc-mjs -b tsconfig.json --force",
        "test": "jest",
    }


def test_overrides_do_not_leak_into_defaults(config_file: Path):
    config = load_config(config_file)
    config.manifest_defaults["scripts"]["extra"] = "x"
    assert "extra" not in DEFAULT_MANIFEST["scripts"]


def test_relative_package_root_resolves_against_config_dir(tmp_path: Path, package_root: Path):
    cfg = tmp_path / "tool.yaml"
    cfg.write_text("package_root: tooling\n", encoding="utf-8")
    assert load_config(cfg).package_root == package_root.resolve()


def test_missing_config_file(tmp_path: Path):
    with pytest.raises(ConfigError, match="does not exist"):
        load_config(tmp_path / "nope.yaml")


def test_non_mapping_yaml(tmp_path: Path):
    cfg = tmp_path / "tool.yaml"
    cfg.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="mapping"):
        load_config(cfg)


def test_unknown_keys(tmp_path: Path):
    cfg = tmp_path / "tool.yaml"
    cfg.write_text("colour: blue\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="colour"):
        load_config(cfg)


def test_missing_license(tmp_path: Path):
    root = tmp_path / "empty-root"
    root.mkdir()
    cfg = tmp_path / "tool.yaml"
    cfg.write_text(f"package_root: {root}\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="license"):
        load_config(cfg)


@pytest.mark.parametrize("key", ["name", "version", "description"])
def test_manifest_cannot_override_package_fields(tmp_path: Path, package_root: Path, key: str):
    cfg = tmp_path / "tool.yaml"
    cfg.write_text(f"package_root: {package_root}\nmanifest:\n  {key}: other\n", encoding="utf-8")
    with pytest.raises(ConfigError, match=key):
        load_config(cfg)


def test_non_utf8_config_file(tmp_path: Path):
    cfg = tmp_path / "tool.yaml"
    cfg.write_bytes(b"default_version: \xff\xfe\n")
    with pytest.raises(ConfigError, match="UTF-8"):
        load_config(cfg)


def test_non_utf8_license(tmp_path: Path, config_file: Path, package_root: Path):
    (package_root / "LICENSE").write_bytes(b"\xff\xfe not text\n")
    with pytest.raises(ConfigError, match="UTF-8"):
        load_config(config_file)


def test_crlf_license_is_read_unchanged(config_file: Path, package_root: Path):
    (package_root / "LICENSE").write_bytes(b"MIT License\r\n\r\nCopyright\r\n")
    assert load_config(config_file).license_text == "MIT License\r\n\r\nCopyright\r\n"
