"""
materializer.py

Responsibility: Write a rendered file tree to disk and link shared build config.

Rules:
- Refuse to run if anything already exists at the target (checked before any write).
- Files are created exclusively and written verbatim (UTF-8, line endings untouched).
- Filesystem errors propagate unchanged; a partially written tree is left in place.

Shared configuration is linked, not copied: each link stores a path relative to
the new package directory so the package can be moved together with its siblings.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from pkgstrap.config import ToolConfig
from pkgstrap.errors import DestinationExistsError
from pkgstrap.tree import Directory, Leaf

logger = logging.getLogger(__name__)


def ensure_absent(target: str | Path) -> Path:
    path = Path(os.path.normpath(target))
    # lexists: a dangling symlink still occupies the name.
    if os.path.lexists(path):
        raise DestinationExistsError(f"There exists a file or directory at the output location: {path}")
    return path


def _write_dir(directory: Directory, dst_dir: Path) -> None:
    for name, node in directory.entries.items():
        dst_path = dst_dir / name
        if isinstance(node, Leaf):
            with open(dst_path, "x", encoding="utf-8", newline="") as fh:
                fh.write(node.content)
            logger.info("wrote %s", dst_path)
        else:
            dst_path.mkdir()
            logger.info("created %s/", dst_path)
            _write_dir(node, dst_path)


def materialize(tree: Directory, target: str | Path) -> Path:
    """
    Create `target` and write `tree` beneath it, depth-first in entry order.

    The parent of `target` must already exist. Returns the normalized target path.
    """
    path = ensure_absent(target)
    path.mkdir()
    logger.info("created %s/", path)
    _write_dir(tree, path)
    return path


def shared_link_targets(target: str | Path, config: ToolConfig) -> dict[str, str]:
    """
    Map link name -> symlink value (shared path relative to `target`).
    """
    base = os.path.realpath(target)
    return {
        link_name: os.path.relpath(os.path.normpath(config.shared_dir / entry), base)
        for link_name, entry in config.shared_links.items()
    }


def link_shared_config(target: str | Path, config: ToolConfig) -> list[Path]:
    """
    Create one symlink per configured shared entry directly inside `target`.

    A link whose destination does not exist is still created (with a warning).
    """
    base = Path(os.path.normpath(target))
    created: list[Path] = []
    for link_name, rel in shared_link_targets(base, config).items():
        link_path = base / link_name
        source = config.shared_dir / config.shared_links[link_name]
        os.symlink(rel, link_path, target_is_directory=source.is_dir())
        if not source.exists():
            logger.warning("Shared config %s does not exist; %s is a dangling link", source, link_path)
        else:
            logger.info("linked %s -> %s", link_path, rel)
        created.append(link_path)
    return created
