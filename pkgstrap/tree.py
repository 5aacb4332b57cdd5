"""
tree.py

Responsibility: Declarative, in-memory description of a package skeleton.

A tree is built once by the renderer, consumed once by the materializer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Iterator, Union


@dataclass(frozen=True)
class Leaf:
    """A file with literal text content."""

    content: str


@dataclass(frozen=True)
class Directory:
    """A directory; entry order is the write order."""

    entries: dict[str, FileTreeNode] = field(default_factory=dict)


FileTreeNode = Union[Leaf, Directory]


def iter_tree(directory: Directory, prefix: PurePosixPath = PurePosixPath()) -> Iterator[tuple[PurePosixPath, FileTreeNode]]:
    """
    Yield `(relative_path, node)` pairs depth-first, pre-order, in write order.
    """
    for name, node in directory.entries.items():
        rel = prefix / name
        yield rel, node
        if isinstance(node, Directory):
            yield from iter_tree(node, rel)
