"""
pkgstrap package

This package implements a CLI-first scaffolder for new npm/TypeScript packages.

Key responsibilities are split across modules:
- `descriptor.py`: validate CLI input into a typed `PackageDescriptor`
- `config.py`: tool configuration (license text, manifest defaults, shared config root)
- `tree.py`: the declarative file tree (`Leaf` / `Directory`)
- `renderer.py`: pure rendering of a descriptor into a file tree
- `materializer.py`: writing a file tree to disk and linking shared config
- `cli.py`: CLI entrypoint and orchestration (validate -> render -> write -> link)
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
