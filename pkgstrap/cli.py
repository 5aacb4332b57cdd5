"""
cli.py

Responsibility: CLI entrypoint for pkgstrap.

High-level flow (single command):
1) Load tool configuration -> `ToolConfig`
2) Validate arguments -> `PackageDescriptor`
3) Render the package skeleton -> `Directory`
4) Check the output location is free, write the tree
5) Link shared build configuration into the new package

This module should orchestrate behavior but keep concerns isolated:
- Configuration: `config.py`
- Validation: `descriptor.py`
- Rendering: `renderer.py`
- Filesystem writes: `materializer.py`
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import NoReturn

from pkgstrap import __version__
from pkgstrap.config import load_config
from pkgstrap.descriptor import build_descriptor
from pkgstrap.errors import DescriptorError, PkgstrapError, UsageError
from pkgstrap.materializer import ensure_absent, link_shared_config, materialize, shared_link_targets
from pkgstrap.renderer import render_package
from pkgstrap.tree import Directory, iter_tree

logger = logging.getLogger(__name__)

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s | %(message)s",
        stream=sys.stderr,
        force=True,
    )


def _print_plan(tree: Directory, out_dir: str, links: dict[str, str]) -> None:
    print(f"{out_dir}/")
    for rel, node in iter_tree(tree):
        suffix = "" if not isinstance(node, Directory) else "/"
        print(f"  {rel}{suffix}")
    for link_name, rel in links.items():
        print(f"  {link_name} -> {rel}")


def bootstrap_cmd(args: argparse.Namespace) -> int:
    config = load_config(args.config)

    descriptor = build_descriptor(
        args.name,
        scope=args.scope,
        version=args.version,
        description=args.description,
        default_version=config.default_version,
    )
    if not args.out_dir:
        raise DescriptorError("You haven't provided an output directory.")

    tree = render_package(descriptor, config)
    target = ensure_absent(args.out_dir)

    if args.dry_run:
        _print_plan(tree, str(target), shared_link_targets(target, config))
        return 0

    logger.info("Bootstrapping %s@%s into %s", descriptor.name, descriptor.version, target)
    materialize(tree, target)
    link_shared_config(target, config)
    return 0


class _ArgumentParser(argparse.ArgumentParser):
    """Raise instead of exiting with status 2, so usage errors exit like any other error."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        raise UsageError(message)


def _build_parser() -> argparse.ArgumentParser:
    p = _ArgumentParser(prog="pkgstrap", description="Bootstrap a new npm/TypeScript package")
    p.add_argument("out_dir", metavar="outDir", nargs="?", default=None, help="Output directory (must not exist)")
    p.add_argument("-n", "--name", default="", help="Package name (without scope)")
    p.add_argument("-s", "--scope", default="", help="Package scope; the final name becomes @<scope>/<name>")
    p.add_argument("-v", "--version", default="", help="Package version (default: 0.0.1)")
    p.add_argument("-d", "--description", default="", help='Package description (default: "<name> package")')

    p.add_argument("--config", default=None, help="YAML file overriding tool defaults (license root, manifest fields)")
    p.add_argument("--dry-run", action="store_true", help="Print what would be created without writing anything")
    p.add_argument("--log-level", default="WARNING", type=str.upper, choices=_LOG_LEVELS, help="Logging level (default: WARNING)")
    p.add_argument("--tool-version", action="version", version=f"%(prog)s {__version__}")

    p.set_defaults(func=bootstrap_cmd)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    _configure_logging(args.log_level)
    try:
        return int(args.func(args))
    except (PkgstrapError, OSError, UnicodeError) as e:
        logger.debug("Bootstrap failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
