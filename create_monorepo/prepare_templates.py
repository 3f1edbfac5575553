"""Repackage the development template tree for distribution.

Copies ``templates/`` into ``create_monorepo/bundled_templates/`` and rewrites
the development placeholder ``@template/`` to the distribution placeholder
``@workspace/``.

Usage::

    python -m create_monorepo.prepare_templates
    python -m create_monorepo.prepare_templates --source ./templates --dest ./dist/templates
"""

from __future__ import annotations

import argparse
import asyncio
import shutil
import sys
from pathlib import Path

from .config import BUNDLED_TEMPLATES_DIR, DEV_TEMPLATES_DIR, ScaffoldConfig
from .scaffolder.errors import ScaffoldError
from .scaffolder.materializer import copy_tree
from .scaffolder.substitution import rewrite_references
from .utils import console, print_error, print_success


async def prepare_templates(
    source_root: str | Path, dist_root: str | Path, config: ScaffoldConfig
) -> list[Path]:
    """Replace *dist_root* with a copy of *source_root* using distribution tokens.

    Returns:
        Files whose placeholder tokens were rewritten.

    Raises:
        CopyError: If *source_root* cannot be copied.
    """
    source = Path(source_root)
    dest = Path(dist_root)
    if dest.exists():
        await asyncio.to_thread(shutil.rmtree, dest)
    await asyncio.to_thread(copy_tree, source, dest, config)
    return await rewrite_references(dest, [(config.dev_token, config.dist_token)], config)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``create-monorepo-prepare-templates``."""
    parser = argparse.ArgumentParser(description="Prepare templates for distribution")
    parser.add_argument("--source", type=Path, default=DEV_TEMPLATES_DIR)
    parser.add_argument("--dest", type=Path, default=BUNDLED_TEMPLATES_DIR)
    args = parser.parse_args(argv)

    console.print("[bold blue]Preparing templates for distribution...[/bold blue]")
    try:
        rewritten = asyncio.run(prepare_templates(args.source, args.dest, ScaffoldConfig()))
    except (ScaffoldError, OSError) as exc:
        print_error(f"Error preparing templates: {exc}")
        sys.exit(1)
    print_success(f"Templates prepared successfully! ({len(rewritten)} files rewritten)")


if __name__ == "__main__":
    main()
