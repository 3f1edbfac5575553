"""Copy one template into the workspace and normalise its namespace."""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

from ..config import ScaffoldConfig
from ..utils import is_dir_empty, print_step
from .errors import CopyError
from .models import ScaffoldOptions, TemplateDescriptor
from .substitution import rewrite_references


def destination_for(
    workspace_root: Path, template: TemplateDescriptor, config: ScaffoldConfig
) -> Path:
    """``apps/<name>`` for applications, ``packages/<name>`` for everything else."""
    category_dir = config.apps_dir if template.is_application else config.packages_dir
    return workspace_root / category_dir / template.name


async def materialize(
    workspace_root: str | Path,
    template: TemplateDescriptor,
    options: ScaffoldOptions,
    config: ScaffoldConfig,
) -> Path:
    """Copy *template* into the workspace and rewrite placeholder tokens.

    Both placeholder tokens (distribution and development mode) are replaced
    with ``options.namespace_prefix``.

    Returns:
        The destination directory.

    Raises:
        CopyError: If the destination is non-empty or the copy fails.
    """
    dest = destination_for(Path(workspace_root), template, config)
    print_step(f"Creating {template.name} ({template.category.value})...")

    await asyncio.to_thread(_copy_template, template.source_path, dest, config)

    prefix = options.namespace_prefix.rstrip("/") + "/"
    substitutions = [(token, prefix) for token in config.placeholder_tokens]
    await rewrite_references(dest, substitutions, config)
    return dest


def copy_tree(
    src: Path, dest: Path, config: ScaffoldConfig, exclude_files: tuple[str, ...] = ()
) -> None:
    """Recursively copy *src* into *dest*, merging with existing content.

    Ignored directories (``node_modules``, ``.git``) and any file named in
    *exclude_files* are skipped.  Empty directories are preserved.

    Raises:
        CopyError: On any filesystem failure.
    """
    ignore = shutil.ignore_patterns(*config.ignored_dirs, *exclude_files)
    try:
        shutil.copytree(src, dest, ignore=ignore, dirs_exist_ok=True)
    except (OSError, shutil.Error) as exc:
        raise CopyError(f"Failed to copy {src} to {dest}: {exc}", dest) from exc


def _copy_template(src: Path, dest: Path, config: ScaffoldConfig) -> None:
    if dest.exists() and (not dest.is_dir() or not is_dir_empty(dest)):
        raise CopyError(f"Destination {dest} already exists and is not empty", dest)
    if not src.is_dir():
        raise CopyError(f"Template source {src} is not a directory", src)
    copy_tree(src, dest, config, exclude_files=(config.metadata_filename,))
