"""Literal placeholder substitution across a copied tree.

Only files whose extension is in ``ScaffoldConfig.text_extensions`` are
candidates.  ``node_modules`` and ``.git`` directories are pruned before
descending.  A file is written back only when its content changed, so a
second pass over an already-rewritten tree performs no writes.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from pathlib import Path

from ..config import ScaffoldConfig
from ..utils import print_warning
from .errors import SubstitutionReadError

Substitution = tuple[str, str]


async def rewrite_references(
    root_dir: str | Path,
    substitutions: Sequence[Substitution],
    config: ScaffoldConfig,
) -> list[Path]:
    """Apply every ``(from_token, to_token)`` pair to the text files under *root_dir*.

    Files that cannot be read as text or written back, and directories that
    cannot be listed, are skipped with a warning.

    Returns:
        Paths of the files that were rewritten.
    """
    rewritten: list[Path] = []
    candidates = await asyncio.to_thread(iter_text_files, Path(root_dir), config)
    for path in candidates:
        try:
            changed = await asyncio.to_thread(_rewrite_file, path, substitutions)
        except SubstitutionReadError as exc:
            print_warning(f"    Skipping {path.name} ({exc})")
            continue
        if changed:
            rewritten.append(path)
    return rewritten


def iter_text_files(root: Path, config: ScaffoldConfig) -> list[Path]:
    """Return substitution candidates under *root*, pruning ignored directories."""
    extensions = set(config.text_extensions)
    ignored = set(config.ignored_dirs)
    found: list[Path] = []
    stack = [root]
    while stack:
        current = stack.pop()
        try:
            entries = sorted(current.iterdir())
        except OSError as exc:
            print_warning(f"    Skipping {current.name}/ (unreadable: {exc.strerror or exc})")
            continue
        for entry in entries:
            if entry.is_dir() and not entry.is_symlink():
                if entry.name not in ignored:
                    stack.append(entry)
            elif entry.is_file() and entry.suffix in extensions:
                found.append(entry)
    return found


def substitute(content: str, substitutions: Sequence[Substitution]) -> str:
    """Replace all occurrences of each token, in order."""
    for old, new in substitutions:
        content = content.replace(old, new)
    return content


def _rewrite_file(path: Path, substitutions: Sequence[Substitution]) -> bool:
    content = _read_text(path)
    updated = substitute(content, substitutions)
    if updated == content:
        return False
    try:
        path.write_bytes(updated.encode("utf-8"))
    except OSError as exc:
        raise SubstitutionReadError(f"unwritable: {exc.strerror or exc}", path) from exc
    return True


def _read_text(path: Path) -> str:
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise SubstitutionReadError(f"unreadable: {exc.strerror or exc}", path) from exc
    if b"\x00" in raw:
        raise SubstitutionReadError("not a text file", path)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise SubstitutionReadError("not a text file", path) from exc
