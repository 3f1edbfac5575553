"""Template discovery.

Every immediate subdirectory of the templates root (except the reserved
``base`` and ``features`` directories) is a template.  An optional
``template.json`` inside it overrides the directory-derived defaults::

    {"name": "web", "type": "app", "description": "Web app", "default": true}
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

from ..config import ScaffoldConfig
from ..utils import print_warning
from .errors import DiscoveryError, MetadataParseError
from .models import TemplateCategory, TemplateDescriptor


async def discover(templates_root: str | Path, config: ScaffoldConfig) -> list[TemplateDescriptor]:
    """Scan *templates_root* and return one descriptor per template directory.

    Order follows directory enumeration and is only meaningful for display.

    Raises:
        DiscoveryError: If *templates_root* cannot be listed.
    """
    root = Path(templates_root)
    try:
        entries = await asyncio.to_thread(lambda: list(root.iterdir()))
    except OSError as exc:
        raise DiscoveryError(f"Cannot read templates directory {root}: {exc}", root) from exc

    templates: list[TemplateDescriptor] = []
    for entry in entries:
        if not entry.is_dir() or entry.name in config.reserved_template_dirs:
            continue

        metadata: dict[str, Any] = {}
        try:
            metadata = await asyncio.to_thread(
                read_metadata, entry / config.metadata_filename
            )
        except MetadataParseError:
            print_warning(
                f"Warning: Invalid {config.metadata_filename} in {entry.name}, using defaults"
            )

        templates.append(_build_descriptor(entry, metadata))

    return templates


def read_metadata(path: Path) -> dict[str, Any]:
    """Read a metadata file; a missing file yields an empty dict.

    Raises:
        MetadataParseError: If the file exists but is not a JSON object.
    """
    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise MetadataParseError(f"Invalid metadata in {path}: {exc}", path) from exc
    if not isinstance(data, dict):
        raise MetadataParseError(f"Metadata in {path} is not an object", path)
    return data


def _build_descriptor(template_dir: Path, metadata: dict[str, Any]) -> TemplateDescriptor:
    # Missing or falsy fields fall back to the directory-derived default.
    dir_name = template_dir.name
    return TemplateDescriptor(
        name=str(metadata.get("name") or dir_name),
        category=_parse_category(metadata.get("type")),
        description=str(metadata.get("description") or dir_name),
        is_default_selected=bool(metadata.get("default") or False),
        source_path=template_dir,
    )


def _parse_category(value: Any) -> TemplateCategory:
    if value in ("app", "application"):
        return TemplateCategory.APPLICATION
    return TemplateCategory.LIBRARY
