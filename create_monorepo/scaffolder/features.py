"""Feature composition.

Each selected feature copies its fragment tree from
``<templates_root>/features/<name>/`` into the workspace root (later features
overwrite earlier ones) and merges its dependency and script tables into the
root manifest.  The ``changesets`` feature additionally gets a
``.changeset/config.json``.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from ..config import ScaffoldConfig
from ..utils import print_step, save_json
from .materializer import copy_tree
from .models import RootManifest, ScaffoldOptions
from .root_gen import write_manifest

CHANGESET_DIR = ".changeset"


def changeset_config() -> dict[str, Any]:
    """The ``.changeset/config.json`` document."""
    return {
        "$schema": "https://unpkg.com/@changesets/config@2.3.0/schema.json",
        "changelog": "@changesets/cli/changelog",
        "commit": False,
        "fixed": [],
        "linked": [],
        "access": "public",
        "baseBranch": "main",
        "updateInternalDependencies": "patch",
        "ignore": [],
    }


class FeatureComposer:
    """Applies the selected features to a scaffolded workspace."""

    def __init__(self, config: ScaffoldConfig) -> None:
        self.config = config

    async def apply(
        self,
        destination_root: str | Path,
        options: ScaffoldOptions,
        templates_root: str | Path,
        manifest: RootManifest,
    ) -> RootManifest:
        """Apply features in selection order and finalise ``package.json``.

        With no features selected nothing is written, so the manifest already
        on disk stays final.
        """
        if not options.selected_features:
            return manifest

        root = Path(destination_root)
        features_root = Path(templates_root) / self.config.features_dir

        for feature in options.selected_features:
            print_step(f"Adding {feature}...")
            fragment = features_root / feature
            if fragment.is_dir():
                await asyncio.to_thread(copy_tree, fragment, root, self.config)
            self.merge_feature(manifest, feature)

        versioning = self.config.features.versioning_feature
        if options.has_feature(versioning):
            await save_json(changeset_config(), root / CHANGESET_DIR / "config.json")

        await write_manifest(root, manifest)
        return manifest

    def merge_feature(self, manifest: RootManifest, feature: str) -> None:
        """Merge one feature's tables; unknown features merge nothing."""
        deps = self.config.features.dependencies.get(feature)
        if deps:
            manifest.merge_dev_dependencies(deps)
        scripts = self.config.features.scripts.get(feature)
        if scripts:
            manifest.merge_scripts(scripts)
