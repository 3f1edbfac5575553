"""Root scaffold generation.

Creates ``apps/`` and ``packages/``, builds the root manifest, and writes the
workspace file, ``package.json``, ``.gitignore``, ``README.md``, an optional
``docker-compose.yml`` and the base ``.env.example``.  The ``package.json``
written here is provisional: the feature composer rewrites it when any
feature is selected.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path
from typing import Any

from ..config import ScaffoldConfig
from ..utils import ensure_dir, save_json
from .docker_gen import DockerGenerator
from .models import RootManifest, ScaffoldOptions
from .templates import TemplateRenderer

IGNORE_ENTRIES: list[str] = [
    "node_modules",
    "dist",
    "build",
    ".next",
    "*.log",
    ".env*.local",
    ".DS_Store",
    "coverage",
]

DOCKER_SCRIPTS: dict[str, str] = {
    "docker:up": "docker-compose up",
    "docker:up:build": "docker-compose up --build",
    "docker:down": "docker-compose down",
    "docker:logs": "docker-compose logs -f",
}

MANIFEST_FILENAME = "package.json"


class RootGenerator:
    """Writes the root-level files of a new workspace."""

    def __init__(self, config: ScaffoldConfig, renderer: TemplateRenderer | None = None) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()
        self.docker_gen = DockerGenerator(self.renderer, config)

    async def generate(
        self,
        destination_root: str | Path,
        options: ScaffoldOptions,
        templates_root: str | Path | None = None,
    ) -> RootManifest:
        """Generate the root scaffold and return the in-progress manifest."""
        root = Path(destination_root)
        await asyncio.to_thread(ensure_dir, root / self.config.apps_dir)
        await asyncio.to_thread(ensure_dir, root / self.config.packages_dir)

        manifest = self.build_manifest(options)
        context = self._build_context(options)

        await self.renderer.render_to_file(
            "workspace.yaml.j2", root / self.config.package_manager.workspace_file, context
        )
        await write_manifest(root, manifest)

        if templates_root is not None:
            await self._copy_env_example(Path(templates_root), root)

        await self.docker_gen.generate(root, options)

        await self.renderer.render_to_file("gitignore.j2", root / ".gitignore", context)
        await self.renderer.render_to_file("README.md.j2", root / "README.md", context)
        return manifest

    # -- Manifest ----------------------------------------------------------

    def build_manifest(self, options: ScaffoldOptions) -> RootManifest:
        """Base scripts plus app, database and docker scripts for the selection."""
        pm = self.config.package_manager
        scripts: dict[str, str] = dict(pm.base_scripts)

        app_templates = options.app_templates
        for template in app_templates:
            scripts[f"dev:{template.name}"] = pm.filter_command(
                options.member_name(template.name), "dev"
            )
        if len(app_templates) > 1:
            scripts["dev:apps"] = pm.parallel_filter_command(
                [options.member_name(t.name) for t in app_templates], "dev"
            )

        database = self.config.database_template
        if options.has_template(database):
            member = options.member_name(database)
            scripts["db:generate"] = pm.filter_command(member, "db:generate")
            scripts["db:migrate"] = pm.filter_command(member, "db:migrate")
            scripts["migrate"] = pm.filter_command(member, "migrate")

        if app_templates:
            scripts.update(DOCKER_SCRIPTS)

        return RootManifest(
            name=options.project_name,
            scripts=scripts,
            devDependencies=dict(pm.base_dev_dependencies),
            workspaces=self.config.member_globs,
        )

    # -- Helpers -----------------------------------------------------------

    def _build_context(self, options: ScaffoldOptions) -> dict[str, Any]:
        return {
            "project_name": options.project_name,
            "pm": self.config.package_manager.name,
            "templates": list(options.selected_templates),
            "app_templates": options.app_templates,
            "apps_dir": self.config.apps_dir,
            "packages_dir": self.config.packages_dir,
            "member_globs": self.config.member_globs,
            "ignore_entries": IGNORE_ENTRIES,
        }

    async def _copy_env_example(self, templates_root: Path, root: Path) -> None:
        source = templates_root / self.config.base_dir / ".env.example"
        if source.is_file():
            await asyncio.to_thread(shutil.copyfile, source, root / ".env.example")


async def write_manifest(root: Path, manifest: RootManifest) -> Path:
    """Serialise *manifest* to ``<root>/package.json``."""
    return await save_json(manifest.to_json(), root / MANIFEST_FILENAME)
