"""Main scaffolding orchestrator.

Runs the root generator, materialises each selected template in order, then
applies the selected features.  Steps are strictly sequential: the root must
exist before templates land in it, and the manifest must exist before
features merge into it.
"""

from __future__ import annotations

from pathlib import Path

from ..config import ScaffoldConfig
from ..utils import console, print_warning, run_command
from .errors import InstallError
from .features import FeatureComposer
from .materializer import materialize
from .models import RootManifest, ScaffoldOptions
from .root_gen import RootGenerator
from .templates import TemplateRenderer


class MonorepoGenerator:
    """Scaffolds a workspace from a ``ScaffoldOptions`` answer set.

    Given the templates root the generator produces:
    - ``apps/`` and ``packages/`` with one directory per selected template
    - root ``package.json``, workspace file, ``.gitignore`` and ``README.md``
    - ``docker-compose.yml`` when an application template is selected
    - feature fragments and the ``.changeset/`` config
    """

    def __init__(self, config: ScaffoldConfig, templates_root: str | Path) -> None:
        self.config = config
        self.templates_root = Path(templates_root)
        self.renderer = TemplateRenderer()
        self.root_gen = RootGenerator(config, self.renderer)
        self.feature_composer = FeatureComposer(config)

    # -- Public API --------------------------------------------------------

    async def generate(self, target_dir: str | Path, options: ScaffoldOptions) -> RootManifest:
        """Generate the complete workspace in *target_dir*.

        Returns:
            The final root manifest.

        Raises:
            CopyError: If any template or feature tree cannot be copied.
        """
        root = Path(target_dir)

        # 1. Root files and the provisional manifest
        manifest = await self.root_gen.generate(root, options, self.templates_root)

        # 2. Templates, one at a time
        if options.selected_templates:
            console.print("\n[bold blue]Creating from templates...[/bold blue]")
            for template in options.selected_templates:
                await materialize(root, template, options, self.config)
        else:
            print_warning("No templates selected, creating empty monorepo structure")

        # 3. Features (final manifest write)
        if options.selected_features:
            console.print("\n[bold blue]Adding features...[/bold blue]")
        return await self.feature_composer.apply(
            root, options, self.templates_root, manifest
        )


async def install_dependencies(target_dir: str | Path, config: ScaffoldConfig) -> None:
    """Run the package manager's install command in *target_dir*.

    Raises:
        InstallError: If the command cannot be spawned or exits non-zero.
    """
    cmd = config.package_manager.install_command()
    console.print("\n[bold blue]Installing dependencies...[/bold blue]")
    try:
        returncode, _, stderr = await run_command(
            cmd, cwd=target_dir, timeout=None, capture=False
        )
    except OSError as exc:
        raise InstallError(f"Could not run {' '.join(cmd)}: {exc}") from exc
    if returncode != 0:
        raise InstallError(
            f"{' '.join(cmd)} exited with code {returncode}{': ' + stderr if stderr else ''}",
            returncode=returncode,
        )
