"""create-monorepo configuration.

Centralised, typed configuration for the scaffolder. All settings use
Pydantic v2 models so the fixed tables (text extensions, reserved directory
names, feature dependency/script maps, port table) are validated at
construction time and passed explicitly into each component instead of living
as module globals.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field

_PACKAGE_DIR = Path(__file__).parent

# Bundled templates written by ``create-monorepo-prepare-templates``.
BUNDLED_TEMPLATES_DIR = _PACKAGE_DIR / "bundled_templates"

# Development checkout: ``<repo>/templates`` next to the package.
DEV_TEMPLATES_DIR = _PACKAGE_DIR.parent / "templates"

# Every workspace prefix is a scope such as ``@acme``.
NAMESPACE_MARKER = "@"


class PackageManagerConfig(BaseModel):
    """Command shapes for the workspace package manager."""

    name: str = Field(default="pnpm")
    workspace_file: str = Field(default="pnpm-workspace.yaml")
    base_scripts: dict[str, str] = Field(
        default_factory=lambda: {
            "dev": "pnpm run --parallel dev",
            "build": "pnpm run -r build",
            "lint": "pnpm run -r lint",
            "test": "pnpm run -r test",
            "clean": "pnpm run -r clean",
        }
    )
    base_dev_dependencies: dict[str, str] = Field(
        default_factory=lambda: {"typescript": "^5.3.0"}
    )

    def filter_command(self, package: str, script: str) -> str:
        """Run *script* in one workspace member."""
        return f"{self.name} --filter {package} {script}"

    def parallel_filter_command(self, packages: list[str], script: str) -> str:
        """Run *script* in several workspace members in parallel."""
        filters = " ".join(f"--filter {p}" for p in packages)
        return f"{self.name} --parallel {filters} run {script}"

    def install_command(self) -> list[str]:
        return [self.name, "install"]


class FeatureOption(BaseModel):
    """A selectable feature shown in the interactive menu."""

    value: str
    title: str
    selected: bool = False


class FeatureConfig(BaseModel):
    """Static feature tables.

    Unknown feature names are valid: their fragment directory is copied but no
    dependency or script entries are merged.
    """

    available: list[FeatureOption] = Field(
        default_factory=lambda: [
            FeatureOption(value="eslint", title="ESLint", selected=True),
            FeatureOption(value="prettier", title="Prettier", selected=True),
            FeatureOption(value="changesets", title="Changesets (versioning)", selected=True),
            FeatureOption(value="husky", title="Husky (git hooks)"),
            FeatureOption(value="github-actions", title="GitHub Actions", selected=True),
        ]
    )
    dependencies: dict[str, dict[str, str]] = Field(
        default_factory=lambda: {
            "eslint": {
                "eslint": "^8.57.0",
                "@typescript-eslint/parser": "^6.21.0",
                "@typescript-eslint/eslint-plugin": "^6.21.0",
            },
            "prettier": {"prettier": "^3.2.0"},
            "changesets": {"@changesets/cli": "^2.27.0"},
            "husky": {"husky": "^9.0.0"},
        }
    )
    scripts: dict[str, dict[str, str]] = Field(
        default_factory=lambda: {
            "eslint": {
                "lint": "pnpm run -r lint",
                "lint:fix": "pnpm run -r lint:fix",
            },
            "prettier": {
                "format": "pnpm run -r format",
                "format:check": "pnpm run -r format:check",
            },
            "husky": {"prepare": "husky install"},
        }
    )
    versioning_feature: str = Field(
        default="changesets",
        description="Feature that also gets a .changeset/config.json",
    )

    def default_selection(self) -> list[str]:
        return [f.value for f in self.available if f.selected]


class ScaffoldConfig(BaseModel):
    """Global create-monorepo configuration.

    Instances are created once by the CLI (or by tests) and handed to every
    scaffolder component.
    """

    metadata_filename: str = Field(default="template.json")
    reserved_template_dirs: list[str] = Field(default=["base", "features"])
    base_dir: str = Field(default="base")
    features_dir: str = Field(default="features")
    ignored_dirs: list[str] = Field(default=["node_modules", ".git"])
    text_extensions: list[str] = Field(
        default=[
            ".json", ".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs", ".md",
            ".css", ".scss", ".sass", ".less",
        ]
    )

    dev_token: str = Field(default="@template/")
    dist_token: str = Field(default="@workspace/")

    apps_dir: str = Field(default="apps")
    packages_dir: str = Field(default="packages")
    database_template: str = Field(default="database")

    ports: dict[str, str] = Field(
        default_factory=lambda: {"web": "3000:3000", "server": "3001:3001"}
    )
    default_port: str = Field(default="3000:3000")

    package_manager: PackageManagerConfig = Field(default_factory=PackageManagerConfig)
    features: FeatureConfig = Field(default_factory=FeatureConfig)

    templates_dir: Path | None = Field(default=None)
    skip_install: bool = Field(default=False)

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def member_globs(self) -> list[str]:
        """Workspace membership globs, apps first."""
        return [f"{self.apps_dir}/*", f"{self.packages_dir}/*"]

    @property
    def placeholder_tokens(self) -> list[str]:
        """Tokens rewritten to the workspace prefix, distribution-mode first."""
        return [self.dist_token, self.dev_token]

    def port_for(self, template_name: str) -> str:
        return self.ports.get(template_name, self.default_port)

    @classmethod
    def from_env(cls) -> "ScaffoldConfig":
        """Build a ``ScaffoldConfig`` from environment variables.

        Recognised variables (all optional):
            CREATE_MONOREPO_TEMPLATES_DIR, CREATE_MONOREPO_SKIP_INSTALL.
        """
        kwargs: dict[str, object] = {}
        if os.environ.get("CREATE_MONOREPO_TEMPLATES_DIR"):
            kwargs["templates_dir"] = Path(os.environ["CREATE_MONOREPO_TEMPLATES_DIR"])
        skip = os.environ.get("CREATE_MONOREPO_SKIP_INSTALL", "")
        kwargs["skip_install"] = skip.strip().lower() in ("1", "true", "yes")
        return cls(**kwargs)


def resolve_templates_dir(config: ScaffoldConfig) -> Path:
    """Pick the templates root to scan.

    An explicit ``templates_dir`` wins. Otherwise a development checkout's
    ``templates/`` directory is preferred over the bundled copy.
    """
    if config.templates_dir is not None:
        return Path(config.templates_dir)
    if DEV_TEMPLATES_DIR.is_dir():
        return DEV_TEMPLATES_DIR
    return BUNDLED_TEMPLATES_DIR
