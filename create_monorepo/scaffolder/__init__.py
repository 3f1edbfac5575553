"""create-monorepo scaffolder -- materialises a pnpm workspace from templates.

Quick usage::

    from create_monorepo.config import ScaffoldConfig
    from create_monorepo.scaffolder import MonorepoGenerator, ScaffoldOptions, discover

    config = ScaffoldConfig()
    templates = await discover("templates", config)
    options = ScaffoldOptions(
        project_name="demo",
        namespace_prefix="@acme",
        selected_templates=tuple(t for t in templates if t.is_default_selected),
        selected_features=("eslint", "changesets"),
    )
    manifest = await MonorepoGenerator(config, "templates").generate("demo", options)
"""

from create_monorepo.scaffolder.discovery import discover
from create_monorepo.scaffolder.errors import (
    CopyError,
    DiscoveryError,
    InstallError,
    MetadataParseError,
    ScaffoldError,
    SubstitutionReadError,
)
from create_monorepo.scaffolder.features import FeatureComposer
from create_monorepo.scaffolder.generator import MonorepoGenerator, install_dependencies
from create_monorepo.scaffolder.materializer import materialize
from create_monorepo.scaffolder.models import (
    RootManifest,
    ScaffoldOptions,
    TemplateCategory,
    TemplateDescriptor,
)
from create_monorepo.scaffolder.root_gen import RootGenerator
from create_monorepo.scaffolder.substitution import rewrite_references

__all__ = [
    "CopyError",
    "DiscoveryError",
    "FeatureComposer",
    "InstallError",
    "MetadataParseError",
    "MonorepoGenerator",
    "RootGenerator",
    "RootManifest",
    "ScaffoldError",
    "ScaffoldOptions",
    "SubstitutionReadError",
    "TemplateCategory",
    "TemplateDescriptor",
    "discover",
    "install_dependencies",
    "materialize",
    "rewrite_references",
]
