"""Shared pytest fixtures for the create-monorepo test suite.

Provides reusable fixtures for:
- A default ``ScaffoldConfig``
- A temporary templates root with app, package, base and feature directories
- Template descriptors and answer sets built from that tree
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from create_monorepo.config import ScaffoldConfig
from create_monorepo.scaffolder.models import (
    ScaffoldOptions,
    TemplateCategory,
    TemplateDescriptor,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def write_files(root: Path, files: dict[str, str | bytes]) -> None:
    """Create *files* (relative path -> content) under *root*."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")


def make_descriptor(
    templates_root: Path,
    name: str,
    category: TemplateCategory = TemplateCategory.LIBRARY,
    description: str | None = None,
) -> TemplateDescriptor:
    return TemplateDescriptor(
        name=name,
        category=category,
        description=description or f"{name} template",
        source_path=templates_root / name,
    )


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

@pytest.fixture
def config() -> ScaffoldConfig:
    """Default configuration."""
    return ScaffoldConfig()


# ---------------------------------------------------------------------------
# Templates tree
# ---------------------------------------------------------------------------

@pytest.fixture
def templates_root(tmp_path: Path) -> Path:
    """A templates root resembling the bundled one.

    - ``web``: app template using the development placeholder
    - ``server``: app template using the distribution placeholder
    - ``database``: package template with a migration Dockerfile
    - ``logger``: package template without ``template.json``
    - ``base``: reserved, holds ``.env.example``
    - ``features``: reserved, holds eslint/husky/github-actions fragments
    """
    root = tmp_path / "templates"
    write_files(root, {
        "web/template.json": json.dumps({
            "name": "web", "type": "app", "description": "React web app", "default": True,
        }),
        "web/package.json": json.dumps({
            "name": "@template/web",
            "dependencies": {"@template/contract": "workspace:*"},
        }, indent=2),
        "web/src/main.tsx": "import { api } from '@template/contract';\n",
        "web/src/styles.css": "/* @template/web styles */\n",
        "web/Dockerfile": "FROM node:20-alpine\n",
        "web/public/logo.png": b"\x89PNG\r\n\x1a\n\x00\x00@template/",
        "server/template.json": json.dumps({
            "name": "server", "type": "app", "description": "API server",
        }),
        "server/package.json": json.dumps({"name": "@workspace/server"}, indent=2),
        "server/src/index.ts": "import { db } from '@workspace/database';\n",
        "database/template.json": json.dumps({
            "type": "package", "description": "Drizzle database", "default": True,
        }),
        "database/package.json": json.dumps({"name": "@template/database"}, indent=2),
        "database/Dockerfile.migrate": "FROM node:20-alpine\n",
        "logger/src/index.ts": "export const logger = console;\n",
        "base/.env.example": "DATABASE_URL=postgresql://localhost:5432/myapp\n",
        "features/eslint/.eslintrc.json": json.dumps({"root": True}),
        "features/husky/.husky/pre-commit": "pnpm lint\n",
        "features/github-actions/.github/workflows/ci.yml": "name: CI\n",
        "features/prettier/.prettierrc": '{"semi": true}\n',
    })
    (root / "database" / "migrations").mkdir()
    return root


@pytest.fixture
def web_template(templates_root: Path) -> TemplateDescriptor:
    return make_descriptor(templates_root, "web", TemplateCategory.APPLICATION, "React web app")


@pytest.fixture
def server_template(templates_root: Path) -> TemplateDescriptor:
    return make_descriptor(templates_root, "server", TemplateCategory.APPLICATION, "API server")


@pytest.fixture
def database_template(templates_root: Path) -> TemplateDescriptor:
    return make_descriptor(templates_root, "database", TemplateCategory.LIBRARY, "Drizzle database")


@pytest.fixture
def logger_template(templates_root: Path) -> TemplateDescriptor:
    return make_descriptor(templates_root, "logger", TemplateCategory.LIBRARY, "logger")


@pytest.fixture
def demo_options(web_template, database_template) -> ScaffoldOptions:
    """The web + database + changesets answer set."""
    return ScaffoldOptions(
        project_name="demo",
        namespace_prefix="@acme",
        selected_templates=(web_template, database_template),
        selected_features=("changesets",),
    )


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Empty destination directory for a generated workspace."""
    root = tmp_path / "workspace"
    root.mkdir()
    return root


@pytest.fixture
def write_tree():
    """The ``write_files`` helper, for tests that build their own trees."""
    return write_files


@pytest.fixture
def descriptor_factory():
    """The ``make_descriptor`` helper."""
    return make_descriptor
