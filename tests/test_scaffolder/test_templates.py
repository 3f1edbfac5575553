"""Tests for the Jinja2 root-file renderer."""

from __future__ import annotations

import pytest
from jinja2 import UndefinedError

from create_monorepo.scaffolder.root_gen import IGNORE_ENTRIES
from create_monorepo.scaffolder.templates import TemplateRenderer

pytestmark = pytest.mark.unit


class TestTemplateRenderer:
    def test_gitignore(self):
        out = TemplateRenderer().render("gitignore.j2", {"ignore_entries": IGNORE_ENTRIES})
        assert out.splitlines() == IGNORE_ENTRIES

    def test_workspace_file(self):
        out = TemplateRenderer().render(
            "workspace.yaml.j2", {"member_globs": ["apps/*", "packages/*"]}
        )
        assert out == "packages:\n  - 'apps/*'\n  - 'packages/*'\n"

    def test_missing_variable_raises(self):
        with pytest.raises(UndefinedError):
            TemplateRenderer().render("gitignore.j2", {})

    @pytest.mark.asyncio
    async def test_render_to_file(self, tmp_path, write_tree):
        write_tree(tmp_path / "tpl", {"hello.txt.j2": "Hello {{ name }}!\n"})
        renderer = TemplateRenderer(tmp_path / "tpl")
        out = await renderer.render_to_file("hello.txt.j2", tmp_path / "out" / "hello.txt", {"name": "acme"})
        assert out.read_text() == "Hello acme!\n"
