"""Tests for template discovery.

Covers:
- Reserved directories are skipped
- template.json fields and fallbacks
- Missing and malformed metadata
- Unreadable templates root
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from create_monorepo.scaffolder.discovery import discover, read_metadata
from create_monorepo.scaffolder.errors import DiscoveryError, MetadataParseError
from create_monorepo.scaffolder.models import TemplateCategory

pytestmark = pytest.mark.unit


def _by_name(templates):
    return {t.name: t for t in templates}


class TestDiscover:
    @pytest.mark.asyncio
    async def test_finds_template_directories(self, templates_root, config):
        templates = await discover(templates_root, config)
        assert set(_by_name(templates)) == {"web", "server", "database", "logger"}

    @pytest.mark.asyncio
    async def test_reserved_directories_are_skipped(self, templates_root, config):
        names = {t.name for t in await discover(templates_root, config)}
        assert "base" not in names
        assert "features" not in names

    @pytest.mark.asyncio
    async def test_plain_files_are_ignored(self, templates_root, config):
        (templates_root / "README.md").write_text("# templates\n", encoding="utf-8")
        names = {t.name for t in await discover(templates_root, config)}
        assert "README.md" not in names

    @pytest.mark.asyncio
    async def test_metadata_fields_are_read(self, templates_root, config):
        web = _by_name(await discover(templates_root, config))["web"]
        assert web.category is TemplateCategory.APPLICATION
        assert web.description == "React web app"
        assert web.is_default_selected is True
        assert web.source_path == templates_root / "web"

    @pytest.mark.asyncio
    async def test_missing_metadata_uses_directory_defaults(self, templates_root, config):
        logger = _by_name(await discover(templates_root, config))["logger"]
        assert logger.name == "logger"
        assert logger.category is TemplateCategory.LIBRARY
        assert logger.description == "logger"
        assert logger.is_default_selected is False

    @pytest.mark.asyncio
    async def test_missing_name_field_falls_back_to_directory(self, templates_root, config):
        database = _by_name(await discover(templates_root, config))["database"]
        assert database.description == "Drizzle database"
        assert database.category is TemplateCategory.LIBRARY

    @pytest.mark.asyncio
    async def test_falsy_fields_fall_back(self, tmp_path, config, write_tree):
        write_tree(tmp_path, {
            "ui/template.json": json.dumps({"name": "", "type": None, "description": ""}),
        })
        (ui,) = await discover(tmp_path, config)
        assert ui.name == "ui"
        assert ui.description == "ui"
        assert ui.category is TemplateCategory.LIBRARY

    @pytest.mark.asyncio
    async def test_malformed_metadata_warns_and_uses_defaults(self, tmp_path, config, write_tree):
        write_tree(tmp_path, {"broken/template.json": "{ not json"})
        with patch("create_monorepo.scaffolder.discovery.print_warning") as warn:
            (broken,) = await discover(tmp_path, config)
        assert broken.name == "broken"
        assert broken.category is TemplateCategory.LIBRARY
        warn.assert_called_once()
        assert "broken" in warn.call_args.args[0]

    @pytest.mark.asyncio
    async def test_non_object_metadata_is_malformed(self, tmp_path, config, write_tree):
        write_tree(tmp_path, {"listy/template.json": "[1, 2, 3]"})
        with patch("create_monorepo.scaffolder.discovery.print_warning") as warn:
            (listy,) = await discover(tmp_path, config)
        assert listy.name == "listy"
        warn.assert_called_once()

    @pytest.mark.asyncio
    async def test_empty_root_yields_empty_list(self, tmp_path, config):
        assert await discover(tmp_path, config) == []

    @pytest.mark.asyncio
    async def test_missing_root_raises_discovery_error(self, tmp_path, config):
        with pytest.raises(DiscoveryError):
            await discover(tmp_path / "does-not-exist", config)


class TestReadMetadata:
    def test_missing_file_returns_empty(self, tmp_path):
        assert read_metadata(tmp_path / "template.json") == {}

    def test_valid_file(self, tmp_path):
        path = tmp_path / "template.json"
        path.write_text('{"name": "web"}', encoding="utf-8")
        assert read_metadata(path) == {"name": "web"}

    def test_invalid_file_raises(self, tmp_path):
        path = tmp_path / "template.json"
        path.write_text("nope", encoding="utf-8")
        with pytest.raises(MetadataParseError) as exc_info:
            read_metadata(path)
        assert exc_info.value.path == Path(path)
