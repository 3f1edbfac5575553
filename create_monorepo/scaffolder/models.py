"""Pydantic models shared by the scaffolder components."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import NAMESPACE_MARKER


class TemplateCategory(str, Enum):
    """Where a template lands: ``apps/`` or ``packages/``.

    The values match the ``type`` field of ``template.json``.
    """

    APPLICATION = "app"
    LIBRARY = "package"


class TemplateDescriptor(BaseModel):
    """One discovered template directory."""

    model_config = ConfigDict(frozen=True)

    name: str
    category: TemplateCategory = TemplateCategory.LIBRARY
    description: str = ""
    is_default_selected: bool = False
    source_path: Path

    @property
    def is_application(self) -> bool:
        return self.category is TemplateCategory.APPLICATION


class ScaffoldOptions(BaseModel):
    """Validated answer set driving one scaffold run."""

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(..., min_length=1)
    namespace_prefix: str = Field(default="@my-org")
    selected_templates: tuple[TemplateDescriptor, ...] = Field(default=())
    selected_features: tuple[str, ...] = Field(default=())

    @field_validator("namespace_prefix")
    @classmethod
    def _prefix_has_marker(cls, value: str) -> str:
        if not value.startswith(NAMESPACE_MARKER):
            raise ValueError(f"Prefix should start with {NAMESPACE_MARKER}")
        return value

    @field_validator("selected_features")
    @classmethod
    def _dedupe_features(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(dict.fromkeys(value))

    # -- Derived selections ------------------------------------------------

    @property
    def app_templates(self) -> list[TemplateDescriptor]:
        return [t for t in self.selected_templates if t.is_application]

    @property
    def has_app_templates(self) -> bool:
        return bool(self.app_templates)

    def has_template(self, name: str) -> bool:
        return any(t.name == name for t in self.selected_templates)

    def has_feature(self, name: str) -> bool:
        return name in self.selected_features

    def member_name(self, template_name: str) -> str:
        """Scoped package name of a workspace member, e.g. ``@acme/web``."""
        return f"{self.namespace_prefix.rstrip('/')}/{template_name}"


class RootManifest(BaseModel):
    """The root ``package.json`` of the generated workspace.

    Created by the root generator and extended in place by the feature
    composer.  Merges are additive; a later write of the same key wins.
    """

    name: str
    version: str = "1.0.0"
    private: bool = True
    scripts: dict[str, str] = Field(default_factory=dict)
    devDependencies: dict[str, str] = Field(default_factory=dict)
    workspaces: list[str] | None = None

    def merge_scripts(self, scripts: dict[str, str]) -> None:
        self.scripts.update(scripts)

    def merge_dev_dependencies(self, deps: dict[str, str]) -> None:
        self.devDependencies.update(deps)

    def to_json(self) -> dict[str, object]:
        """Serialisable dict in ``package.json`` key order."""
        return self.model_dump(exclude_none=True)
