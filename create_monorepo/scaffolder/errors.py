"""Scaffolder error taxonomy.

``MetadataParseError`` and ``SubstitutionReadError`` are recovered inside the
component that raises them.  ``DiscoveryError`` and ``InstallError`` are
recovered by the CLI.  ``CopyError`` aborts the run.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for every scaffolder failure."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        super().__init__(message)


class DiscoveryError(ScaffoldError):
    """The templates root could not be listed."""


class MetadataParseError(ScaffoldError):
    """A template's metadata file is not a valid JSON object."""


class SubstitutionReadError(ScaffoldError):
    """A candidate file could not be read as UTF-8 text or written back."""


class CopyError(ScaffoldError):
    """Copying a template or feature tree failed."""


class InstallError(ScaffoldError):
    """The post-scaffold dependency install did not succeed."""

    def __init__(self, message: str, returncode: int | None = None) -> None:
        self.returncode = returncode
        super().__init__(message)
