"""Exception hierarchy for crudclap."""

from __future__ import annotations

from pathlib import Path


class CrudclapError(Exception):
    """Base class for every error raised by crudclap."""


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class FatalConfigurationError(CrudclapError):
    """Raised when the configuration cannot drive a generation run.

    Always raised before the destination directory is touched.
    """


class TemplateNotFoundError(FatalConfigurationError):
    """Raised when a template profile does not resolve to an existing directory."""

    def __init__(self, profile: str, path: Path | None = None) -> None:
        self.profile = profile
        self.path = path
        if path is None:
            message = f"Unknown template profile: {profile}"
        else:
            message = f"Invalid template directory: {path}"
        super().__init__(message)


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------


class SchemaError(CrudclapError):
    """Raised when table metadata cannot be read."""


class TableNotFoundError(SchemaError):
    """Raised when the requested table does not exist in the schema."""

    def __init__(self, table: str) -> None:
        self.table = table
        super().__init__(f"Table not found: {table}")


# ---------------------------------------------------------------------------
# Materialization
# ---------------------------------------------------------------------------


class PerFileWriteError(CrudclapError):
    """A single template file could not be transformed and saved.

    These are collected on the run result; they never abort a run.
    """

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"{path}: {cause}")
