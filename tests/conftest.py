"""Shared pytest fixtures for the crudclap test suite.

Provides reusable fixtures for:
- Column metadata for a ``blog_posts`` table
- A run configuration pointing at temporary directories
- Builders for throwaway template profiles
- A materializer wired to an in-memory schema reader
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
from sqlalchemy import create_engine, text

from crudclap.config import ScaffoldConfig
from crudclap.scaffolder.materializer import ModuleMaterializer
from crudclap.schema.models import ColumnDescriptor, ColumnSet
from crudclap.schema.reader import StaticSchemaReader


# ---------------------------------------------------------------------------
# Columns
# ---------------------------------------------------------------------------

@pytest.fixture
def blog_columns() -> ColumnSet:
    """Columns of the ``blog_posts`` table: id, title, body, created_at."""
    return ColumnSet([
        ColumnDescriptor(
            name="id", sql_type="integer", nullable=False,
            primary_key=True, autoincrement=True,
        ),
        ColumnDescriptor(name="title", sql_type="varchar(255)", nullable=False, length=255),
        ColumnDescriptor(name="body", sql_type="text", nullable=True),
        ColumnDescriptor(name="created_at", sql_type="timestamp", nullable=True),
    ])


@pytest.fixture
def mixed_columns() -> ColumnSet:
    """Columns covering every input-type family."""
    return ColumnSet([
        ColumnDescriptor(name="email", sql_type="varchar(100)", nullable=False, length=100),
        ColumnDescriptor(name="password", sql_type="varchar(255)", nullable=False, length=255),
        ColumnDescriptor(name="is_active", sql_type="boolean", nullable=False, default="1"),
        ColumnDescriptor(name="age", sql_type="int", nullable=True),
        ColumnDescriptor(name="price", sql_type="decimal(8,2)", nullable=False),
        ColumnDescriptor(name="born_on", sql_type="date", nullable=True),
        ColumnDescriptor(name="notes", sql_type="longtext", nullable=True),
    ])


@pytest.fixture
def schema_reader(blog_columns: ColumnSet) -> StaticSchemaReader:
    return StaticSchemaReader({"blog_posts": blog_columns})


@pytest.fixture
def sqlite_url(tmp_path: Path) -> str:
    """SQLite database file with ``blog_posts`` and ``tags`` tables."""
    url = f"sqlite:///{tmp_path / 'app.sqlite'}"
    engine = create_engine(url)
    with engine.begin() as conn:
        conn.execute(text(
            "CREATE TABLE blog_posts ("
            " id INTEGER PRIMARY KEY,"
            " title VARCHAR(120) NOT NULL,"
            " body TEXT,"
            " status VARCHAR(20) NOT NULL DEFAULT 'draft',"
            " created_at DATETIME"
            ")"
        ))
        conn.execute(text("CREATE TABLE tags (id INTEGER PRIMARY KEY, name VARCHAR(50))"))
    engine.dispose()
    return url


# ---------------------------------------------------------------------------
# Templates & configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def make_template(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Return a builder that writes ``{relative_path: content}`` into a fresh profile dir."""
    counter = {"n": 0}

    def _make(files: dict[str, str]) -> Path:
        counter["n"] += 1
        root = tmp_path / "templates" / f"profile{counter['n']}"
        root.mkdir(parents=True)
        for rel, content in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return root

    return _make


@pytest.fixture
def target_dir(tmp_path: Path) -> Path:
    return tmp_path / "modules"


@pytest.fixture
def make_config(target_dir: Path) -> Callable[..., ScaffoldConfig]:
    """Return a builder for a config whose ``custom`` profile points at *template_dir*."""

    def _make(template_dir: Path | None = None, **overrides) -> ScaffoldConfig:
        templates = {"default": "default"}
        if template_dir is not None:
            templates["custom"] = str(template_dir)
        params = {
            "namespace": "Modules",
            "target_dir": target_dir,
            "templates": templates,
            "default": "custom" if template_dir is not None else "default",
        }
        params.update(overrides)
        return ScaffoldConfig(**params)

    return _make


@pytest.fixture
def make_materializer(
    make_config: Callable[..., ScaffoldConfig],
    schema_reader: StaticSchemaReader,
) -> Callable[..., ModuleMaterializer]:
    def _make(template_dir: Path | None = None, confirm=None, **overrides) -> ModuleMaterializer:
        config = make_config(template_dir, **overrides)
        return ModuleMaterializer(config, schema_reader, confirm=confirm)

    return _make
