"""Schema readers: the collaborators that report tables and their columns.

Any object with ``list_tables()`` and ``list_columns(table)`` satisfies the
``SchemaReader`` protocol.  ``SQLAlchemySchemaReader`` introspects a live
database through ``sqlalchemy.inspect``; ``StaticSchemaReader`` serves
column metadata from memory (scripted runs and tests).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Protocol, runtime_checkable

from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import CompileError, NoSuchTableError, SQLAlchemyError
from sqlalchemy.types import Integer

from crudclap.errors import SchemaError, TableNotFoundError
from crudclap.schema.models import ColumnDescriptor, ColumnSet


@runtime_checkable
class SchemaReader(Protocol):
    """Source of table and column metadata."""

    def list_tables(self) -> list[str]: ...

    def list_columns(self, table: str) -> ColumnSet: ...


# ---------------------------------------------------------------------------
# SQLAlchemy
# ---------------------------------------------------------------------------


class SQLAlchemySchemaReader:
    """Reads table metadata from a database via SQLAlchemy's inspector.

    Args:
        bind: A database URL (``sqlite:///app.db``) or an existing ``Engine``.

    Raises:
        SchemaError: The URL cannot be parsed or its driver is not installed.
    """

    def __init__(self, bind: str | Engine) -> None:
        if isinstance(bind, Engine):
            self.engine = bind
            return
        try:
            self.engine = create_engine(bind)
        except (SQLAlchemyError, ImportError) as exc:
            raise SchemaError(f"Cannot use database URL {bind!r}: {exc}") from exc

    def list_tables(self) -> list[str]:
        try:
            return sorted(inspect(self.engine).get_table_names())
        except SQLAlchemyError as exc:
            raise SchemaError(f"Could not list tables: {exc}") from exc

    def list_columns(self, table: str) -> ColumnSet:
        try:
            inspector = inspect(self.engine)
            if not inspector.has_table(table):
                raise TableNotFoundError(table)
            pk_columns = set(
                inspector.get_pk_constraint(table).get("constrained_columns") or []
            )
            raw_columns = inspector.get_columns(table)
        except NoSuchTableError as exc:
            raise TableNotFoundError(table) from exc
        except SQLAlchemyError as exc:
            raise SchemaError(f"Could not read columns of {table}: {exc}") from exc

        return ColumnSet(_to_descriptor(col, pk_columns) for col in raw_columns)


def _to_descriptor(col: Mapping[str, Any], pk_columns: set[str]) -> ColumnDescriptor:
    """Convert one ``Inspector.get_columns`` entry to a ``ColumnDescriptor``."""
    col_type = col["type"]
    try:
        sql_type = str(col_type)
    except CompileError:
        sql_type = type(col_type).__name__
    is_pk = col["name"] in pk_columns or bool(col.get("primary_key"))

    autoincrement = col.get("autoincrement", "auto")
    if autoincrement == "auto":
        # SQLAlchemy's "auto" means a lone integer primary key gets a sequence
        autoincrement = is_pk and len(pk_columns) <= 1 and isinstance(col_type, Integer)

    return ColumnDescriptor(
        name=col["name"],
        sql_type=sql_type.lower(),
        nullable=bool(col.get("nullable", True)),
        default=col.get("default"),
        primary_key=is_pk,
        autoincrement=bool(autoincrement),
        length=getattr(col_type, "length", None),
    )


# ---------------------------------------------------------------------------
# In-memory
# ---------------------------------------------------------------------------


class StaticSchemaReader:
    """Serves column metadata from an in-memory mapping.

    Values may be ``ColumnSet`` instances or iterables of
    ``ColumnDescriptor``/dicts::

        reader = StaticSchemaReader({
            "blog_posts": [{"name": "id", "sql_type": "integer"}, ...],
        })
    """

    def __init__(self, tables: Mapping[str, Iterable[ColumnDescriptor | dict[str, Any]]]) -> None:
        self._tables: dict[str, ColumnSet] = {}
        for name, columns in tables.items():
            if isinstance(columns, ColumnSet):
                self._tables[name] = columns
                continue
            self._tables[name] = ColumnSet.from_dicts(columns)

    def list_tables(self) -> list[str]:
        return list(self._tables)

    def list_columns(self, table: str) -> ColumnSet:
        if table not in self._tables:
            raise TableNotFoundError(table)
        return self._tables[table]
