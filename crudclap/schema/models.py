"""Pydantic models for table column metadata.

``ColumnDescriptor`` describes one column as reported by a schema reader;
``ColumnSet`` is the ordered, name-unique collection of them that drives a
generation run.  Both are immutable once built.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ColumnDescriptor(BaseModel):
    """Metadata for a single database column."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Column name")
    sql_type: str = Field(default="varchar", description="SQL type as reported by the database")
    nullable: bool = Field(default=True)
    default: Optional[Any] = Field(default=None, description="Server default, if any")
    primary_key: bool = Field(default=False)
    autoincrement: bool = Field(default=False)
    length: Optional[int] = Field(default=None, description="Maximum length for string types")

    @property
    def base_type(self) -> str:
        """Lower-cased type name without size/precision, e.g. ``varchar``."""
        return self.sql_type.split("(", 1)[0].strip().lower()

    @property
    def has_default(self) -> bool:
        return self.default is not None


class ColumnSet:
    """Ordered sequence of ``ColumnDescriptor`` objects, unique by name.

    Declaration order is preserved; every renderer walks the columns in this
    order.
    """

    __slots__ = ("_columns",)

    def __init__(self, columns: Iterable[ColumnDescriptor] = ()) -> None:
        items = tuple(columns)
        seen: set[str] = set()
        for column in items:
            if column.name in seen:
                raise ValueError(f"Duplicate column name: {column.name}")
            seen.add(column.name)
        self._columns: tuple[ColumnDescriptor, ...] = items

    @classmethod
    def from_dicts(cls, rows: Iterable[ColumnDescriptor | dict[str, Any]]) -> "ColumnSet":
        """Build a ``ColumnSet`` from plain dicts (``ColumnDescriptor`` fields).

        Rows that already are descriptors are kept as they are.
        """
        return cls(
            row if isinstance(row, ColumnDescriptor) else ColumnDescriptor(**row)
            for row in rows
        )

    def __iter__(self) -> Iterator[ColumnDescriptor]:
        return iter(self._columns)

    def __len__(self) -> int:
        return len(self._columns)

    def __getitem__(self, index: int) -> ColumnDescriptor:
        return self._columns[index]

    def __bool__(self) -> bool:
        return bool(self._columns)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColumnSet):
            return NotImplemented
        return self._columns == other._columns

    def __repr__(self) -> str:
        return f"ColumnSet({list(self.names())!r})"

    def names(self) -> list[str]:
        """Return the column names in declaration order."""
        return [c.name for c in self._columns]

    def get(self, name: str) -> ColumnDescriptor | None:
        for column in self._columns:
            if column.name == name:
                return column
        return None

    def without(self, names: Iterable[str]) -> "ColumnSet":
        """Return a new ``ColumnSet`` with the named columns removed."""
        excluded = set(names)
        return ColumnSet(c for c in self._columns if c.name not in excluded)
