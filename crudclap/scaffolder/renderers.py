"""Field renderers: ``ColumnSet -> str`` fragments substituted into templates.

Every renderer walks the columns in declaration order and emits exactly one
line per column (the searchable-columns list drops the excluded columns and
joins on a single line).  An empty ``ColumnSet`` yields ``""``.  Renderers
are pure: they only read the columns and return text.

``ColumnsRenderer`` bundles the renderers with a shared
``FragmentRenderer`` and the searchable-column exclusion set; the module
level functions use a default instance.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from crudclap.config import DEFAULT_EXCLUDED_COLUMNS
from crudclap.schema.models import ColumnDescriptor, ColumnSet
from crudclap.utils import headline

from .fragments import FragmentRenderer

# ---------------------------------------------------------------------------
# Type families
# ---------------------------------------------------------------------------

_INTEGER_TYPES = frozenset({
    "int", "integer", "bigint", "smallint", "mediumint", "tinyint",
    "serial", "bigserial", "smallserial", "int2", "int4", "int8",
})
_NUMERIC_TYPES = frozenset({
    "decimal", "numeric", "float", "double", "double precision", "real", "money",
    "float4", "float8",
})
_BOOLEAN_TYPES = frozenset({"bool", "boolean", "bit"})
_DATETIME_TYPES = frozenset({"datetime", "datetime2", "timestamp", "timestamptz", "smalldatetime"})
_TEXT_TYPES = frozenset({
    "text", "tinytext", "mediumtext", "longtext", "clob", "json", "jsonb",
})


def _is_boolean(column: ColumnDescriptor) -> bool:
    # MySQL reports booleans as tinyint(1)
    return column.base_type in _BOOLEAN_TYPES or column.sql_type.replace(" ", "").lower() == "tinyint(1)"


def _is_datetime(column: ColumnDescriptor) -> bool:
    return column.base_type in _DATETIME_TYPES or column.base_type.startswith("timestamp")


def infer_input_type(column: ColumnDescriptor) -> str:
    """Return the HTML input type used for *column* in generated forms."""
    if _is_boolean(column):
        return "checkbox"
    if column.base_type in _INTEGER_TYPES or column.base_type in _NUMERIC_TYPES:
        return "number"
    if column.base_type == "date":
        return "date"
    if _is_datetime(column):
        return "datetime-local"
    if column.base_type.startswith("time"):
        return "time"
    if column.base_type in _TEXT_TYPES:
        return "textarea"
    name = column.name.lower()
    if "email" in name:
        return "email"
    if "password" in name:
        return "password"
    return "text"


def validation_rules_for(column: ColumnDescriptor) -> list[str]:
    """Return the validation rules for one column, most important first."""
    optional = (
        column.nullable
        or column.has_default
        or (column.primary_key and column.autoincrement)
    )
    rules = ["nullable" if optional else "required"]

    if _is_boolean(column):
        rules.append("boolean")
    elif column.base_type in _INTEGER_TYPES:
        rules.append("integer")
    elif column.base_type in _NUMERIC_TYPES:
        rules.append("numeric")
    elif column.base_type == "date" or _is_datetime(column):
        rules.append("date")
    else:
        rules.append("string")
        if column.length:
            rules.append(f"max:{column.length}")
        if "email" in column.name.lower():
            rules.append("email")
    return rules


def table_view_builder_for(column: ColumnDescriptor) -> str:
    """Return the table-view column class used for *column*."""
    if _is_boolean(column):
        return "Boolean"
    if column.base_type in _INTEGER_TYPES or column.base_type in _NUMERIC_TYPES:
        return "Number"
    if column.base_type == "date" or _is_datetime(column):
        return "DateTime"
    return "Text"


# ---------------------------------------------------------------------------
# ColumnsRenderer
# ---------------------------------------------------------------------------


class ColumnsRenderer:
    """Renders every field-fragment kind for a ``ColumnSet``.

    Args:
        excluded_columns: Column names left out of the searchable list.
        fragments: Optional fragment template overrides.
    """

    def __init__(
        self,
        excluded_columns: Iterable[str] | None = None,
        fragments: Mapping[str, str] | None = None,
    ) -> None:
        if excluded_columns is None:
            excluded_columns = DEFAULT_EXCLUDED_COLUMNS
        self.excluded_columns: frozenset[str] = frozenset(excluded_columns)
        self.fragments = FragmentRenderer(fragments)

    def _render_each(
        self,
        fragment: str,
        columns: ColumnSet,
        extra: dict[str, Any] | None = None,
        separator: str = "\n",
    ) -> str:
        lines = []
        for column in columns:
            context = {
                "column": column,
                "label": headline(column.name),
                "input_type": infer_input_type(column),
                **(extra or {}),
            }
            lines.append(self.fragments.render(fragment, context))
        return separator.join(lines)

    # -- Renderer kinds ------------------------------------------------------

    def to_searchable_columns(self, columns: ColumnSet) -> str:
        """Quoted, comma-joined names of the searchable columns."""
        return self._render_each(
            "searchable_column", columns.without(self.excluded_columns), separator=", "
        )

    def to_validation_rules(self, columns: ColumnSet) -> str:
        lines = []
        for column in columns:
            lines.append(
                self.fragments.render(
                    "validation_rule",
                    {"column": column, "rules": validation_rules_for(column)},
                )
            )
        return "\n".join(lines)

    def to_lang_fields(self, columns: ColumnSet) -> str:
        return self._render_each("lang_field", columns)

    def to_table_headers(self, columns: ColumnSet) -> str:
        return self._render_each("table_header", columns)

    def to_table_fields(self, columns: ColumnSet) -> str:
        return self._render_each("table_field", columns)

    def to_detail_fields(self, columns: ColumnSet, variable: str = "item") -> str:
        return self._render_each("detail_field", columns, {"variable": variable})

    def to_form_create_fields(self, columns: ColumnSet) -> str:
        lines = []
        for column in columns:
            lines.append(self._form_field(column, f"old('{column.name}')"))
        return "\n".join(lines)

    def to_form_edit_fields(self, columns: ColumnSet, variable: str = "item") -> str:
        lines = []
        for column in columns:
            value = f"old('{column.name}', ${variable}->{column.name})"
            lines.append(self._form_field(column, value))
        return "\n".join(lines)

    def to_table_view_fields(self, columns: ColumnSet) -> str:
        lines = []
        for column in columns:
            lines.append(
                self.fragments.render(
                    "table_view_field",
                    {
                        "column": column,
                        "label": headline(column.name),
                        "builder": table_view_builder_for(column),
                    },
                )
            )
        return "\n".join(lines)

    def _form_field(self, column: ColumnDescriptor, value: str) -> str:
        return self.fragments.render(
            "form_field",
            {
                "column": column,
                "label": headline(column.name),
                "input_type": infer_input_type(column),
                "value": value,
            },
        )


# ---------------------------------------------------------------------------
# Module-level shortcuts
# ---------------------------------------------------------------------------

_default_renderer: ColumnsRenderer | None = None


def _renderer() -> ColumnsRenderer:
    global _default_renderer
    if _default_renderer is None:
        _default_renderer = ColumnsRenderer()
    return _default_renderer


def to_searchable_columns(columns: ColumnSet, excluded: Iterable[str] | None = None) -> str:
    if excluded is not None:
        return ColumnsRenderer(excluded_columns=excluded).to_searchable_columns(columns)
    return _renderer().to_searchable_columns(columns)


def to_validation_rules(columns: ColumnSet) -> str:
    return _renderer().to_validation_rules(columns)


def to_lang_fields(columns: ColumnSet) -> str:
    return _renderer().to_lang_fields(columns)


def to_table_headers(columns: ColumnSet) -> str:
    return _renderer().to_table_headers(columns)


def to_table_fields(columns: ColumnSet) -> str:
    return _renderer().to_table_fields(columns)


def to_detail_fields(columns: ColumnSet, variable: str = "item") -> str:
    return _renderer().to_detail_fields(columns, variable)


def to_form_create_fields(columns: ColumnSet) -> str:
    return _renderer().to_form_create_fields(columns)


def to_form_edit_fields(columns: ColumnSet, variable: str = "item") -> str:
    return _renderer().to_form_edit_fields(columns, variable)


def to_table_view_fields(columns: ColumnSet) -> str:
    return _renderer().to_table_view_fields(columns)
