"""Jinja2 rendering of per-column markup fragments.

Each field renderer turns one column into one line of generated source by
rendering a small named fragment template.  The fragments are Jinja2
templates held in memory; ``FragmentRenderer`` compiles them once and
renders them with a per-column context.

Generated views use ``{{ ... }}`` themselves, so fragments use ``[[ ... ]]``
for variables and ``[% ... %]`` for blocks.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from jinja2 import DictLoader, Environment, StrictUndefined

from crudclap.utils import headline

# ---------------------------------------------------------------------------
# Built-in fragments
# ---------------------------------------------------------------------------

DEFAULT_FRAGMENTS: dict[str, str] = {
    "searchable_column": "'[[ column.name ]]'",
    "validation_rule": "'[[ column.name ]]' => [[ rules | php_array ]],",
    "lang_field": "'[[ column.name ]]' => '[[ label ]]',",
    "table_header": "<th>[[ label ]]</th>",
    "table_field": "<td>{{ $item->[[ column.name ]] }}</td>",
    "detail_field": (
        "<tr><td>[[ label ]]</td><td>{{ $[[ variable ]]->[[ column.name ]] }}</td></tr>"
    ),
    "form_field": (
        '<div class="field">'
        "[% if input_type == 'checkbox' %]"
        '<label><input type="hidden" name="[[ column.name ]]" value="0">'
        '<input type="checkbox" name="[[ column.name ]]" id="[[ column.name ]]" value="1"'
        " {{ [[ value ]] ? 'checked' : '' }}> [[ label ]]</label>"
        "[% elif input_type == 'textarea' %]"
        '<label for="[[ column.name ]]">[[ label ]]</label>'
        '<textarea name="[[ column.name ]]" id="[[ column.name ]]">{{ [[ value ]] }}</textarea>'
        "[% elif input_type == 'password' %]"
        '<label for="[[ column.name ]]">[[ label ]]</label>'
        '<input type="password" name="[[ column.name ]]" id="[[ column.name ]]">'
        "[% else %]"
        '<label for="[[ column.name ]]">[[ label ]]</label>'
        '<input type="[[ input_type ]]" name="[[ column.name ]]" id="[[ column.name ]]"'
        ' value="{{ [[ value ]] }}">'
        "[% endif %]"
        "</div>"
    ),
    "table_view_field": "[[ builder ]]::make('[[ column.name ]]', '[[ label ]]'),",
}


# ---------------------------------------------------------------------------
# FragmentRenderer
# ---------------------------------------------------------------------------


class FragmentRenderer:
    """Renders named per-column fragment templates.

    Args:
        fragments: Optional overrides merged on top of ``DEFAULT_FRAGMENTS``.
    """

    def __init__(self, fragments: Mapping[str, str] | None = None) -> None:
        self.fragments: dict[str, str] = {**DEFAULT_FRAGMENTS, **(fragments or {})}
        self.env = Environment(
            loader=DictLoader(self.fragments),
            autoescape=False,
            undefined=StrictUndefined,
            variable_start_string="[[",
            variable_end_string="]]",
            block_start_string="[%",
            block_end_string="%]",
            comment_start_string="[#",
            comment_end_string="#]",
            keep_trailing_newline=False,
        )
        self.env.filters["headline"] = headline
        self.env.filters["php_array"] = _php_array_filter

    def render(self, name: str, context: dict[str, Any]) -> str:
        """Render fragment *name* with *context*."""
        return self.env.get_template(name).render(**context)


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------


def _php_array_filter(values: list[str]) -> str:
    """Render ``["a", "b"]`` as a PHP array literal: ``['a', 'b']``."""
    return "[" + ", ".join(f"'{v}'" for v in values) + "]"
