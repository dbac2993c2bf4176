"""Token maps and literal token substitution.

A ``TokenMap`` is an ordered list of ``(token, replacement)`` pairs.
``substitute`` applies the pairs one after another, each as a whole-string
replacement on the output of the previous one:

* a replacement value containing a *later* token is rewritten by that later
  pair;
* a replacement value containing an *earlier* token is left alone, because
  that token's pass has already run.

There is no fixed-point iteration, so applying a map twice can differ from
applying it once.  Templates rely on this order; do not change it.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Sequence

from crudclap.config import ScaffoldConfig
from crudclap.schema.models import ColumnSet
from crudclap.utils import singularize, to_camel, to_pascal, to_snake

from .renderers import ColumnsRenderer


@dataclass(frozen=True)
class TokenPair:
    """One literal placeholder and the text that replaces it."""

    token: str
    replacement: str

    def __post_init__(self) -> None:
        if not self.token:
            raise ValueError("token must be a non-empty string")


class TokenMap:
    """Ordered, token-unique sequence of ``TokenPair`` records.

    Adding a token that is already present overwrites its replacement in
    place (last writer wins) and records the token in ``duplicates``.
    """

    def __init__(self, pairs: Iterable[TokenPair | tuple[str, str]] = ()) -> None:
        self._pairs: list[TokenPair] = []
        self._index: dict[str, int] = {}
        self.duplicates: list[str] = []
        for pair in pairs:
            if isinstance(pair, TokenPair):
                self.add(pair.token, pair.replacement)
            else:
                self.add(*pair)

    def add(self, token: str, replacement: str) -> "TokenMap":
        pair = TokenPair(token, replacement)
        if token in self._index:
            self.duplicates.append(token)
            self._pairs[self._index[token]] = pair
        else:
            self._index[token] = len(self._pairs)
            self._pairs.append(pair)
        return self

    def __iter__(self) -> Iterator[TokenPair]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __contains__(self, token: object) -> bool:
        return token in self._index

    def __getitem__(self, token: str) -> str:
        return self._pairs[self._index[token]].replacement

    def tokens(self) -> list[str]:
        return [p.token for p in self._pairs]

    def as_dict(self) -> dict[str, str]:
        return {p.token: p.replacement for p in self._pairs}


def substitute(text: str, token_map: TokenMap | Sequence[TokenPair]) -> str:
    """Replace every occurrence of each token in *text*, pair by pair."""
    for pair in token_map:
        if pair.token in text:
            text = text.replace(pair.token, pair.replacement)
    return text


# ---------------------------------------------------------------------------
# Standard token map
# ---------------------------------------------------------------------------


def module_name_for(table: str) -> str:
    """Derive the module (class) name from a table name.

    ``blog_posts`` -> ``BlogPost``, ``categories`` -> ``Category``.
    """
    return to_pascal(singularize(table))


def route_middleware(middleware: Iterable[str]) -> str:
    """Render a middleware list as quoted array elements: ``'web','auth'``."""
    return ",".join(f"'{m}'" for m in middleware)


def route_url_prefix(prefix: str, module: str) -> str:
    if prefix:
        return f"{prefix}.{module}"
    return module


def build_token_map(
    table: str,
    columns: ColumnSet,
    config: ScaffoldConfig,
    renderer: ColumnsRenderer | None = None,
) -> TokenMap:
    """Build the standard token map for generating *table*'s module."""
    renderer = renderer or ColumnsRenderer(excluded_columns=config.excluded_columns)
    singular = singularize(table)
    module_name = module_name_for(table)
    variable = to_camel(singular)
    module_slug = singular.replace("_", "-")
    route_prefix = config.routes.prefix

    return TokenMap([
        (":Namespace:", config.namespace),
        (":table:", table),
        (":module_name:", to_snake(singular)),
        (":module-name:", module_slug),
        (":module name:", singular.replace("_", " ").lower()),
        (":Module Name:", " ".join(w[:1].upper() + w[1:] for w in singular.split("_") if w)),
        (":moduleName:", variable),
        (":ModuleName:", module_name),
        (":SEARCHABLE_COLUMNS:", renderer.to_searchable_columns(columns)),
        (":VALIDATION_RULES:", renderer.to_validation_rules(columns)),
        (":LANG_FIELDS:", renderer.to_lang_fields(columns)),
        (":TABLE_HEADERS:", renderer.to_table_headers(columns)),
        (":TABLE_FIELDS:", renderer.to_table_fields(columns)),
        (":DETAIL_FIELDS:", renderer.to_detail_fields(columns, variable)),
        (":FORM_CREATE_FIELDS:", renderer.to_form_create_fields(columns)),
        (":FORM_EDIT_FIELDS:", renderer.to_form_edit_fields(columns, variable)),
        (":TABLE_VIEW_FIELDS:", renderer.to_table_view_fields(columns)),
        (":VIEW_EXTENDS:", config.view.extends),
        (":route-prefix:", route_prefix),
        (":route-middleware:", route_middleware(config.routes.middleware)),
        (":route-url-prefix:", route_url_prefix(route_prefix, module_slug)),
    ])
