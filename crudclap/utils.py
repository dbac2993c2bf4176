"""Shared utility functions for crudclap.

Provides name-inflection helpers used to derive module and token names from
a table name, small file-system helpers, and Rich-based console reporting.
"""

from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# Name helpers
# ---------------------------------------------------------------------------

_IRREGULAR_SINGULARS: dict[str, str] = {
    "people": "person",
    "men": "man",
    "women": "woman",
    "children": "child",
    "feet": "foot",
    "teeth": "tooth",
    "geese": "goose",
    "mice": "mouse",
    "statuses": "status",
    "buses": "bus",
    "campuses": "campus",
    "viruses": "virus",
    "movies": "movie",
}

_UNCOUNTABLE: frozenset[str] = frozenset({
    "data",
    "equipment",
    "information",
    "media",
    "metadata",
    "news",
    "series",
    "species",
})


def _singularize_word(word: str) -> str:
    lower = word.lower()
    if lower in _UNCOUNTABLE:
        return word
    if lower in _IRREGULAR_SINGULARS:
        singular = _IRREGULAR_SINGULARS[lower]
        return singular.capitalize() if word[:1].isupper() else singular
    if lower.endswith("ies") and len(lower) > 3:
        return word[:-3] + ("Y" if word[-1].isupper() else "y")
    if lower.endswith(("sses", "shes", "ches", "xes")):
        return word[:-2]
    if lower.endswith(("ss", "us", "is")):
        return word
    if lower.endswith("s") and len(lower) > 1:
        return word[:-1]
    return word


def singularize(name: str) -> str:
    """Return the singular form of a (possibly snake_case) plural name.

    Only the last word is inflected, so ``blog_posts`` becomes ``blog_post``
    and ``user_categories`` becomes ``user_category``.

    Examples::

        singularize("posts")       -> "post"
        singularize("addresses")   -> "address"
        singularize("people")      -> "person"
        singularize("status")      -> "status"
    """
    parts = re.split(r"([-_\s]+)", name)
    for i in range(len(parts) - 1, -1, -1):
        if parts[i] and not re.fullmatch(r"[-_\s]+", parts[i]):
            parts[i] = _singularize_word(parts[i])
            break
    return "".join(parts)


def to_pascal(name: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``SomeThing``."""
    parts = re.split(r"[-_\s]+", name)
    return "".join(word.capitalize() for word in parts if word)


def to_camel(name: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``someThing``."""
    pascal = to_pascal(name)
    return lcfirst(pascal)


def to_snake(name: str) -> str:
    """Convert ``SomeThing`` or ``some-thing`` to ``some_thing``."""
    s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", name)
    s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1)
    return re.sub(r"[-\s]+", "_", s2).lower()


def lcfirst(value: str) -> str:
    """Lower-case only the first character of *value*."""
    return value[:1].lower() + value[1:]


def headline(name: str) -> str:
    """Turn a column name into a human-readable label.

    Underscores and hyphens become spaces and every word is capitalised:
    ``created_at`` -> ``Created At``.
    """
    return " ".join(word.capitalize() for word in re.split(r"[-_\s]+", name) if word)


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Returns:
        The ``Path`` object for the directory.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def write_atomic(path: str | Path, data: str | bytes) -> Path:
    """Write *data* to *path* without ever leaving a half-written file.

    The content goes to a temporary file in the same directory which is then
    moved over the destination.  On failure the temporary file is removed and
    the exception propagates.
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    payload = data.encode("utf-8") if isinstance(data, str) else data

    fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(payload)
        os.replace(tmp_name, target)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return target


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_info(message: str) -> None:
    """Print a plain status line."""
    console.print(f"[cyan]{escape(message)}[/cyan]")


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()
