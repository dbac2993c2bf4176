"""crudclap command-line entry point.

Usage::

    crudclap --table blog_posts
    crudclap --table blog_posts --template default --force
    crudclap --database-url postgresql://localhost/app
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from rich.prompt import Confirm, Prompt

from crudclap.config import ScaffoldConfig
from crudclap.errors import FatalConfigurationError, SchemaError
from crudclap.scaffolder import ModuleMaterializer
from crudclap.schema import SQLAlchemySchemaReader
from crudclap.utils import console, print_error, print_success, print_warning


def _confirm(message: str) -> bool:
    return Confirm.ask(message, default=False, console=console)


def _build_config(args) -> ScaffoldConfig:
    if args.config:
        config = ScaffoldConfig.load(Path(args.config))
    else:
        config = ScaffoldConfig.from_env()
    if args.database_url:
        config.database_url = args.database_url
    if args.target_dir:
        config.target_dir = Path(args.target_dir)
    return config


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entry point for ``crudclap`` / ``python -m crudclap``."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="crudclap",
        description="Generate a CRUD module from a database table schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  crudclap --table blog_posts\n"
            "  crudclap --table blog_posts --template default --force\n"
            "  crudclap --config crudclap.json\n"
        ),
    )
    parser.add_argument(
        "--table",
        default=None,
        help="Code will be generated based on this table schema (prompted if omitted)",
    )
    parser.add_argument(
        "--template",
        default=None,
        help="Code will be generated based on this stubs structure",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite the module directory if it exists",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a JSON configuration file (default: read CRUDCLAP_* env vars)",
    )
    parser.add_argument(
        "--database-url",
        default=None,
        help="SQLAlchemy database URL to read the schema from",
    )
    parser.add_argument(
        "--target-dir",
        default=None,
        help="Directory the module is generated into",
    )

    args = parser.parse_args(argv)

    try:
        config = _build_config(args)
    except (OSError, ValidationError) as exc:
        print_error(f"Error: invalid configuration: {exc}")
        sys.exit(1)

    try:
        reader = SQLAlchemySchemaReader(config.database_url)
        materializer = ModuleMaterializer(config, reader, confirm=_confirm)

        table = args.table
        if table is None:
            tables = reader.list_tables()
            if not tables:
                print_error("Error: the database has no tables")
                sys.exit(1)
            table = Prompt.ask("Choose table", choices=tables, console=console)

        result = materializer.generate(table, template=args.template, force=args.force)
    except (FatalConfigurationError, SchemaError) as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    if result.aborted:
        print_warning("Generation cancelled, nothing was changed.")
        return

    if result.errors:
        print_warning(f"Module {result.module_name} generated with {len(result.errors)} file error(s).")
    else:
        print_success(f"Module {result.module_name} generated in {result.module_path}")


if __name__ == "__main__":
    main()
