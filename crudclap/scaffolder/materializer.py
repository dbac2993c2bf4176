"""Module materialisation: one full generation run.

Given a table name, ``ModuleMaterializer``:

1. reads the table's columns from the schema reader and builds the token map;
2. resolves the template profile to a directory (fatal if it is missing);
3. checks the destination module directory and, when it exists, only
   continues if overwriting is forced or confirmed -- the old directory is
   then removed;
4. copies the template tree into the module directory;
5. walks every copied file, renames it with ``FilenameTransformer``,
   substitutes tokens in its content and removes the template original.

Per-file failures are reported and collected; they never stop the run.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from crudclap.config import ScaffoldConfig
from crudclap.errors import FatalConfigurationError, PerFileWriteError, TemplateNotFoundError
from crudclap.schema.models import ColumnSet
from crudclap.schema.reader import SchemaReader
from crudclap.utils import (
    ensure_dir,
    print_error,
    print_info,
    print_summary_table,
    print_warning,
    write_atomic,
)

from .filenames import FilenameDecision, FilenameTransformer
from .renderers import ColumnsRenderer
from .tokens import TokenMap, build_token_map, module_name_for, substitute

BUILTIN_TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "stubs"

ConfirmCallback = Callable[[str], bool]


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TemplateFile:
    """A file of the copied template tree and its raw bytes."""

    path: Path
    content: bytes

    @classmethod
    def read(cls, path: Path) -> "TemplateFile":
        return cls(path=path, content=Path(path).read_bytes())


@dataclass(frozen=True)
class GeneratedFile:
    """Final destination path and content of one materialised template."""

    path: Path
    content: str | bytes
    source: Path
    delete_original: bool = True


@dataclass
class GenerationResult:
    """Summary of a generation run."""

    table: str
    module_name: str
    module_path: Path
    template_dir: Optional[Path] = None
    aborted: bool = False
    generated: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    errors: list[PerFileWriteError] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """``True`` unless the run was refused.  Per-file errors still count as success."""
        return not self.aborted


def _refuse(message: str) -> bool:
    return False


# ---------------------------------------------------------------------------
# ModuleMaterializer
# ---------------------------------------------------------------------------


class ModuleMaterializer:
    """Generates CRUD modules from template profiles.

    Args:
        config: Run configuration.
        schema: Column metadata source, needed by :meth:`generate`.
        confirm: Asked whether an existing module may be overwritten; the
            default refuses.  The CLI passes an interactive prompt.
        renderer: Field renderer; defaults to one built from ``config``.
    """

    def __init__(
        self,
        config: ScaffoldConfig,
        schema: Optional[SchemaReader] = None,
        confirm: Optional[ConfirmCallback] = None,
        renderer: Optional[ColumnsRenderer] = None,
    ) -> None:
        self.config = config
        self.schema = schema
        self.confirm = confirm or _refuse
        self.renderer = renderer or ColumnsRenderer(excluded_columns=config.excluded_columns)

    # -- Public API --------------------------------------------------------

    def module_name_for(self, table: str) -> str:
        return module_name_for(table)

    def module_path_for(self, table: str) -> Path:
        return Path(self.config.target_dir) / module_name_for(table)

    def resolve_template_dir(self, profile: Optional[str] = None) -> Path:
        """Resolve a template profile name to an existing directory.

        Raises:
            TemplateNotFoundError: The profile is unknown or its directory
                does not exist.
        """
        profile = profile or self.config.default
        if profile not in self.config.templates:
            raise TemplateNotFoundError(profile)

        configured = Path(self.config.templates[profile])
        if configured.is_absolute():
            directory = configured
        else:
            root = self.config.templates_root or BUILTIN_TEMPLATES_DIR
            directory = Path(root) / configured

        if not directory.is_dir():
            raise TemplateNotFoundError(profile, directory)
        return directory

    def generate(
        self,
        table: str,
        template: Optional[str] = None,
        force: bool = False,
    ) -> GenerationResult:
        """Read *table*'s columns and materialise its module."""
        if self.schema is None:
            raise FatalConfigurationError("No schema reader configured")
        columns = self.schema.list_columns(table)
        return self.materialize(table, columns, template=template, force=force)

    def materialize(
        self,
        table: str,
        columns: ColumnSet,
        template: Optional[str] = None,
        force: bool = False,
    ) -> GenerationResult:
        """Materialise *table*'s module from an already-loaded ``ColumnSet``."""
        module_name = self.module_name_for(table)
        container = Path(self.config.target_dir)
        module_path = container / module_name
        result = GenerationResult(table=table, module_name=module_name, module_path=module_path)

        # Resolve before touching the destination so a bad profile changes nothing
        template_dir = self.resolve_template_dir(template)
        result.template_dir = template_dir

        token_map = build_token_map(table, columns, self.config, self.renderer)
        for token in token_map.duplicates:
            print_warning(f"Token {token} declared more than once; last value wins")

        # 1. check existing module
        if module_path.is_dir():
            overwrite = force or self.confirm(
                f"Folder {module_path} already exist, do you want to overwrite it?"
            )
            if not overwrite:
                result.aborted = True
                return result
            shutil.rmtree(module_path)

        # 2. create modules directory
        print_info("Creating modules directory...")
        ensure_dir(container)

        # 3. copy module skeleton
        print_info(f"Generating code from {template_dir} to {module_path}")
        shutil.copytree(template_dir, module_path)

        # 4. rename files and replace tokens
        transformer = FilenameTransformer(module_name)
        for path in sorted(p for p in module_path.rglob("*") if p.is_file()):
            decision = transformer.transform(path)
            if decision is None:
                result.skipped.append(path)
                continue

            try:
                decision = self._substitute_name(decision, token_map)
                print_info(str(decision.destination))
                generated = self.render_file(decision, token_map)
                self.save(generated)
            except (OSError, ValueError) as exc:
                error = PerFileWriteError(path, exc)
                print_error(str(error))
                result.errors.append(error)
                continue
            result.generated.append(generated.path)

        print_summary_table(
            {
                "Table": table,
                "Module": module_name,
                "Path": str(module_path),
                "Files generated": str(len(result.generated)),
                "Errors": str(len(result.errors)),
            },
            title="Generation Summary",
        )
        return result

    # -- Per-file steps ----------------------------------------------------

    def render_file(self, decision: FilenameDecision, token_map: TokenMap) -> GeneratedFile:
        """Build the final content for one template file (no writes)."""
        template = TemplateFile.read(decision.source)
        if self.config.is_binary(template.path):
            content: str | bytes = template.content
        else:
            content = substitute(template.content.decode("utf-8"), token_map)
        return GeneratedFile(
            path=decision.destination,
            content=content,
            source=decision.source,
            delete_original=decision.delete_original,
        )

    def save(self, generated: GeneratedFile) -> Path:
        """Write *generated* and remove its template original when marked."""
        write_atomic(generated.path, generated.content)
        if generated.delete_original and generated.source != generated.path:
            generated.source.unlink(missing_ok=True)
        return generated.path

    @staticmethod
    def _substitute_name(decision: FilenameDecision, token_map: TokenMap) -> FilenameDecision:
        name = substitute(decision.destination.name, token_map)
        if name == decision.destination.name:
            return decision
        if name in ("", ".", "..") or "/" in name or "\\" in name:
            raise ValueError(f"Invalid file name after token substitution: {name!r}")
        return FilenameDecision(
            source=decision.source,
            destination=decision.destination.with_name(name),
            delete_original=decision.delete_original,
        )
