"""crudclap scaffolder -- turns a table schema into a generated CRUD module.

A template profile is a directory of ``.stub`` files.  The materializer
copies it into the module directory, renames each file and replaces the
placeholder tokens with text derived from the table's columns.

Quick usage::

    from crudclap.config import ScaffoldConfig
    from crudclap.scaffolder import ModuleMaterializer
    from crudclap.schema import SQLAlchemySchemaReader

    materializer = ModuleMaterializer(
        ScaffoldConfig(), SQLAlchemySchemaReader("sqlite:///app.db")
    )
    result = materializer.generate("blog_posts")
"""

from crudclap.scaffolder.filenames import (
    FilenameDecision,
    FilenameTransformer,
    ReplaceMarkerRule,
    StripSuffixRule,
)
from crudclap.scaffolder.fragments import FragmentRenderer
from crudclap.scaffolder.materializer import (
    GeneratedFile,
    GenerationResult,
    ModuleMaterializer,
    TemplateFile,
)
from crudclap.scaffolder.renderers import ColumnsRenderer
from crudclap.scaffolder.tokens import TokenMap, TokenPair, build_token_map, substitute

__all__ = [
    "ColumnsRenderer",
    "FilenameDecision",
    "FilenameTransformer",
    "FragmentRenderer",
    "GeneratedFile",
    "GenerationResult",
    "ModuleMaterializer",
    "ReplaceMarkerRule",
    "StripSuffixRule",
    "TemplateFile",
    "TokenMap",
    "TokenPair",
    "build_token_map",
    "substitute",
]
