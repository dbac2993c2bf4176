"""crudclap schema layer -- column metadata and the readers that supply it.

Quick usage::

    from crudclap.schema import SQLAlchemySchemaReader

    reader = SQLAlchemySchemaReader("sqlite:///app.db")
    columns = reader.list_columns("blog_posts")
"""

from crudclap.schema.models import ColumnDescriptor, ColumnSet
from crudclap.schema.reader import SchemaReader, SQLAlchemySchemaReader, StaticSchemaReader

__all__ = [
    "ColumnDescriptor",
    "ColumnSet",
    "SchemaReader",
    "SQLAlchemySchemaReader",
    "StaticSchemaReader",
]
