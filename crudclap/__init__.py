"""crudclap -- generate CRUD modules from database table schemas."""

__version__ = "0.1.0"
