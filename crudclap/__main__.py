"""Allow ``python -m crudclap``."""

from crudclap.cli import main

main()
