"""crudclap configuration.

Typed configuration for a generation run.  All settings are Pydantic v2
models so they are validated at construction time and can be serialised
to/from JSON or built from environment variables.  A ``ScaffoldConfig`` is
created once (by the CLI or by the caller) and passed explicitly to the
``ModuleMaterializer``.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator

DEFAULT_EXCLUDED_COLUMNS: list[str] = ["id", "created_at", "updated_at", "deleted_at"]

DEFAULT_BINARY_EXTENSIONS: list[str] = [
    ".png",
    ".jpg",
    ".jpeg",
    ".gif",
    ".ico",
    ".webp",
    ".pdf",
    ".zip",
    ".woff",
    ".woff2",
    ".ttf",
    ".eot",
]


class RoutesConfig(BaseModel):
    """Route settings substituted into generated route files."""

    prefix: str = Field(default="", description="Route name/URL prefix, may be empty")
    middleware: list[str] = Field(default_factory=lambda: ["web", "auth"])


class ViewConfig(BaseModel):
    """View settings substituted into generated templates."""

    extends: str = Field(default="layouts.app", description="Base layout the views extend")


class ScaffoldConfig(BaseModel):
    """Configuration for one generation run.

    ``templates`` maps a profile name to a directory.  Absolute directories
    are used as-is; relative ones are resolved against ``templates_root``
    (or the built-in stubs shipped with the package when unset).
    """

    namespace: str = Field(default="Modules", description="Base namespace of generated code")
    target_dir: Path = Field(default=Path("./modules"), description="Container directory for modules")
    default: str = Field(default="default", description="Template profile used when none is given")
    templates: dict[str, str] = Field(default_factory=lambda: {"default": "default"})
    templates_root: Optional[Path] = Field(default=None)
    view: ViewConfig = Field(default_factory=ViewConfig)
    routes: RoutesConfig = Field(default_factory=RoutesConfig)
    excluded_columns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDED_COLUMNS),
        description="Columns left out of the searchable-columns list",
    )
    binary_extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_BINARY_EXTENSIONS),
        description="File extensions that are renamed but never substituted",
    )
    database_url: str = Field(default="sqlite:///database.sqlite")

    @model_validator(mode="after")
    def _default_profile_exists(self) -> "ScaffoldConfig":
        if self.default not in self.templates:
            raise ValueError(
                f"default template profile {self.default!r} is not one of "
                f"{sorted(self.templates)}"
            )
        return self

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def is_binary(self, path: Path) -> bool:
        """Return ``True`` if *path* must be copied without substitution."""
        suffixes = {ext.lower() for ext in self.binary_extensions}
        name = path.name.lower()
        if name.endswith(".stub"):
            name = name[: -len(".stub")]
        return Path(name).suffix in suffixes

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "ScaffoldConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "ScaffoldConfig":
        """Build a ``ScaffoldConfig`` from environment variables.

        Recognised variables (all optional):
            CRUDCLAP_NAMESPACE, CRUDCLAP_TARGET_DIR, CRUDCLAP_TEMPLATE,
            CRUDCLAP_ROUTE_PREFIX, CRUDCLAP_ROUTE_MIDDLEWARE,
            CRUDCLAP_VIEW_EXTENDS, CRUDCLAP_DATABASE_URL.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("CRUDCLAP_NAMESPACE"):
            kwargs["namespace"] = os.environ["CRUDCLAP_NAMESPACE"]
        if os.environ.get("CRUDCLAP_TARGET_DIR"):
            kwargs["target_dir"] = Path(os.environ["CRUDCLAP_TARGET_DIR"])
        if os.environ.get("CRUDCLAP_DATABASE_URL"):
            kwargs["database_url"] = os.environ["CRUDCLAP_DATABASE_URL"]

        template = os.environ.get("CRUDCLAP_TEMPLATE")
        if template:
            kwargs["default"] = template
            kwargs["templates"] = {"default": "default", template: template}

        routes_kwargs: dict[str, Any] = {}
        if "CRUDCLAP_ROUTE_PREFIX" in os.environ:
            routes_kwargs["prefix"] = os.environ["CRUDCLAP_ROUTE_PREFIX"]
        if os.environ.get("CRUDCLAP_ROUTE_MIDDLEWARE"):
            routes_kwargs["middleware"] = [
                m.strip() for m in os.environ["CRUDCLAP_ROUTE_MIDDLEWARE"].split(",") if m.strip()
            ]

        view_kwargs: dict[str, Any] = {}
        if os.environ.get("CRUDCLAP_VIEW_EXTENDS"):
            view_kwargs["extends"] = os.environ["CRUDCLAP_VIEW_EXTENDS"]

        return cls(
            routes=RoutesConfig(**routes_kwargs),
            view=ViewConfig(**view_kwargs),
            **kwargs,
        )
