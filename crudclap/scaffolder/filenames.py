"""Filename rewrite rules for template files.

A template tree contains files such as ``Model.php.stub`` or
``Http/Controllers/Controller.php.stub``.  ``FilenameTransformer`` runs an
ordered list of rules over the final path component to decide what each
file becomes:

1. ``StripSuffixRule(".stub")`` strips the template marker and marks the
   original for deletion.  Files without it are skipped.
2. ``ReplaceMarkerRule("Model", "{module}")`` turns ``Model.php`` into
   ``BlogPost.php``.
3. ``ReplaceMarkerRule("Controller", "{module}Controller")`` turns
   ``Controller.php`` into ``BlogPostController.php``.

Only the file name is rewritten; parent directories are kept as they are.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, Sequence

TEMPLATE_SUFFIX = ".stub"


@dataclass(frozen=True)
class FilenameDecision:
    """Where a template file ends up, and whether the original goes away."""

    source: Path
    destination: Path
    delete_original: bool


@dataclass
class NameState:
    """File name being rewritten, and whether a rule marked it as a template."""

    name: str
    marked: bool = False


class FilenameRule(Protocol):
    def apply(self, state: NameState, module_name: str) -> None: ...


@dataclass(frozen=True)
class StripSuffixRule:
    """Strip the template marker suffix; sets ``marked`` when it matched."""

    suffix: str = TEMPLATE_SUFFIX

    def apply(self, state: NameState, module_name: str) -> None:
        if state.name.endswith(self.suffix) and len(state.name) > len(self.suffix):
            state.name = state.name[: -len(self.suffix)]
            state.marked = True


@dataclass(frozen=True)
class ReplaceMarkerRule:
    """Replace a generic name right before the file extension.

    The rule only fires when the name ends with ``marker + extension``, so
    ``Model.php`` is rewritten but ``Model.blade.php`` and ``ModelFactory.php``
    are not.  ``replacement`` may contain ``{module}``, filled with the module
    name.  Only the trailing occurrence is replaced: ``BaseModel.php`` becomes
    ``BaseBlogPost.php``.
    """

    marker: str
    replacement: str
    extension: str = ".php"

    def apply(self, state: NameState, module_name: str) -> None:
        ending = self.marker + self.extension
        if not state.name.endswith(ending):
            return
        head = state.name[: -len(ending)]
        state.name = head + self.replacement.format(module=module_name) + self.extension


DEFAULT_RULES: tuple[FilenameRule, ...] = (
    StripSuffixRule(TEMPLATE_SUFFIX),
    ReplaceMarkerRule("Model", "{module}"),
    ReplaceMarkerRule("Controller", "{module}Controller"),
)


class FilenameTransformer:
    """Applies filename rules to template paths.

    Args:
        module_name: Name substituted for the generic ``Model`` marker.
        rules: Ordered rules; defaults to ``DEFAULT_RULES``.  A path is only
            materialised when some rule marks it as a template.
    """

    def __init__(self, module_name: str, rules: Optional[Sequence[FilenameRule]] = None) -> None:
        self.module_name = module_name
        self.rules: tuple[FilenameRule, ...] = tuple(rules if rules is not None else DEFAULT_RULES)

    def transform_name(self, name: str) -> Optional[str]:
        """Return the destination file name, or ``None`` to skip the file."""
        state = NameState(name)
        for rule in self.rules:
            rule.apply(state, self.module_name)
        if not state.marked:
            return None
        return state.name

    def transform(self, path: str | Path) -> Optional[FilenameDecision]:
        """Return the decision for *path*, or ``None`` when it is skipped."""
        source = Path(path)
        new_name = self.transform_name(source.name)
        if new_name is None:
            return None
        return FilenameDecision(
            source=source,
            destination=source.with_name(new_name),
            delete_original=True,
        )
