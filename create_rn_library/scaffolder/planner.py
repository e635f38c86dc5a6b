"""Selection and ordering of template trees for a variant.

Every plan starts with the ``common`` tree.  Pure JavaScript variants add the
JS library tree plus either the Expo overlay or the example app; native
variants add the example app, the Android module/view tree and exactly one
language overlay (C++, Swift or Objective-C).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..config import Config
from .errors import ScaffoldError
from .variants import ModuleKind, Variant, resolve_variant

ROOT = Path(".")
EXAMPLE = Path("example")


@dataclass(frozen=True)
class PlanEntry:
    """One template tree and where it lands relative to the destination root."""

    template: str
    source: Path
    destination: Path


class CompositionPlanner:
    """Builds the ordered list of template trees for a library variant."""

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or Config()

    def plan(
        self, variant: str | Variant, module_kind: str | ModuleKind
    ) -> tuple[PlanEntry, ...]:
        """Return the trees to render, in order, for *variant*.

        Args:
            variant: One of the supported variant tags.
            module_kind: ``"module"`` or ``"view"``; selects between the
                module and view flavours of the native trees.

        Raises:
            UnknownVariantError: If *variant* is not supported.
            ScaffoldError: If *module_kind* is unknown or a selected tree is
                not configured.
        """
        variant = resolve_variant(variant)
        try:
            kind = ModuleKind(module_kind)
        except ValueError as exc:
            raise ScaffoldError(f"Unknown module kind: {module_kind!r}") from exc

        steps: list[tuple[str, Path]] = [("common", ROOT)]

        if variant is Variant.EXPO_LIBRARY:
            steps += [("js-library", ROOT), ("expo-library", ROOT)]
        elif variant is Variant.JS_LIBRARY:
            steps += [("js-library", ROOT), ("example", EXAMPLE)]
        else:
            steps += [("example", EXAMPLE), (_native_tree(kind), ROOT)]
            steps.append((_language_overlay(variant, kind), ROOT))

        return tuple(self._entry(template, destination) for template, destination in steps)

    def _entry(self, template: str, destination: Path) -> PlanEntry:
        try:
            source = self.config.template_path(template)
        except KeyError as exc:
            raise ScaffoldError(f"No template tree configured for {template!r}") from exc
        return PlanEntry(template=template, source=source, destination=destination)


def _native_tree(kind: ModuleKind) -> str:
    if kind is ModuleKind.VIEW:
        return "native-view-library"
    return "native-library"


def _language_overlay(variant: Variant, kind: ModuleKind) -> str:
    if variant is Variant.CPP_MODULE:
        return "cpp-library"

    suffix = "-view-library" if kind is ModuleKind.VIEW else "-library"
    if variant in (Variant.NATIVE_SWIFT_MODULE, Variant.NATIVE_SWIFT_VIEW):
        return "swift" + suffix
    return "objc" + suffix
