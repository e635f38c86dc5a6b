"""Library variants and the flags derived from them.

The variant set is closed.  Every boolean exposed to templates as
``project.native``, ``project.cpp``, ``project.swift`` and ``project.module``
comes from :data:`VARIANT_FLAGS`; nothing is inferred from the tag string.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import UnknownVariantError


class Variant(str, Enum):
    """Flavour of library the user wants to develop."""
    NATIVE_OBJC_MODULE = "native-objc-module"
    NATIVE_SWIFT_MODULE = "native-swift-module"
    NATIVE_OBJC_VIEW = "native-objc-view"
    NATIVE_SWIFT_VIEW = "native-swift-view"
    CPP_MODULE = "cpp-module"
    JS_LIBRARY = "js-library"
    EXPO_LIBRARY = "expo-library"


class ModuleKind(str, Enum):
    """Whether a native variant exposes a callable module or a view component."""
    MODULE = "module"
    VIEW = "view"


@dataclass(frozen=True)
class VariantFlags:
    native: bool
    cpp: bool
    swift: bool
    module: bool


VARIANT_FLAGS: dict[Variant, VariantFlags] = {
    Variant.NATIVE_OBJC_MODULE: VariantFlags(native=True, cpp=False, swift=False, module=True),
    Variant.NATIVE_SWIFT_MODULE: VariantFlags(native=True, cpp=False, swift=True, module=True),
    Variant.NATIVE_OBJC_VIEW: VariantFlags(native=True, cpp=False, swift=False, module=True),
    Variant.NATIVE_SWIFT_VIEW: VariantFlags(native=True, cpp=False, swift=True, module=True),
    Variant.CPP_MODULE: VariantFlags(native=True, cpp=True, swift=False, module=True),
    Variant.JS_LIBRARY: VariantFlags(native=False, cpp=False, swift=False, module=False),
    Variant.EXPO_LIBRARY: VariantFlags(native=False, cpp=False, swift=False, module=True),
}

VARIANT_TITLES: dict[Variant, str] = {
    Variant.NATIVE_OBJC_MODULE: "Native module in Kotlin and Objective-C",
    Variant.NATIVE_SWIFT_MODULE: "Native module in Kotlin and Swift",
    Variant.CPP_MODULE: "Native module with C++ code",
    Variant.NATIVE_OBJC_VIEW: "Native view in Kotlin and Objective-C",
    Variant.NATIVE_SWIFT_VIEW: "Native view in Kotlin and Swift",
    Variant.JS_LIBRARY: "JavaScript library with native example",
    Variant.EXPO_LIBRARY: "JavaScript library with Expo example and Web support",
}

_VIEW_VARIANTS = frozenset({Variant.NATIVE_OBJC_VIEW, Variant.NATIVE_SWIFT_VIEW})


def resolve_variant(value: str | Variant) -> Variant:
    """Return the :class:`Variant` for *value*.

    Raises:
        UnknownVariantError: If *value* is not one of the supported tags.
    """
    if isinstance(value, Variant):
        return value
    try:
        return Variant(value)
    except ValueError as exc:
        raise UnknownVariantError(str(value)) from exc


def module_kind_for(variant: str | Variant) -> ModuleKind:
    """Map a variant to its module kind (view variants -> ``view``)."""
    if resolve_variant(variant) in _VIEW_VARIANTS:
        return ModuleKind.VIEW
    return ModuleKind.MODULE


def flags_for(variant: str | Variant) -> VariantFlags:
    """Look up the template flags for *variant*."""
    return VARIANT_FLAGS[resolve_variant(variant)]
