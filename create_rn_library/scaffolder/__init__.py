"""Template composition and rendering for new React Native libraries.

This module decides which template trees apply to a library variant, renders
them in order into a fresh directory, and substitutes project-specific values
into file names and file contents on the way.

Quick usage::

    from create_rn_library.scaffolder import LibraryScaffolder

    scaffolder = LibraryScaffolder()
    project_path = await scaffolder.generate("./react-native-awesome-thing", {
        "slug": "react-native-awesome-thing",
        "description": "Awesome things",
        "author_name": "Jane Doe",
        "author_email": "jane@example.com",
        "author_url": "https://github.com/jane",
        "repo_url": "https://github.com/jane/react-native-awesome-thing",
        "variant": "js-library",
    })
"""

from .binary import is_binary
from .context import SubstitutionContext, build_context, display_name
from .errors import (
    AnswersError,
    DestinationExistsError,
    ScaffoldError,
    TemplateRenderError,
    UnknownVariantError,
)
from .generator import LibraryScaffolder
from .planner import CompositionPlanner, PlanEntry
from .templates import TemplateRenderer
from .variants import ModuleKind, Variant, module_kind_for

__all__ = [
    "AnswersError",
    "CompositionPlanner",
    "DestinationExistsError",
    "LibraryScaffolder",
    "ModuleKind",
    "PlanEntry",
    "ScaffoldError",
    "SubstitutionContext",
    "TemplateRenderError",
    "TemplateRenderer",
    "UnknownVariantError",
    "Variant",
    "build_context",
    "display_name",
    "is_binary",
    "module_kind_for",
]
