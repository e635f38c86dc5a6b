"""Substitution context for template rendering.

Turns collected answers into the read-only, nested context that file names
and file contents are rendered against::

    {{ bob.version }}  {{ project.name }}  {{ author.email }}  {{ repo }}

The context is built once per run from frozen pydantic models, so no
rendering step can alter what a later step sees.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

from .errors import AnswersError
from .variants import flags_for, module_kind_for, resolve_variant

REQUIRED_ANSWERS: tuple[str, ...] = (
    "slug",
    "description",
    "author_name",
    "author_email",
    "author_url",
    "repo_url",
    "variant",
)

_PROJECT_PREFIX = re.compile(r"^(react-native-|@[^/]+/)")
_SEPARATOR_RUN = re.compile(r"[^A-Za-z0-9]+([A-Za-z0-9]?)")
_NON_ALNUM = re.compile(r"[^a-z0-9]")
_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


# ---------------------------------------------------------------------------
# Context models
# ---------------------------------------------------------------------------


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class ToolInfo(_Frozen):
    """Metadata about the tool that generated the project."""

    version: str


class ProjectInfo(_Frozen):
    """Identifiers and variant flags of the generated library."""

    slug: str
    description: str
    name: str
    package: str
    podspec: str
    native: bool
    cpp: bool
    swift: bool
    module: bool
    module_type: str


class AuthorInfo(_Frozen):
    name: str
    email: str
    url: str


class SubstitutionContext(_Frozen):
    """Everything a template may reference, grouped by namespace."""

    bob: ToolInfo
    project: ProjectInfo
    author: AuthorInfo
    repo: str

    def template_vars(self) -> dict[str, Any]:
        """Return the top-level names exposed to the template engine."""
        return {
            "bob": self.bob,
            "project": self.project,
            "author": self.author,
            "repo": self.repo,
        }


# ---------------------------------------------------------------------------
# Identifier derivation
# ---------------------------------------------------------------------------


def strip_project_prefix(slug: str) -> str:
    """Remove a leading ``@scope/`` or ``react-native-`` from *slug*."""
    return _PROJECT_PREFIX.sub("", slug, count=1)


def display_name(slug: str) -> str:
    """Derive the PascalCase display name of a package.

    ``react-native-my-lib`` -> ``MyLib``, ``@scope/cool-view`` -> ``CoolView``.
    Applying the function to its own output returns the output unchanged.
    """
    joined = _SEPARATOR_RUN.sub(lambda m: m.group(1).upper(), strip_project_prefix(slug))
    return joined[:1].upper() + joined[1:]


def package_identifier(slug: str) -> str:
    """Lower-case alphanumeric identifier, e.g. for the Android package path."""
    return _NON_ALNUM.sub("", strip_project_prefix(slug).lower())


def spec_identifier(slug: str) -> str:
    """Dash-separated identifier used for the podspec file name."""
    return _NON_ALNUM_RUN.sub("-", slug).lstrip("-")


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


def build_context(answers: Mapping[str, Any], *, version: str) -> SubstitutionContext:
    """Build the substitution context from validated *answers*.

    Args:
        answers: Mapping with every key in :data:`REQUIRED_ANSWERS`.
        version: Version of the generating tool, exposed as ``bob.version``.

    Raises:
        AnswersError: If any required answer is missing or blank.
        UnknownVariantError: If ``answers["variant"]`` is not a known variant.
    """
    missing = {
        key: "required"
        for key in REQUIRED_ANSWERS
        if answers.get(key) is None or not str(answers.get(key)).strip()
    }
    if missing:
        raise AnswersError(missing)

    slug = str(answers["slug"])
    variant = resolve_variant(answers["variant"])
    flags = flags_for(variant)

    return SubstitutionContext(
        bob=ToolInfo(version=version),
        project=ProjectInfo(
            slug=slug,
            description=str(answers["description"]),
            name=display_name(slug),
            package=package_identifier(slug),
            podspec=spec_identifier(slug),
            native=flags.native,
            cpp=flags.cpp,
            swift=flags.swift,
            module=flags.module,
            module_type=module_kind_for(variant).value,
        ),
        author=AuthorInfo(
            name=str(answers["author_name"]),
            email=str(answers["author_email"]),
            url=str(answers["author_url"]),
        ),
        repo=str(answers["repo_url"]),
    )
