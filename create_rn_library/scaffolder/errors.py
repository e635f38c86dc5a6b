"""Exceptions raised by the scaffolder.

Every fatal condition the CLI reports to the user derives from
:class:`ScaffoldError`.  File-system failures are not wrapped and surface as
``OSError``.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for fatal scaffolding errors."""


class DestinationExistsError(ScaffoldError):
    """Raised when the destination directory is already present."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(
            f"A folder already exists at {path}! "
            "Please specify another folder name or delete the existing one."
        )


class AnswersError(ScaffoldError):
    """Raised when required answers are missing or invalid."""

    def __init__(self, problems: dict[str, str]) -> None:
        self.problems = problems
        details = "; ".join(f"{field}: {reason}" for field, reason in problems.items())
        super().__init__(f"Invalid answers ({details})")


class UnknownVariantError(ScaffoldError):
    """Raised for a variant tag outside the supported set."""

    def __init__(self, variant: str) -> None:
        self.variant = variant
        super().__init__(f"Unknown library variant: {variant!r}")


class TemplateRenderError(ScaffoldError):
    """Raised when a template references an undefined variable or is malformed."""

    def __init__(self, template: str, message: str) -> None:
        self.template = template
        super().__init__(f"Failed to render {template}: {message}")
