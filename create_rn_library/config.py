"""create-rn-library configuration.

Typed configuration for the scaffolder.  The set of template trees is an
explicit mapping from template identifier to root directory so that the
composition planner and the renderer can be pointed at synthetic trees in
tests, or at a custom checkout of the templates.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, model_validator

_DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "templates"

# Every tree the composition planner may select.
TEMPLATE_IDS: tuple[str, ...] = (
    "common",
    "js-library",
    "expo-library",
    "cpp-library",
    "example",
    "native-library",
    "native-view-library",
    "objc-library",
    "objc-view-library",
    "swift-library",
    "swift-view-library",
)


class Config(BaseModel):
    """Global create-rn-library configuration.

    Instances are typically created once by the CLI entry point and then
    passed to :class:`~create_rn_library.scaffolder.LibraryScaffolder`.

    ``template_roots`` entries that are not given explicitly are filled in
    from ``templates_dir`` using the template identifier as directory name.
    """

    templates_dir: Path = Field(default=_DEFAULT_TEMPLATES_DIR)
    template_roots: dict[str, Path] = Field(default_factory=dict)

    git_commit_message: str = Field(default="chore: initial commit")
    git_timeout: int = Field(default=60, ge=1, description="Per-command git timeout in seconds")

    github_api_url: str = Field(default="https://api.github.com")
    github_timeout: float = Field(
        default=5.0, gt=0, description="Timeout for the GitHub username lookup in seconds"
    )

    @model_validator(mode="after")
    def _fill_template_roots(self) -> "Config":
        for template_id in TEMPLATE_IDS:
            self.template_roots.setdefault(template_id, self.templates_dir / template_id)
        return self

    def template_path(self, template_id: str) -> Path:
        """Return the root directory of the tree registered as *template_id*.

        Raises:
            KeyError: If no tree is registered under that identifier.
        """
        return self.template_roots[template_id]

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            CRNL_TEMPLATES_DIR, CRNL_GIT_COMMIT_MESSAGE, CRNL_GIT_TIMEOUT,
            CRNL_GITHUB_API_URL, CRNL_GITHUB_TIMEOUT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("CRNL_TEMPLATES_DIR"):
            kwargs["templates_dir"] = Path(os.environ["CRNL_TEMPLATES_DIR"])
        if os.environ.get("CRNL_GIT_COMMIT_MESSAGE"):
            kwargs["git_commit_message"] = os.environ["CRNL_GIT_COMMIT_MESSAGE"]
        if os.environ.get("CRNL_GIT_TIMEOUT"):
            kwargs["git_timeout"] = int(os.environ["CRNL_GIT_TIMEOUT"])
        if os.environ.get("CRNL_GITHUB_API_URL"):
            kwargs["github_api_url"] = os.environ["CRNL_GITHUB_API_URL"].rstrip("/")
        if os.environ.get("CRNL_GITHUB_TIMEOUT"):
            kwargs["github_timeout"] = float(os.environ["CRNL_GITHUB_TIMEOUT"])

        return cls(**kwargs)
