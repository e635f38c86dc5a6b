"""Main scaffolding orchestrator.

Takes validated answers and a destination path, composes the template trees
selected for the chosen variant into that destination, then initialises a git
repository and prints the next steps for the user.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from .. import __version__
from ..config import Config
from ..utils import console, print_success, print_warning, run_command
from .context import build_context
from .errors import DestinationExistsError
from .planner import CompositionPlanner
from .templates import TemplateRenderer
from .variants import Variant, module_kind_for, resolve_variant

# (platform script, display name, colour) shown in the closing message.
_PLATFORMS: tuple[tuple[str, str, str], ...] = (
    ("ios", "iOS", "cyan"),
    ("android", "Android", "green"),
)
_WEB_PLATFORM = ("web", "Web", "blue")


class LibraryScaffolder:
    """Scaffolding orchestrator.

    Given answers describing a library, generates a project directory from
    the shipped template trees:
    - ``common`` files (manifest, README, tooling config)
    - the JS library sources, or the Android native module/view
    - an example app under ``example/`` (or Expo web support)
    - one native language overlay (C++, Swift or Objective-C) for native variants

    Template trees are rendered one after another into the same destination;
    if two trees produce the same path the later tree wins.
    """

    def __init__(
        self,
        config: Config | None = None,
        renderer: TemplateRenderer | None = None,
        planner: CompositionPlanner | None = None,
    ) -> None:
        self.config = config or Config()
        self.renderer = renderer or TemplateRenderer()
        self.planner = planner or CompositionPlanner(self.config)

    # -- Public API --------------------------------------------------------

    async def generate(
        self, destination: str | Path, answers: BaseModel | Mapping[str, Any]
    ) -> Path:
        """Render every planned template tree into *destination*.

        Args:
            destination: Directory to create.  It must not exist yet.
            answers: Validated answers (an ``Answers`` model or a mapping with
                the same keys).

        Returns:
            Path to the generated project root.

        Raises:
            DestinationExistsError: If *destination* already exists.  Raised
                before anything is written.
            AnswersError: If a required answer is missing.
            UnknownVariantError: If the variant is not supported.
            TemplateRenderError: If a template references an undefined value.
                Files written before the failure are left in place.
        """
        project_root = Path(destination)
        if await asyncio.to_thread(project_root.exists):
            raise DestinationExistsError(project_root)

        values = _answers_mapping(answers)
        context = build_context(values, version=__version__)
        variant = resolve_variant(values["variant"])
        plan = self.planner.plan(variant, module_kind_for(variant))

        for entry in plan:
            await self.renderer.render_tree(
                entry.source, project_root / entry.destination, context
            )

        return project_root

    async def create(
        self,
        destination: str | Path,
        answers: BaseModel | Mapping[str, Any],
        *,
        init_git: bool = True,
    ) -> Path:
        """Generate the project, initialise git and print the next steps."""
        project_root = await self.generate(destination, answers)

        if init_git and await self.initialize_repository(project_root):
            print_success("Initialized a git repository with an initial commit")

        variant = resolve_variant(_answers_mapping(answers)["variant"])
        print_next_steps(project_root, variant)
        return project_root

    async def initialize_repository(self, project_root: Path) -> bool:
        """Create a git repository with an initial commit of every file.

        Best effort: failures are reported as warnings and never raised.

        Returns:
            ``True`` if all git commands succeeded.
        """
        commands = [
            ["git", "init"],
            ["git", "add", "."],
            ["git", "commit", "-m", self.config.git_commit_message],
        ]
        for cmd in commands:
            try:
                returncode, _, stderr = await run_command(
                    cmd, cwd=project_root, timeout=self.config.git_timeout
                )
            except OSError as exc:
                print_warning(f"  {' '.join(cmd)} failed: {exc}")
                return False
            if returncode != 0:
                print_warning(f"  {' '.join(cmd)} failed: {stderr}")
                return False
        return True


# ---------------------------------------------------------------------------
# Presentation
# ---------------------------------------------------------------------------


def print_next_steps(project_root: Path, variant: Variant) -> None:
    """Print how to bootstrap the generated project and run the example app."""
    platforms = list(_PLATFORMS)
    if variant is Variant.EXPO_LIBRARY:
        platforms.append(_WEB_PLATFORM)

    console.print()
    console.print(f"Project created successfully at [yellow]{project_root.name}[/yellow]!")
    console.print()
    console.print("[bold magenta]Get started[/bold magenta] with the project[dim]:[/dim]")
    console.print()
    console.print("  [dim]$[/dim] yarn")
    for script, name, color in platforms:
        console.print()
        console.print(f"[{color}]Run the example app on [bold]{name}[/bold][/{color}][dim]:[/dim]")
        console.print()
        console.print(f"  [dim]$[/dim] yarn example {script}")
    console.print()
    console.print("[yellow]Good luck![/yellow]")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _answers_mapping(answers: BaseModel | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(answers, BaseModel):
        return answers.model_dump()
    return dict(answers)
