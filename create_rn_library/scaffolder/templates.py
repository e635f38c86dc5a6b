"""Jinja2 rendering of template trees.

Provides the TemplateRenderer class which mirrors a template directory into a
destination directory.  File contents are Jinja2 templates
(``{{ project.name }}``); file and directory names use single braces
(``{project.name}.podspec``) and may carry a leading ``$`` marker, which is
stripped before rendering.  Files recognised by
:func:`~create_rn_library.scaffolder.binary.is_binary` are copied verbatim.

Rendering happens in two phases.  :meth:`TemplateRenderer.plan_tree` walks the
source tree and decides, for every entry, where it goes and how it is
produced, without writing anything.  :meth:`TemplateRenderer.apply` then
performs the I/O one operation at a time, in plan order.  A path written twice
ends up with the content of the last write.
"""

from __future__ import annotations

import asyncio
import shutil
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from jinja2 import Environment, StrictUndefined, TemplateError

from .binary import is_binary
from .context import SubstitutionContext
from .errors import TemplateRenderError

NAME_MARKER = "$"


class OperationKind(str, Enum):
    DIRECTORY = "directory"
    BINARY = "binary"
    TEXT = "text"


@dataclass(frozen=True)
class RenderOperation:
    """A single step of materialising a template tree."""

    kind: OperationKind
    source: Path
    destination: Path


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders template trees, names and strings against a substitution context.

    Any reference to a variable missing from the context raises
    :class:`~create_rn_library.scaffolder.errors.TemplateRenderError`.
    """

    def __init__(self) -> None:
        self.env = Environment(
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        # Templates written with Windows line endings keep them.
        self.crlf_env = self.env.overlay(newline_sequence="\r\n")
        self.name_env = Environment(
            variable_start_string="{",
            variable_end_string="}",
            autoescape=False,
            undefined=StrictUndefined,
        )

    # -- String rendering --------------------------------------------------

    def render_string(
        self,
        template_string: str,
        context: SubstitutionContext | Mapping[str, Any],
        *,
        template_name: str = "<string>",
    ) -> str:
        """Render file content with the provided context."""
        try:
            env = self.crlf_env if "\r\n" in template_string else self.env
            template = env.from_string(template_string)
            return template.render(**_variables(context))
        except TemplateError as exc:
            raise TemplateRenderError(template_name, str(exc)) from exc

    def render_name(
        self, name: str, context: SubstitutionContext | Mapping[str, Any]
    ) -> str:
        """Render a single file or directory name.

        Names without ``{...}`` expressions come back unchanged apart from a
        stripped leading ``$``.
        """
        if name.startswith(NAME_MARKER):
            name = name[len(NAME_MARKER):]
        try:
            rendered = self.name_env.from_string(name).render(**_variables(context))
        except TemplateError as exc:
            raise TemplateRenderError(name, str(exc)) from exc

        if rendered in ("", ".", "..") or "/" in rendered or "\\" in rendered:
            raise TemplateRenderError(name, f"rendered to an invalid file name {rendered!r}")
        return rendered

    # -- Planning ----------------------------------------------------------

    def plan_tree(
        self,
        source: str | Path,
        destination: str | Path,
        context: SubstitutionContext | Mapping[str, Any],
    ) -> list[RenderOperation]:
        """Compute every operation needed to mirror *source* under *destination*.

        The first operation creates *destination* itself.  Entries are visited
        in name order, directories before their contents.  Nothing is written.

        Raises:
            FileNotFoundError: If *source* is not a directory.
            TemplateRenderError: If a name references an undefined variable.
        """
        source_dir = Path(source)
        if not source_dir.is_dir():
            raise FileNotFoundError(source_dir)

        operations = [RenderOperation(OperationKind.DIRECTORY, source_dir, Path(destination))]
        self._plan_entries(source_dir, Path(destination), context, operations)
        return operations

    def _plan_entries(
        self,
        source_dir: Path,
        destination: Path,
        context: SubstitutionContext | Mapping[str, Any],
        operations: list[RenderOperation],
    ) -> None:
        for entry in sorted(source_dir.iterdir(), key=lambda p: p.name):
            target = destination / self.render_name(entry.name, context)

            if entry.is_dir():
                operations.append(RenderOperation(OperationKind.DIRECTORY, entry, target))
                self._plan_entries(entry, target, context, operations)
            elif is_binary(entry):
                operations.append(RenderOperation(OperationKind.BINARY, entry, target))
            else:
                operations.append(RenderOperation(OperationKind.TEXT, entry, target))

    # -- Applying (async) --------------------------------------------------

    async def apply(
        self,
        operations: Iterable[RenderOperation],
        context: SubstitutionContext | Mapping[str, Any],
    ) -> list[Path]:
        """Perform *operations* strictly in order.

        Each file-system call runs in a worker thread and is awaited before
        the next one starts.  Existing files are overwritten.

        Returns:
            List of written file paths (directories excluded).
        """
        written: list[Path] = []

        for op in operations:
            if op.kind is OperationKind.DIRECTORY:
                await asyncio.to_thread(op.destination.mkdir, parents=True, exist_ok=True)
                continue

            if op.kind is OperationKind.BINARY:
                await asyncio.to_thread(shutil.copy, op.source, op.destination)
            else:
                try:
                    raw = await asyncio.to_thread(op.source.read_bytes)
                    content = raw.decode("utf-8")
                except UnicodeDecodeError as exc:
                    raise TemplateRenderError(str(op.source), "not valid UTF-8 text") from exc
                rendered = self.render_string(content, context, template_name=str(op.source))
                await asyncio.to_thread(_write_file, op.destination, rendered)
            written.append(op.destination)

        return written

    async def render_tree(
        self,
        source: str | Path,
        destination: str | Path,
        context: SubstitutionContext | Mapping[str, Any],
    ) -> list[Path]:
        """Mirror *source* under *destination*, rendering names and contents.

        A template at ``ios/{project.name}.h`` rendered with
        ``project.name == "Foo"`` is written to ``<destination>/ios/Foo.h``.

        Returns:
            List of written file paths.
        """
        operations = self.plan_tree(source, destination, context)
        return await self.apply(operations, context)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _variables(context: SubstitutionContext | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(context, SubstitutionContext):
        return context.template_vars()
    return dict(context)


def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8", newline="")
