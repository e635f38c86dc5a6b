"""Tests for the template renderer (create_rn_library.scaffolder.templates).

Covers:
- File name rendering (single braces, ``$`` marker, invalid results)
- Content rendering (Jinja2 syntax, strict undefined handling)
- Planning a tree without touching the file system
- Applying a plan (binary copies, text rendering, overwrites)
"""

from __future__ import annotations

from pathlib import Path

import pytest

from create_rn_library.scaffolder.context import build_context
from create_rn_library.scaffolder.errors import TemplateRenderError
from create_rn_library.scaffolder.templates import (
    OperationKind,
    RenderOperation,
    TemplateRenderer,
)


pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
def context(sample_answers):
    return build_context(sample_answers, version="0.1.0")


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """A small template tree mixing text, binary and templated names."""
    root = tmp_path / "source"
    (root / "ios").mkdir(parents=True)
    (root / "android").mkdir()
    (root / "$.gitignore").write_text("node_modules/\n", encoding="utf-8")
    (root / "README.md").write_text("# {{ project.slug }}\n", encoding="utf-8")
    (root / "ios" / "{project.name}.h").write_text(
        "@interface {{ project.name }}\n", encoding="utf-8"
    )
    (root / "android" / "gradlew").write_bytes(b"#!/bin/sh\n{{ not.a.template }}\n")
    (root / "icon.png").write_bytes(b"\x89PNG\r\n\x1a\n{{ project.name }}\x00\xff")
    return root


# ---------------------------------------------------------------------------
# render_name
# ---------------------------------------------------------------------------


class TestRenderName:
    def test_marker_and_expression(self, renderer):
        assert renderer.render_name("${project.name}.ts", {"project": {"name": "Foo"}}) == "Foo.ts"

    def test_marker_stripped_without_expression(self, renderer, context):
        assert renderer.render_name("$package.json", context) == "package.json"

    def test_plain_name_unchanged(self, renderer, context):
        assert renderer.render_name("index.tsx", context) == "index.tsx"

    def test_only_leading_marker_stripped(self, renderer, context):
        assert renderer.render_name("price$.txt", context) == "price$.txt"

    def test_context_model(self, renderer, context):
        assert renderer.render_name("{project.podspec}.podspec", context) == (
            "react-native-awesome-thing.podspec"
        )

    def test_undefined_variable(self, renderer):
        with pytest.raises(TemplateRenderError):
            renderer.render_name("{project.name}.ts", {"project": {}})

    def test_undefined_namespace(self, renderer):
        with pytest.raises(TemplateRenderError):
            renderer.render_name("{nothing.here}", {})

    @pytest.mark.parametrize("value", ["a/b", "", "..", "a\\b"])
    def test_invalid_rendered_name(self, renderer, value):
        with pytest.raises(TemplateRenderError):
            renderer.render_name("{project.name}", {"project": {"name": value}})


# ---------------------------------------------------------------------------
# render_string
# ---------------------------------------------------------------------------


class TestRenderString:
    def test_substitution(self, renderer, context):
        out = renderer.render_string("{{ project.name }} by {{ author.name }}", context)
        assert out == "AwesomeThing by Jane Doe"

    def test_trailing_newline_kept(self, renderer, context):
        assert renderer.render_string("{{ repo }}\n", context).endswith("\n")

    def test_conditional_block_lines_trimmed(self, renderer, context):
        template = "a\n{% if project.native %}\nnative\n{% endif %}\nb\n"
        assert renderer.render_string(template, context) == "a\nb\n"

    def test_no_html_escaping(self, renderer):
        assert renderer.render_string("{{ v }}", {"v": "<a & b>"}) == "<a & b>"

    def test_undefined_variable(self, renderer, context):
        with pytest.raises(TemplateRenderError) as exc_info:
            renderer.render_string("{{ project.missing }}", context, template_name="x.md")
        assert exc_info.value.template == "x.md"

    def test_syntax_error(self, renderer, context):
        with pytest.raises(TemplateRenderError):
            renderer.render_string("{% if %}", context)


# ---------------------------------------------------------------------------
# plan_tree
# ---------------------------------------------------------------------------


class TestPlanTree:
    def test_plan_writes_nothing(self, renderer, context, source_tree, tmp_path):
        destination = tmp_path / "out"
        renderer.plan_tree(source_tree, destination, context)
        assert not destination.exists()

    def test_operations(self, renderer, context, source_tree, tmp_path):
        destination = tmp_path / "out"
        ops = renderer.plan_tree(source_tree, destination, context)

        assert ops[0] == RenderOperation(OperationKind.DIRECTORY, source_tree, destination)
        by_target = {op.destination.relative_to(destination).as_posix(): op.kind for op in ops[1:]}
        assert by_target == {
            ".gitignore": OperationKind.TEXT,
            "README.md": OperationKind.TEXT,
            "android": OperationKind.DIRECTORY,
            "android/gradlew": OperationKind.BINARY,
            "icon.png": OperationKind.BINARY,
            "ios": OperationKind.DIRECTORY,
            "ios/AwesomeThing.h": OperationKind.TEXT,
        }

    def test_directories_precede_contents(self, renderer, context, source_tree, tmp_path):
        ops = renderer.plan_tree(source_tree, tmp_path / "out", context)
        targets = [op.destination for op in ops]
        for index, op in enumerate(ops):
            if op.kind is not OperationKind.DIRECTORY:
                assert op.destination.parent in targets[:index]

    def test_missing_source(self, renderer, context, tmp_path):
        with pytest.raises(FileNotFoundError):
            renderer.plan_tree(tmp_path / "nope", tmp_path / "out", context)

    def test_undefined_name_fails_before_writing(self, renderer, context, source_tree, tmp_path):
        (source_tree / "{project.unknown}.txt").write_text("x", encoding="utf-8")
        destination = tmp_path / "out"
        with pytest.raises(TemplateRenderError):
            renderer.plan_tree(source_tree, destination, context)
        assert not destination.exists()


# ---------------------------------------------------------------------------
# apply / render_tree
# ---------------------------------------------------------------------------


class TestRenderTree:
    @pytest.mark.asyncio
    async def test_text_rendered(self, renderer, context, source_tree, tmp_path):
        destination = tmp_path / "out"
        await renderer.render_tree(source_tree, destination, context)

        assert (destination / "README.md").read_text() == "# react-native-awesome-thing\n"
        assert (destination / "ios" / "AwesomeThing.h").read_text() == (
            "@interface AwesomeThing\n"
        )
        assert (destination / ".gitignore").read_text() == "node_modules/\n"
        assert not (destination / "$.gitignore").exists()

    @pytest.mark.asyncio
    async def test_binary_copied_verbatim(self, renderer, context, source_tree, tmp_path):
        destination = tmp_path / "out"
        await renderer.render_tree(source_tree, destination, context)

        for rel in ("icon.png", "android/gradlew"):
            assert (destination / rel).read_bytes() == (source_tree / rel).read_bytes()

    @pytest.mark.asyncio
    async def test_returns_written_files(self, renderer, context, source_tree, tmp_path):
        destination = tmp_path / "out"
        written = await renderer.render_tree(source_tree, destination, context)
        assert sorted(p.relative_to(destination).as_posix() for p in written) == [
            ".gitignore",
            "README.md",
            "android/gradlew",
            "icon.png",
            "ios/AwesomeThing.h",
        ]

    @pytest.mark.asyncio
    async def test_later_tree_overwrites(self, renderer, context, tmp_path):
        first = tmp_path / "first"
        second = tmp_path / "second"
        for root, text in ((first, "first"), (second, "second")):
            root.mkdir()
            (root / "shared.txt").write_text(text, encoding="utf-8")
        (first / "only-first.txt").write_text("kept", encoding="utf-8")

        destination = tmp_path / "out"
        await renderer.render_tree(first, destination, context)
        await renderer.render_tree(second, destination, context)

        assert (destination / "shared.txt").read_text() == "second"
        assert (destination / "only-first.txt").read_text() == "kept"

    @pytest.mark.asyncio
    async def test_apply_follows_plan_order(self, renderer, context, tmp_path):
        a = tmp_path / "a.txt"
        b = tmp_path / "b.txt"
        a.write_text("from a", encoding="utf-8")
        b.write_text("from b", encoding="utf-8")
        target = tmp_path / "out" / "target.txt"
        ops = [
            RenderOperation(OperationKind.DIRECTORY, tmp_path, target.parent),
            RenderOperation(OperationKind.TEXT, a, target),
            RenderOperation(OperationKind.TEXT, b, target),
        ]

        await renderer.apply(ops, context)
        assert target.read_text() == "from b"

    @pytest.mark.asyncio
    async def test_non_utf8_text_file(self, renderer, context, tmp_path):
        source = tmp_path / "source"
        source.mkdir()
        (source / "data.bin").write_bytes(b"\xff\xfe\x00bad")
        with pytest.raises(TemplateRenderError):
            await renderer.render_tree(source, tmp_path / "out", context)

    @pytest.mark.asyncio
    async def test_line_endings_kept(self, renderer, context, tmp_path):
        source = tmp_path / "source"
        source.mkdir()
        (source / "gradlew.bat").write_bytes(b"@echo off\r\nset NAME={{ project.name }}\r\n")
        (source / "unix.sh").write_bytes(b"echo {{ project.name }}\n")
        destination = tmp_path / "out"

        await renderer.render_tree(source, destination, context)

        assert (destination / "gradlew.bat").read_bytes() == (
            b"@echo off\r\nset NAME=AwesomeThing\r\n"
        )
        assert (destination / "unix.sh").read_bytes() == b"echo AwesomeThing\n"

    def test_render_string_keeps_crlf(self, renderer, context):
        template = "{% if project.native %}\r\nnative\r\n{% endif %}\r\na\r\nb\r\n"
        assert renderer.render_string(template, context) == "a\r\nb\r\n"

    @pytest.mark.asyncio
    async def test_undefined_content_variable(self, renderer, context, tmp_path):
        source = tmp_path / "source"
        source.mkdir()
        (source / "bad.md").write_text("{{ project.nope }}", encoding="utf-8")
        with pytest.raises(TemplateRenderError) as exc_info:
            await renderer.render_tree(source, tmp_path / "out", context)
        assert "bad.md" in str(exc_info.value)
