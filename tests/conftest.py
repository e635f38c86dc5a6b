"""Shared pytest fixtures for the create-rn-library test suite.

Provides reusable fixtures for:
- Answers for each kind of variant
- Synthetic template trees (one small tree per template identifier)
- A ``Config`` pointing at the synthetic trees
- A recorder for git invocations
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest

from create_rn_library.config import TEMPLATE_IDS, Config


# ---------------------------------------------------------------------------
# Answers
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_answers() -> dict[str, Any]:
    """Valid answers for a plain JavaScript library."""
    return {
        "slug": "react-native-awesome-thing",
        "description": "Awesome things for React Native",
        "author_name": "Jane Doe",
        "author_email": "jane@example.com",
        "author_url": "https://github.com/janedoe",
        "repo_url": "https://github.com/janedoe/react-native-awesome-thing",
        "variant": "js-library",
    }


@pytest.fixture
def view_answers(sample_answers: dict[str, Any]) -> dict[str, Any]:
    """Valid answers for a Swift native view."""
    return {
        **sample_answers,
        "slug": "@scope/cool-view",
        "repo_url": "https://github.com/janedoe/scope-cool-view",
        "variant": "native-swift-view",
    }


# ---------------------------------------------------------------------------
# Synthetic template trees
# ---------------------------------------------------------------------------

def _write_tree(root: Path, template_id: str) -> None:
    """Create a tiny tree whose files identify the template they came from."""
    root.mkdir(parents=True)
    (root / f"{template_id}.txt").write_text(
        f"{template_id} for {{{{ project.name }}}}\n", encoding="utf-8"
    )
    (root / "shared.txt").write_text(f"written by {template_id}\n", encoding="utf-8")
    nested = root / "nested" / "{project.package}"
    nested.mkdir(parents=True)
    (nested / "$.keep").write_text("{{ project.slug }}\n", encoding="utf-8")


@pytest.fixture
def synthetic_templates(tmp_path: Path) -> Path:
    """Directory holding one synthetic tree per template identifier."""
    templates_dir = tmp_path / "templates"
    for template_id in TEMPLATE_IDS:
        _write_tree(templates_dir / template_id, template_id)
    return templates_dir


@pytest.fixture
def synthetic_config(synthetic_templates: Path) -> Config:
    """A Config whose template roots all point at synthetic trees."""
    return Config(templates_dir=synthetic_templates)


# ---------------------------------------------------------------------------
# Subprocess
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_git():
    """Patch ``run_command`` in the generator so no real git process runs.

    Yields the ``AsyncMock``; every call succeeds unless the test changes
    ``return_value`` or ``side_effect``.
    """
    mock = AsyncMock(return_value=(0, "", ""))
    with patch("create_rn_library.scaffolder.generator.run_command", mock):
        yield mock
