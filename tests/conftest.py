"""Shared pytest fixtures for the plugin-scaffolder test suite.

Provides reusable fixtures for:
- A scaffold configuration rooted in a temporary working directory
- A host manifest with known dependency versions
- A scripted prompter that replays canned answer maps
- Ready-made answer maps for the rule and parser wizards
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import pytest

from plugin_scaffolder.config import HostManifest, ScaffoldConfig
from plugin_scaffolder.prompts.questions import Question


# ---------------------------------------------------------------------------
# Prompting
# ---------------------------------------------------------------------------

class ScriptedPrompter:
    """Prompter double: returns one canned answer map per ``ask`` call.

    Every batch of questions it receives is recorded in ``calls`` so tests
    can inspect what was asked (e.g. which choices were offered).
    """

    def __init__(self, *rounds: Mapping[str, Any]) -> None:
        self.rounds = list(rounds)
        self.calls: list[list[Question]] = []

    async def ask(self, questions: Sequence[Question]) -> dict[str, Any]:
        self.calls.append(list(questions))
        if not self.rounds:
            raise AssertionError("ScriptedPrompter ran out of answers")
        return dict(self.rounds.pop(0))

    def question(self, call: int, name: str) -> Question:
        """Return the question called *name* from the *call*-th batch."""
        return next(q for q in self.calls[call] if q.name == name)


@pytest.fixture
def scripted_prompter() -> type[ScriptedPrompter]:
    """The :class:`ScriptedPrompter` class, to build with per-test answers."""
    return ScriptedPrompter


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def work_dir(tmp_path: Path) -> Path:
    """Working directory new packages are created in (auto-cleanup)."""
    directory = tmp_path / "work"
    directory.mkdir()
    yield directory


@pytest.fixture
def scaffold_config(work_dir: Path, tmp_path: Path) -> ScaffoldConfig:
    """Configuration pointing at the temporary working directory."""
    return ScaffoldConfig(cwd=work_dir, node_modules_dir=tmp_path / "node_modules")


@pytest.fixture
def host_manifest() -> HostManifest:
    """Host manifest with one runtime and a few development dependencies."""
    return HostManifest(
        name="sonarwhal",
        version="1.8.0",
        dependencies={"chalk": "^2.4.1"},
        devDependencies={"typescript": "^2.9.1", "ava": "^0.25.0"},
    )


@pytest.fixture
def node_modules(tmp_path: Path) -> Path:
    """Empty ``node_modules`` folder matching ``scaffold_config``."""
    directory = tmp_path / "node_modules"
    directory.mkdir()
    return directory


# ---------------------------------------------------------------------------
# Canned answers
# ---------------------------------------------------------------------------

@pytest.fixture
def single_rule_answers() -> dict[str, Any]:
    """Main answers for a single rule using the ``request`` use case."""
    return {
        "multi": False,
        "name": "no-https",
        "description": "desc",
        "category": "security",
        "useCase": "request",
        "scope": "any",
    }


@pytest.fixture
def multi_package_answers() -> dict[str, Any]:
    """Main answers for a multi-rule package."""
    return {
        "multi": True,
        "name": "typescript config",
        "description": "Rules for `tsconfig.json`",
    }


@pytest.fixture
def sub_rule_answers() -> list[dict[str, Any]]:
    """Two rounds of per-rule answers; the first asks for another round."""
    return [
        {
            "name": "is-valid",
            "description": "Checks the file is valid",
            "category": "interoperability",
            "useCase": "jsInjection",
            "scope": "local",
            "again": True,
        },
        {
            "name": "target",
            "description": "Checks the `target` option",
            "category": "performance",
            "useCase": "dom",
            "elementType": "script",
            "scope": "any",
            "again": False,
        },
    ]
