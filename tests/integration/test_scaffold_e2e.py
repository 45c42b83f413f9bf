"""Integration tests for the new-rule and new-parser wizards.

These tests drive the real generator with canned answers, render the bundled
templates into a temporary directory and verify that the generated package
contains the expected, well-formed files.

No network access or Node.js toolchain is required.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from plugin_scaffolder import GenerationState, ScaffoldConfig, ScaffoldGenerator


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _files(root: Path) -> set[str]:
    return {p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file()}


@pytest.fixture
def monorepo_dir(tmp_path: Path) -> Path:
    """A ``packages`` folder inside an official monorepo checkout."""
    (tmp_path / "package.json").write_text(json.dumps({"name": "@sonarwhal/monorepo"}))
    packages = tmp_path / "packages"
    packages.mkdir()
    return packages


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

@pytest.mark.integration
class TestNewRuleEndToEnd:
    """Rule packages generated from real templates."""

    async def test_official_single_rule(
        self, monorepo_dir: Path, scripted_prompter, single_rule_answers
    ) -> None:
        generator = ScaffoldGenerator(
            ScaffoldConfig(cwd=monorepo_dir), scripted_prompter(single_rule_answers)
        )
        assert await generator.new_rule() is True
        assert generator.state is GenerationState.SUCCESS

        root = monorepo_dir / "rule-no-https"
        assert _files(root) == {
            ".editorconfig",
            ".npmignore",
            "LICENSE.txt",
            "README.md",
            "package.json",
            "tsconfig.json",
            "src/index.ts",
            "src/no-https.ts",
            "tests/no-https.ts",
        }

        package = json.loads((root / "package.json").read_text())
        assert package["name"] == "@sonarwhal/rule-no-https"
        assert package["main"] == "dist/src/index.js"
        assert package["keywords"] == ["sonarwhal", "sonarwhal-rule", "no-https"]

        rule = (root / "src" / "no-https.ts").read_text()
        assert "export default class NoHttpsRule" in rule
        assert "context.on('fetch::start', validateFetchStart);" in rule

    async def test_community_multi_rule(
        self,
        work_dir: Path,
        scripted_prompter,
        multi_package_answers,
        sub_rule_answers,
    ) -> None:
        generator = ScaffoldGenerator(
            ScaffoldConfig(cwd=work_dir),
            scripted_prompter(multi_package_answers, *sub_rule_answers),
        )
        assert await generator.new_rule() is True

        root = work_dir / "rule-typescript-config"
        files = _files(root)
        for expected in (
            ".gitignore",
            ".gitattributes",
            ".eslintrc.json",
            ".editorconfig",
            ".sonarwhalrc",
            "docs/is-valid.md",
            "docs/target.md",
            "src/is-valid.ts",
            "src/target.ts",
            "tests/is-valid.ts",
            "tests/target.ts",
        ):
            assert expected in files, f"Missing {expected}"

        config = json.loads((root / ".sonarwhalrc").read_text())
        assert set(config["rules"]) == {"typescript-config/is-valid", "typescript-config/target"}

        package = json.loads((root / "package.json").read_text())
        assert package["name"] == "sonarwhal-rule-typescript-config"
        assert package["description"] == "Rules for `tsconfig.json`"
        assert "sonarwhal" in package["devDependencies"]

        eslintrc = json.loads((root / ".eslintrc.json").read_text())
        assert isinstance(eslintrc, dict)


@pytest.mark.integration
class TestNewParserEndToEnd:
    """Parser packages generated from real templates."""

    async def test_community_parser(self, work_dir: Path, scripted_prompter) -> None:
        prompter = scripted_prompter(
            {"name": "Web Manifest", "description": "Parses the `manifest`"},
            {"event": "fetch::end::*", "again": True},
            {"event": "element::", "element": "link", "again": False},
        )
        generator = ScaffoldGenerator(ScaffoldConfig(cwd=work_dir), prompter)
        assert await generator.new_parser() is True

        root = work_dir / "parser-web-manifest"
        assert {
            "src/index.ts",
            "src/web-manifest.ts",
            "tests/web-manifest.ts",
            "README.md",
            "package.json",
            "tsconfig.json",
            ".sonarwhalrc",
        } <= _files(root)

        parser = (root / "src" / "web-manifest.ts").read_text()
        assert "export default class WebManifestParser extends Parser" in parser
        assert "'element::link'" in parser
        assert "onElementLink" in parser

        config = json.loads((root / ".sonarwhalrc").read_text())
        assert config["parsers"] == ["web-manifest"]

        package = json.loads((root / "package.json").read_text())
        assert package["description"] == "Parses the `manifest`"
