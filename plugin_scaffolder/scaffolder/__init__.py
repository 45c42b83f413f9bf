"""Scaffolding core -- turns collected answers into a generated package tree.

This module builds the entity graph for a new rule or parser package,
derives every name deterministically, and plans which templates render to
which files.  The planned manifest is executed by
:class:`plugin_scaffolder.generator.ScaffoldGenerator`.

Quick usage::

    from plugin_scaffolder.config import ScaffoldConfig
    from plugin_scaffolder.scaffolder import FileManifestPlanner, build_rule_package

    config = ScaffoldConfig()
    package = build_rule_package(
        {"name": "no-https", "description": "desc", "useCase": "request"},
        [],
        official=True,
        config=config,
        host=config.load_host_manifest(),
    )
    manifest = FileManifestPlanner(config).plan(package)
"""

from plugin_scaffolder.scaffolder.builder import (
    build_parser_package,
    build_rule,
    build_rule_package,
    escape_description,
)
from plugin_scaffolder.scaffolder.manifest import FileManifest, FileManifestPlanner, ManifestEntry
from plugin_scaffolder.scaffolder.models import ParserPackage, RuleItem, RulePackage
from plugin_scaffolder.scaffolder.templates import TemplateRenderer

__all__ = [
    "FileManifest",
    "FileManifestPlanner",
    "ManifestEntry",
    "ParserPackage",
    "RuleItem",
    "RulePackage",
    "TemplateRenderer",
    "build_parser_package",
    "build_rule",
    "build_rule_package",
    "escape_description",
]
