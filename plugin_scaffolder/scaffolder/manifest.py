"""File manifest planning.

Expands a finished package into the ordered list of files to generate:
which static folders to copy first, and which template renders to which
target path with which data.  Entries are grouped so that files with no
path dependency on each other can be written concurrently.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

from ..config import ScaffoldConfig
from .models import ParserPackage, ResourceType, RulePackage

Package = Union[RulePackage, ParserPackage]

COMMON_GROUP = "common"


@dataclass(frozen=True)
class ManifestEntry:
    """One planned file: render *template* with *data* into *target*."""
    template: str
    target: Path
    data: dict[str, Any] = field(compare=False, repr=False)
    group: str = COMMON_GROUP


@dataclass(frozen=True)
class StaticCopy:
    """A folder of non-templated files copied wholesale into the package."""
    source: Path
    destination: Path
    label: str


@dataclass(frozen=True)
class TemplateSet:
    """Template ids used for one package kind."""
    index: str
    readme: str
    source: str
    tests: str
    doc: str | None = None


SHARED_TSCONFIG = "shared/tsconfig.json.j2"
SHARED_PACKAGE = "shared/package.json.j2"
SHARED_CONFIG = "shared/config.j2"

TEMPLATE_SETS: dict[ResourceType, TemplateSet] = {
    ResourceType.RULE: TemplateSet(
        index="new-rule/index.ts.j2",
        readme="new-rule/readme.md.j2",
        source="new-rule/rule.ts.j2",
        tests="new-rule/tests.ts.j2",
        doc="new-rule/rule-doc.md.j2",
    ),
    ResourceType.PARSER: TemplateSet(
        index="new-parser/index.ts.j2",
        readme="new-parser/readme.md.j2",
        source="new-parser/parser.ts.j2",
        tests="new-parser/tests.ts.j2",
    ),
}


@dataclass(frozen=True)
class FileManifest:
    """Everything to produce for one package, in execution order."""
    destination: Path
    copies: tuple[StaticCopy, ...]
    entries: tuple[ManifestEntry, ...]

    def __len__(self) -> int:
        return len(self.entries)

    def groups(self) -> list[tuple[ManifestEntry, ...]]:
        """Return the entries split by group, groups in first-seen order."""
        grouped: dict[str, list[ManifestEntry]] = {}
        for entry in self.entries:
            grouped.setdefault(entry.group, []).append(entry)
        return [tuple(entries) for entries in grouped.values()]

    @staticmethod
    def directories(entries: tuple[ManifestEntry, ...]) -> list[Path]:
        """Return the distinct parent directories *entries* write into."""
        return sorted({entry.target.parent for entry in entries})


class FileManifestPlanner:
    """Plans the files of a generated package.

    ===========================  =========================================
    condition                    files
    ===========================  =========================================
    always                       ``src/index.ts``, ``README.md``,
                                 ``tsconfig.json``, ``package.json``
    community package            the host configuration file
    each item                    ``src/<item>.ts``, ``tests/<item>.ts``
    multi-rule package           ``docs/<item>.md``
    ===========================  =========================================

    Static folders are copied before any template is written, community
    extras first, so templated files may overwrite them.
    """

    def __init__(self, config: ScaffoldConfig) -> None:
        self.config = config

    def plan(self, package: Package) -> FileManifest:
        dest = package.destination
        templates = TEMPLATE_SETS[package.kind]
        host = {
            "name": self.config.host_name,
            "official_scope": self.config.official_scope,
            "community_prefix": self.config.community_prefix,
            "config_file_name": self.config.config_file_name,
        }
        package_data = package.model_dump(mode="json")
        common = {"package": package_data, "host": host}

        entries: list[ManifestEntry] = [
            ManifestEntry(templates.index, dest / "src" / "index.ts", common),
            ManifestEntry(templates.readme, dest / "README.md", common),
            ManifestEntry(SHARED_TSCONFIG, dest / "tsconfig.json", common),
            ManifestEntry(SHARED_PACKAGE, dest / "package.json", common),
        ]
        if not package.official:
            entries.append(
                ManifestEntry(SHARED_CONFIG, dest / self.config.config_file_name, common)
            )

        for item, item_data in zip(package.items, package_data["items"]):
            data = {**common, "item": item_data}
            slug = item.normalized_name
            group = f"item:{slug}"
            entries.append(
                ManifestEntry(templates.source, dest / "src" / f"{slug}.ts", data, group)
            )
            entries.append(
                ManifestEntry(templates.tests, dest / "tests" / f"{slug}.ts", data, group)
            )
            if package.is_multi and templates.doc:
                entries.append(
                    ManifestEntry(templates.doc, dest / "docs" / f"{slug}.md", data, group)
                )

        seen: set[Path] = set()
        for entry in entries:
            if entry.target in seen:
                raise ValueError(
                    f"{entry.target} is planned twice; rename '{package.name}' or its items"
                )
            seen.add(entry.target)

        return FileManifest(
            destination=dest,
            copies=self._copies(package),
            entries=tuple(entries),
        )

    def _copies(self, package: Package) -> tuple[StaticCopy, ...]:
        copies: list[StaticCopy] = []
        if not package.official:
            copies.append(
                StaticCopy(
                    self.config.community_files_dir,
                    package.destination,
                    "community files",
                )
            )
        copies.append(
            StaticCopy(self.config.files_dir, package.destination, "shared files")
        )
        return tuple(copies)
