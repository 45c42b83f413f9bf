"""Rule and parser package generation.

Drives one ``new-rule`` or ``new-parser`` session end to end:

1. COLLECTING_PACKAGE_INFO -- ask the package-level questions.
2. COLLECTING_ITEMS        -- ask repeated rounds (extra rules, parser events).
3. BUILDING_ENTITIES       -- turn the answers into a frozen package model.
4. PLANNING                -- expand the package into a file manifest.
5. RENDERING               -- copy static folders, then render and write
                              every template, one group at a time.

A session ends in SUCCESS (``True``) or ABORTED (``False``, nothing written).
Render and write failures are reported and re-raised unchanged; files
already written are left in place.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from pathlib import Path
from typing import Any, Union

from .config import HostManifest, ScaffoldConfig
from .prompts.collector import RepeatCollector
from .prompts.prompter import Prompter, RichPrompter
from .prompts.questions import (
    QuestionsType,
    parser_event_questions,
    parser_info_questions,
    rule_questions,
)
from .scaffolder.builder import (
    build_parser_package,
    build_rule_package,
    parser_event_from_answers,
)
from .scaffolder.manifest import FileManifest, FileManifestPlanner, ManifestEntry, StaticCopy
from .scaffolder.models import ParserEvent, ParserPackage, RulePackage
from .scaffolder.naming import normalize
from .scaffolder.templates import TemplateRenderer
from .scaffolder.usecases import available_parser_events, event_id
from .utils import (
    console,
    copy_tree,
    ensure_dir,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
    write_text_file,
)

Package = Union[RulePackage, ParserPackage]


class GenerationState(str, Enum):
    IDLE = "idle"
    COLLECTING_PACKAGE_INFO = "collecting_package_info"
    COLLECTING_ITEMS = "collecting_items"
    BUILDING_ENTITIES = "building_entities"
    PLANNING = "planning"
    RENDERING = "rendering"
    SUCCESS = "success"
    ABORTED = "aborted"
    FAILED = "failed"


class ScaffoldGenerator:
    """Generates rule and parser packages from an interactive session.

    Attributes:
        config: Scaffolding configuration.
        host: Host manifest, read once at construction.
        prompter: Asks the questions; ``RichPrompter`` by default.
        renderer: Jinja2 renderer bound to the host manifest.
        planner: Expands packages into file manifests.
        state: Current :class:`GenerationState`.
    """

    def __init__(
        self,
        config: ScaffoldConfig,
        prompter: Prompter | None = None,
        *,
        host: HostManifest | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.host = host or config.load_host_manifest()
        self.prompter = prompter or RichPrompter()
        self.renderer = renderer or TemplateRenderer(
            config.template_dir,
            filters={"event_id": event_id},
            globals={"dependency_version": self.host.dependency_version},
        )
        self.planner = FileManifestPlanner(config)
        self.state = GenerationState.IDLE

    # -- Public API --------------------------------------------------------

    async def new_rule(self) -> bool:
        """Run the ``new-rule`` session.

        Returns:
            ``True`` once every file is written, ``False`` when the session
            was aborted before anything was written.
        """
        self.state = GenerationState.COLLECTING_PACKAGE_INFO
        answers = await self.prompter.ask(rule_questions(QuestionsType.MAIN))
        if not answers:
            return self._abort("No rule information was provided.")

        official = await asyncio.to_thread(self.config.is_official)

        rule_answers: list[dict[str, Any]] = []
        if answers.get("multi"):
            self.state = GenerationState.COLLECTING_ITEMS
            collector: RepeatCollector[dict[str, Any]] = RepeatCollector(
                convert=dict,
                key=lambda rule: normalize(str(rule.get("name", ""))),
                max_rounds=self.config.max_rounds,
            )
            rule_answers = await collector.collect(
                lambda _collected: self.prompter.ask(rule_questions(QuestionsType.RULE))
            )

        self.state = GenerationState.BUILDING_ENTITIES
        package = build_rule_package(
            answers, rule_answers, official=official, config=self.config, host=self.host
        )

        await self.generate(package)
        self._print_rule_usage(package)
        return True

    async def new_parser(self) -> bool:
        """Run the ``new-parser`` session.

        Each event round offers only the events not chosen yet (``element::``
        stays available for other elements); a repeated ``(event, element)``
        pair is dropped.
        """
        self.state = GenerationState.COLLECTING_PACKAGE_INFO
        answers = await self.prompter.ask(parser_info_questions())
        if not answers:
            return self._abort("No parser information was provided.")

        official = await asyncio.to_thread(self.config.is_official)

        self.state = GenerationState.COLLECTING_ITEMS
        collector: RepeatCollector[ParserEvent] = RepeatCollector(
            convert=parser_event_from_answers,
            key=lambda event: event.key,
            max_rounds=self.config.max_rounds,
        )
        events = await collector.collect(
            lambda collected: self.prompter.ask(
                parser_event_questions(available_parser_events(collected))
            )
        )

        self.state = GenerationState.BUILDING_ENTITIES
        package = build_parser_package(
            answers, events, official=official, config=self.config, host=self.host
        )

        await self.generate(package)
        self._print_parser_usage(package)
        return True

    async def generate(self, package: Package) -> FileManifest:
        """Plan and write every file of *package*.

        Static folders are copied first.  Then, group by group, the target
        directories are created and the group's files are rendered and
        written concurrently.

        Raises:
            ValueError: If two planned files share a target path.
            jinja2.TemplateError: If a template fails to render.
            OSError: If a directory or file cannot be written.
        """
        self.state = GenerationState.PLANNING
        try:
            manifest = self.planner.plan(package)
        except ValueError:
            self.state = GenerationState.FAILED
            raise

        self.state = GenerationState.RENDERING
        try:
            for copy in manifest.copies:
                await self._copy(copy)

            for group in manifest.groups():
                await asyncio.gather(
                    *(asyncio.to_thread(ensure_dir, d) for d in manifest.directories(group))
                )
                await asyncio.gather(*(self._emit(entry) for entry in group))
        except Exception:
            self.state = GenerationState.FAILED
            raise

        self.state = GenerationState.SUCCESS
        return manifest

    # -- Internals ---------------------------------------------------------

    def _abort(self, reason: str) -> bool:
        self.state = GenerationState.ABORTED
        print_warning(reason)
        return False

    async def _copy(self, copy: StaticCopy) -> None:
        console.print(f"  Copying {copy.label} into [bold]{copy.destination}[/bold]")
        await copy_tree(copy.source, copy.destination)

    async def _emit(self, entry: ManifestEntry) -> Path:
        try:
            content = self.renderer.render(entry.template, entry.data)
            return await write_text_file(entry.target, content)
        except Exception:
            print_error(f"Error generating {entry.target} from {entry.template}")
            raise

    def _print_rule_usage(self, package: RulePackage) -> None:
        kind = "package" if package.is_multi else "rule"
        print_success(f"New {kind} {package.name} created in {package.destination}")
        print_summary_table(
            {
                "Package": package.package_name,
                "Rules": ", ".join(r.class_name for r in package.items),
                "Official": "yes" if package.official else "no",
            },
            title="How to use",
        )
        folder = f"rule-{package.normalized_name}"
        if package.official:
            steps = [
                "Run 'yarn' to install the dependencies.",
                f"Go to the folder 'packages/{folder}'.",
                "Run 'yarn build' to build the project.",
                f"Go to the folder 'packages/{self.config.host_name}'.",
                f"Add your rule to '{self.config.config_file_name}'.",
                f"Run 'yarn {self.config.host_name} https://YourUrl' to analyze your site.",
            ]
        else:
            steps = [
                f"Go to the folder '{folder}'.",
                "Run 'npm run init' to install all the dependencies and build the project.",
                f"Run 'npm run {self.config.host_name} -- https://YourUrl' to analyze your site.",
            ]
        for number, step in enumerate(steps, start=1):
            console.print(f"  {number}. {step}")

    def _print_parser_usage(self, package: ParserPackage) -> None:
        print_success(f"New parser {package.name} created in {package.destination}")
        print_summary_table(
            {
                "Package": package.package_name,
                "Events": ", ".join(
                    f"{e.event}{e.element or ''}" for e in package.items[0].events
                ),
                "Official": "yes" if package.official else "no",
            },
            title="How to use",
        )
        if package.official:
            steps = [
                "Run 'yarn' to install the dependencies.",
                f"Go to the folder 'packages/parser-{package.normalized_name}'.",
                "Run 'yarn build' to build the project.",
            ]
        else:
            steps = [
                f"Go to the folder 'parser-{package.normalized_name}'.",
                "Run 'npm run init' to install all the dependencies and build the project.",
            ]
        for number, step in enumerate(steps, start=1):
            console.print(f"  {number}. {step}")
