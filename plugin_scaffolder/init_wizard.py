"""Host configuration wizard.

Generates the host configuration file (``.sonarwhalrc``) in the working
directory, either by extending a published configuration package or by
picking from the resources installed locally.  When nothing can be offered
the wizard stops without writing anything.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .catalog import ResourceCatalog, ResourceUnavailableError
from .config import ScaffoldConfig
from .prompts.prompter import Prompter, RichPrompter
from .prompts.questions import Choice, Question, QuestionKind, choices_from, not_empty
from .scaffolder.models import ResourceType
from .utils import console, print_banner, print_error, print_success, print_warning, save_json

DEFAULT_FORMATTER = "summary"
DEFAULT_BROWSERSLIST = "defaults"


class InitWizard:
    """Builds a host configuration from the operator's answers."""

    def __init__(
        self,
        config: ScaffoldConfig,
        prompter: Prompter | None = None,
        catalog: ResourceCatalog | None = None,
    ) -> None:
        self.config = config
        self.prompter = prompter or RichPrompter()
        self.catalog = catalog or ResourceCatalog(config)

    @property
    def config_path(self) -> Path:
        return self.config.working_dir / self.config.config_file_name

    async def run(self) -> bool:
        """Run the wizard; ``False`` means nothing was written."""
        print_banner(f"Welcome to {self.config.host_name} configuration generator")

        answers = await self.prompter.ask([
            Question(
                name="configType",
                message=(
                    "Do you want to use a predefined configuration or create your own "
                    "based on your installed packages?"
                ),
                kind=QuestionKind.LIST,
                choices=choices_from(["predefined", "custom"]),
                default="predefined",
            )
        ])

        try:
            if answers.get("configType", "predefined") == "predefined":
                host_config, packages = await self.extend_config()
            else:
                host_config, packages = await self.custom_config()
        except ResourceUnavailableError as exc:
            print_error(str(exc))
            return False

        await save_json(host_config, self.config_path, indent=4)
        print_success(f"Configuration written to {self.config_path}")

        installed = self.catalog.installed_resources(ResourceType.CONFIGURATION)
        missing = [
            name for name in packages
            if self.catalog.short_name(name, ResourceType.CONFIGURATION) not in installed
        ]
        if missing:
            print_warning("Install the configuration package before running an analysis:")
            console.print(f"  npm install {' '.join(missing)}")
        return True

    async def extend_config(self) -> tuple[dict[str, Any], list[str]]:
        """Offer the official configuration packages to extend from."""
        packages = await self.catalog.official_packages(ResourceType.CONFIGURATION)
        self.catalog.require(packages, ResourceType.CONFIGURATION)

        choices = tuple(
            Choice(
                name=self.catalog.short_name(pkg.name, ResourceType.CONFIGURATION),
                value=pkg.name,
            )
            for pkg in packages
        )
        answers = await self.prompter.ask([
            Question(
                name="configuration",
                message="Choose the configuration you want to extend from",
                kind=QuestionKind.LIST,
                choices=choices,
            )
        ])
        package_name = answers["configuration"]
        short = self.catalog.short_name(package_name, ResourceType.CONFIGURATION)
        return {"extends": [short]}, [package_name]

    async def custom_config(self) -> tuple[dict[str, Any], list[str]]:
        """Build a configuration from the installed connectors, formatters and rules."""
        connectors = self.catalog.installed_resources(ResourceType.CONNECTOR)
        formatters = self.catalog.installed_resources(ResourceType.FORMATTER)
        rules = self.catalog.installed_resources(ResourceType.RULE)
        parsers = self.catalog.installed_resources(ResourceType.PARSER)

        self.catalog.require(connectors, ResourceType.CONNECTOR)
        self.catalog.require(formatters, ResourceType.FORMATTER)
        self.catalog.require(rules, ResourceType.RULE)

        questions = [
            Question(
                name="connector",
                message="What connector do you want to use?",
                kind=QuestionKind.LIST,
                choices=choices_from(connectors),
            ),
            Question(
                name="formatter",
                message="What formatter do you want to use?",
                kind=QuestionKind.LIST,
                choices=choices_from(formatters),
                default=DEFAULT_FORMATTER if DEFAULT_FORMATTER in formatters else None,
            ),
            Question(
                name="rules",
                message="Choose the rules you want to add to your configuration",
                kind=QuestionKind.CHECKBOX,
                choices=choices_from(rules),
            ),
        ]
        # Parsers are optional.
        if parsers:
            questions.append(
                Question(
                    name="parsers",
                    message="What parsers do you want to use?",
                    kind=QuestionKind.CHECKBOX,
                    choices=choices_from(parsers),
                )
            )
        questions.append(
            Question(
                name="browserslist",
                message="Which browsers do you need to support? (browserslist queries, comma separated)",
                default=DEFAULT_BROWSERSLIST,
                validate=not_empty,
            )
        )

        answers = await self.prompter.ask(questions)

        host_config: dict[str, Any] = {
            "browserslist": [
                q.strip() for q in str(answers.get("browserslist", "")).split(",") if q.strip()
            ],
            "connector": {
                "name": answers["connector"],
                "options": {"waitFor": 1000},
            },
            "extends": [],
            "formatters": [answers.get("formatter", DEFAULT_FORMATTER)],
            "ignoredUrls": [],
            "rules": {rule: "error" for rule in answers.get("rules", [])},
            "rulesTimeout": 120000,
        }
        if answers.get("parsers"):
            host_config["parsers"] = list(answers["parsers"])
        return host_config, []
