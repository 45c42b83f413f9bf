"""Question definitions for the wizards.

A :class:`Question` describes one prompt: its answer key, message, kind,
choices, and three optional functions of the answers given so far
(``default``, ``when`` and ``validate``).  The question sets used by the
``new-rule`` and ``new-parser`` wizards are built here.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..scaffolder.models import Category, RuleScope, UseCase, menu_values
from ..scaffolder.naming import normalize
from ..scaffolder.usecases import ELEMENT_EVENT

Answers = Mapping[str, Any]


class QuestionKind(str, Enum):
    INPUT = "input"
    LIST = "list"
    CHECKBOX = "checkbox"
    CONFIRM = "confirm"


class QuestionsType(str, Enum):
    """Which rule question set to build."""
    MAIN = "main"  # package-level questions, asked once
    RULE = "rule"  # per-rule questions of a multi-rule package, asked in rounds


@dataclass(frozen=True)
class Choice:
    """One entry of a list/checkbox question."""
    name: str
    value: Any = None

    @property
    def resolved_value(self) -> Any:
        return self.name if self.value is None else self.value


@dataclass(frozen=True)
class Question:
    name: str
    message: str | Callable[[Answers], str]
    kind: QuestionKind = QuestionKind.INPUT
    choices: tuple[Choice, ...] = ()
    default: Any = None
    when: Callable[[Answers], bool] | None = None
    validate: Callable[[Any], bool] | None = None

    def is_asked(self, answers: Answers) -> bool:
        return self.when is None or bool(self.when(answers))

    def resolve_message(self, answers: Answers) -> str:
        return self.message(answers) if callable(self.message) else self.message

    def resolve_default(self, answers: Answers) -> Any:
        return self.default(answers) if callable(self.default) else self.default

    def is_valid(self, value: Any) -> bool:
        return self.validate is None or bool(self.validate(value))


def choices_from(values: Iterable[Any]) -> tuple[Choice, ...]:
    return tuple(Choice(name=str(v), value=v) for v in values)


# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------

def not_empty(value: Any) -> bool:
    """Reject blank free-text answers."""
    return str(value).strip() != ""


# Slugs that would collide with the package entry point (``src/index.ts``).
RESERVED_NAMES = frozenset({"index"})


def valid_name(value: Any) -> bool:
    """Reject names whose slug cannot name a generated file and class.

    The slug must be non-empty (``"---"`` is not), must not start with a
    digit (``import * as 2fa`` is not TypeScript), and must not be reserved.
    """
    if not not_empty(value):
        return False
    slug = normalize(str(value))
    return slug != "" and not slug[0].isdigit() and slug not in RESERVED_NAMES


# ---------------------------------------------------------------------------
# new-rule
# ---------------------------------------------------------------------------

USE_CASE_CHOICES: tuple[Choice, ...] = (
    Choice(name="DOM", value=UseCase.DOM.value),
    Choice(name="Resource Request", value=UseCase.REQUEST.value),
    Choice(name="Third Party Service", value=UseCase.THIRD_PARTY_SERVICE.value),
    Choice(name="JS injection", value=UseCase.JS_INJECTION.value),
)


def rule_questions(kind: QuestionsType) -> list[Question]:
    """Return the questions for one ``new-rule`` round.

    ``MAIN`` asks whether the package holds several rules and, for a
    single rule, everything about that rule.  ``RULE`` describes one rule
    of a multi-rule package and ends with the ``again`` confirmation.
    """
    def single(answers: Answers) -> bool:
        return not answers.get("multi")

    def noun(answers: Answers) -> str:
        return "package" if answers.get("multi") else "rule"

    return [
        Question(
            name="multi",
            message="Is this a package with multiple rules?",
            kind=QuestionKind.CONFIRM,
            default=False,
            when=lambda _: kind is QuestionsType.MAIN,
        ),
        Question(
            name="name",
            message=lambda a: f"What's the name of this new {noun(a)}?",
            default=lambda a: "newPackage" if a.get("multi") else "newRule",
            validate=valid_name,
        ),
        Question(
            name="description",
            message=lambda a: f"What's the description of this new {noun(a)} '{a.get('name')}'?",
            default=lambda a: f"Description for {a.get('name')}",
            validate=not_empty,
        ),
        Question(
            name="category",
            message="Please select the category of this new rule:",
            kind=QuestionKind.LIST,
            choices=choices_from(menu_values(Category)),
            default=Category.INTEROPERABILITY.value,
            when=single,
        ),
        Question(
            name="useCase",
            message="Please select the category of use case:",
            kind=QuestionKind.LIST,
            choices=USE_CASE_CHOICES,
            default=UseCase.DOM.value,
            when=single,
        ),
        Question(
            name="elementType",
            message="What DOM element does the rule need access to?",
            default="div",
            validate=not_empty,
            when=lambda a: a.get("useCase") == UseCase.DOM.value,
        ),
        Question(
            name="scope",
            message="Please select the scope of this new rule:",
            kind=QuestionKind.LIST,
            choices=choices_from(menu_values(RuleScope)),
            default=RuleScope.ANY.value,
            when=single,
        ),
        Question(
            name="again",
            message="Want to add more rules?",
            kind=QuestionKind.CONFIRM,
            default=True,
            when=lambda _: kind is QuestionsType.RULE,
        ),
    ]


# ---------------------------------------------------------------------------
# new-parser
# ---------------------------------------------------------------------------

def parser_info_questions() -> list[Question]:
    return [
        Question(
            name="name",
            message="What's the name of this new parser?",
            default="newParser",
            validate=valid_name,
        ),
        Question(
            name="description",
            message=lambda a: f"What's the description of this new parser '{a.get('name')}'?",
            default=lambda a: f"Description for {a.get('name')}",
            validate=not_empty,
        ),
    ]


def parser_event_questions(events: Iterable[str]) -> list[Question]:
    """Return the questions for one parser event round.

    *events* are the events still available; already chosen ones are
    filtered out by the caller.
    """
    return [
        Question(
            name="event",
            message="What event should the parser subscribe to?",
            kind=QuestionKind.LIST,
            choices=choices_from(events),
        ),
        Question(
            name="element",
            message="What DOM element does the parser need access to?",
            default="script",
            validate=not_empty,
            when=lambda a: a.get("event") == ELEMENT_EVENT,
        ),
        Question(
            name="again",
            message="Want to subscribe to more events?",
            kind=QuestionKind.CONFIRM,
            default=False,
        ),
    ]
