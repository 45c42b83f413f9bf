"""Entity building from raw prompt answers.

Turns the answer maps collected by the wizards into the frozen models in
:mod:`.models`.  Nothing here prompts, reads, or writes; every function is a
pure transform over answers that have already been collected.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from ..config import HostManifest, ScaffoldConfig
from .models import (
    Category,
    ParserEvent,
    ParserItem,
    ParserPackage,
    ResourceType,
    RuleItem,
    RulePackage,
    RuleScope,
    UseCase,
)
from .naming import normalize, to_identifier
from .usecases import ELEMENT_EVENT, events_for

Answers = Mapping[str, Any]


def escape_description(text: str) -> str:
    """Backslash-escape backslashes and backticks so user text cannot close a
    template literal.

    ``This is an `important` rule`` -> ``This is an \\`important\\` rule``
    """
    return text.replace("\\", "\\\\").replace("`", "\\`")


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

def build_rule(answers: Answers, parent_name: str = "") -> RuleItem:
    """Build one rule from a round of answers.

    *parent_name* is the normalized name of the enclosing multi-rule package;
    when given, it prefixes the generated class name.  An explicit
    ``events`` answer is used as-is, otherwise the events are resolved from
    the ``useCase`` answer.
    """
    name = str(answers["name"]).strip()
    normalized_name = normalize(name)

    raw_use_case = answers.get("useCase")
    events = answers.get("events")
    if events is None:
        events = events_for(raw_use_case) if raw_use_case else ()
    use_case = UseCase(raw_use_case) if raw_use_case else None

    return RuleItem(
        name=name,
        normalized_name=normalized_name,
        class_name=f"{to_identifier(normalized_name, parent_name)}Rule",
        category=Category(answers.get("category") or Category.OTHER),
        use_case=use_case,
        events=tuple(events),
        element_type=answers.get("elementType") if use_case is UseCase.DOM else None,
        scope=RuleScope(answers.get("scope") or RuleScope.ANY),
        description=escape_description(str(answers.get("description", ""))),
        parent_name=parent_name,
    )


def build_rule_package(
    answers: Answers,
    rule_answers: Sequence[Answers],
    *,
    official: bool,
    config: ScaffoldConfig,
    host: HostManifest,
) -> RulePackage:
    """Build the rule package for a completed ``new-rule`` session.

    For a single-rule package the rule is built from *answers* itself;
    for a multi-rule package each entry of *rule_answers* becomes a rule
    whose class name is prefixed by the package name.
    """
    name = str(answers["name"]).strip()
    normalized_name = normalize(name)
    is_multi = bool(answers.get("multi"))

    if is_multi:
        rules = tuple(build_rule(r, normalized_name) for r in rule_answers)
    else:
        rules = (build_rule(answers),)

    return RulePackage(
        name=name,
        normalized_name=normalized_name,
        description=escape_description(str(answers.get("description", ""))),
        is_multi=is_multi,
        official=official,
        package_name=config.package_name(ResourceType.RULE.value, normalized_name, official),
        version=host.version,
        destination=config.working_dir / f"{ResourceType.RULE.value}-{normalized_name}",
        items=rules,
    )


# ---------------------------------------------------------------------------
# Parsers
# ---------------------------------------------------------------------------

def parser_event_from_answers(answers: Answers) -> ParserEvent:
    """Build one parser event from an event round.

    The ``element`` answer is only kept for the ``element::`` event, trimmed
    and lower-cased so ``Div`` and ``div`` are the same subscription.
    """
    event = str(answers["event"])
    element = None
    if event == ELEMENT_EVENT and answers.get("element"):
        element = str(answers["element"]).strip().lower()
    return ParserEvent(event=event, element=element)


def build_parser(answers: Answers, events: Sequence[ParserEvent]) -> ParserItem:
    name = str(answers["name"]).strip()
    normalized_name = normalize(name)
    return ParserItem(
        name=name,
        normalized_name=normalized_name,
        class_name=f"{to_identifier(normalized_name)}Parser",
        description=escape_description(str(answers.get("description", ""))),
        events=tuple(events),
    )


def build_parser_package(
    answers: Answers,
    events: Sequence[ParserEvent],
    *,
    official: bool,
    config: ScaffoldConfig,
    host: HostManifest,
) -> ParserPackage:
    """Build the parser package for a completed ``new-parser`` session."""
    parser = build_parser(answers, events)
    return ParserPackage(
        name=parser.name,
        normalized_name=parser.normalized_name,
        description=parser.description,
        official=official,
        package_name=config.package_name(
            ResourceType.PARSER.value, parser.normalized_name, official
        ),
        version=host.version,
        destination=config.working_dir
        / f"{ResourceType.PARSER.value}-{parser.normalized_name}",
        items=(parser,),
    )
