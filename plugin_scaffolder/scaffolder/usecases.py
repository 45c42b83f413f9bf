"""Static event tables.

Maps rule use cases to the host events a generated rule subscribes to, and
lists the events a generated parser may subscribe to.  The tables are built
once at import time and exposed read-only.
"""

from __future__ import annotations

from collections.abc import Iterable
from types import MappingProxyType
from typing import Mapping

from .models import ParserEvent, UseCase


class UnknownUseCaseError(KeyError):
    """Raised when a use case outside the closed :class:`UseCase` set is looked up."""

    def __init__(self, use_case: object) -> None:
        self.use_case = use_case
        super().__init__(f"Unknown use case: {use_case!r}")


USE_CASE_EVENTS: Mapping[UseCase, tuple[str, ...]] = MappingProxyType({
    UseCase.DOM: ("ElementFound",),
    UseCase.REQUEST: ("FetchStart", "FetchEnd", "FetchError"),
    UseCase.THIRD_PARTY_SERVICE: ("FetchStart", "FetchEnd"),
    UseCase.JS_INJECTION: ("ScanEnd",),
})

# Event type name -> subscription id used in generated rule code.
# ``{element}`` is replaced by the rule's element type.
EVENT_IDS: Mapping[str, str] = MappingProxyType({
    "ElementFound": "element::{element}",
    "FetchStart": "fetch::start",
    "FetchEnd": "fetch::end::*",
    "FetchError": "fetch::error",
    "ScanEnd": "scan::end",
})

ELEMENT_EVENT = "element::"

PARSER_EVENTS: tuple[str, ...] = (
    ELEMENT_EVENT,
    "fetch::start",
    "fetch::end::*",
    "fetch::error",
    "scan::start",
    "scan::end",
    "traverse::start",
    "traverse::down",
    "traverse::up",
    "traverse::end",
    "can-evaluate::script",
)

# Events that may appear several times in one parser (once per element).
REPEATABLE_PARSER_EVENTS: frozenset[str] = frozenset({ELEMENT_EVENT})


def events_for(use_case: UseCase | str) -> tuple[str, ...]:
    """Return the events a rule with *use_case* subscribes to.

    Raises:
        UnknownUseCaseError: If *use_case* is not a :class:`UseCase` value.
    """
    try:
        return USE_CASE_EVENTS[UseCase(use_case)]
    except (ValueError, KeyError):
        raise UnknownUseCaseError(use_case) from None


def event_id(event: str, element: str | None = None) -> str:
    """Return the subscription id for a rule event name."""
    template = EVENT_IDS.get(event, event)
    return template.replace("{element}", element or "*")


def available_parser_events(selected: Iterable[ParserEvent]) -> list[str]:
    """Return the parser events that can still be chosen.

    Events already in *selected* are removed, except the repeatable ones.
    """
    taken = {e.event for e in selected}
    return [
        event
        for event in PARSER_EVENTS
        if event in REPEATABLE_PARSER_EVENTS or event not in taken
    ]
