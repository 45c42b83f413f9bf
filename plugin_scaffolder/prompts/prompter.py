"""Interactive prompting.

The wizards only depend on the :class:`Prompter` protocol: given an ordered
list of questions, return the answer map.  :class:`RichPrompter` implements
it on top of ``rich.prompt`` and re-asks until every answer validates.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Any, Protocol

from rich.console import Console
from rich.prompt import Confirm, Prompt

from ..utils import console as default_console
from .questions import Question, QuestionKind


class Prompter(Protocol):
    async def ask(self, questions: Sequence[Question]) -> dict[str, Any]:
        """Ask *questions* in order and return ``{question.name: answer}``."""
        ...


class RichPrompter:
    """Asks questions on the terminal with ``rich.prompt``.

    Questions whose ``when`` predicate is false are skipped and get no entry
    in the answer map.  Prompting blocks on stdin, so a whole batch runs in a
    worker thread.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or default_console

    async def ask(self, questions: Sequence[Question]) -> dict[str, Any]:
        return await asyncio.to_thread(self._ask_all, list(questions))

    # -- Internals -----------------------------------------------------------

    def _ask_all(self, questions: list[Question]) -> dict[str, Any]:
        answers: dict[str, Any] = {}
        for question in questions:
            if not question.is_asked(answers):
                continue
            answers[question.name] = self._ask_one(question, answers)
        return answers

    def _ask_one(self, question: Question, answers: dict[str, Any]) -> Any:
        message = question.resolve_message(answers)
        default = question.resolve_default(answers)

        if question.kind is QuestionKind.CONFIRM:
            return Confirm.ask(message, default=bool(default), console=self.console)
        if question.kind is QuestionKind.LIST:
            return self._ask_list(question, message, default)
        if question.kind is QuestionKind.CHECKBOX:
            return self._ask_checkbox(question, message)

        while True:
            kwargs: dict[str, Any] = {"console": self.console}
            if default is not None:
                kwargs["default"] = str(default)
            value = Prompt.ask(message, **kwargs)
            if question.is_valid(value):
                return value.strip()
            self.console.print("[red]Please enter a valid value.[/red]")

    def _ask_list(self, question: Question, message: str, default: Any) -> Any:
        by_name = {c.name: c.resolved_value for c in question.choices}
        kwargs: dict[str, Any] = {"console": self.console, "choices": list(by_name)}
        default_name = next(
            (c.name for c in question.choices if c.resolved_value == default), None
        )
        if default_name is not None:
            kwargs["default"] = default_name
        return by_name[Prompt.ask(message, **kwargs)]

    def _ask_checkbox(self, question: Question, message: str) -> list[Any]:
        self.console.print(message)
        for index, choice in enumerate(question.choices, start=1):
            self.console.print(f"  [cyan]{index}[/cyan]) {choice.name}")

        while True:
            raw = Prompt.ask(
                "Numbers separated by commas (empty for none)",
                default="",
                console=self.console,
            )
            picked = [p.strip() for p in raw.split(",") if p.strip()]
            if all(p.isdigit() and 1 <= int(p) <= len(question.choices) for p in picked):
                values = [question.choices[int(p) - 1].resolved_value for p in picked]
                if question.is_valid(values):
                    return values
            self.console.print("[red]Please pick numbers from the list.[/red]")
