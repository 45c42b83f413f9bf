"""Tests for the terminal prompter (plugin_scaffolder.prompts.prompter).

``rich.prompt`` is patched so no test touches stdin.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from rich.console import Console

from plugin_scaffolder.prompts.prompter import RichPrompter
from plugin_scaffolder.prompts.questions import (
    Choice,
    Question,
    QuestionKind,
    not_empty,
)

pytestmark = pytest.mark.unit

PROMPT = "plugin_scaffolder.prompts.prompter.Prompt.ask"
CONFIRM = "plugin_scaffolder.prompts.prompter.Confirm.ask"


@pytest.fixture
def prompter():
    return RichPrompter(console=Console(file=MagicMock(), force_terminal=False))


class TestRichPrompter:
    async def test_input_is_stripped(self, prompter):
        with patch(PROMPT, return_value="  no-https ") as ask:
            answers = await prompter.ask([Question(name="name", message="Name?", default="x")])
        assert answers == {"name": "no-https"}
        assert ask.call_args.kwargs["default"] == "x"

    async def test_invalid_input_is_asked_again(self, prompter):
        question = Question(name="name", message="Name?", validate=not_empty)
        with patch(PROMPT, side_effect=["", "  ", "ok"]) as ask:
            answers = await prompter.ask([question])
        assert answers == {"name": "ok"}
        assert ask.call_count == 3

    async def test_confirm(self, prompter):
        with patch(CONFIRM, return_value=True) as confirm:
            answers = await prompter.ask(
                [Question(name="multi", message="Multi?", kind=QuestionKind.CONFIRM, default=False)]
            )
        assert answers == {"multi": True}
        assert confirm.call_args.kwargs["default"] is False

    async def test_list_maps_name_to_value(self, prompter):
        question = Question(
            name="useCase",
            message="Use case?",
            kind=QuestionKind.LIST,
            choices=(Choice("DOM", "dom"), Choice("Resource Request", "request")),
            default="request",
        )
        with patch(PROMPT, return_value="Resource Request") as ask:
            answers = await prompter.ask([question])
        assert answers == {"useCase": "request"}
        assert ask.call_args.kwargs["choices"] == ["DOM", "Resource Request"]
        assert ask.call_args.kwargs["default"] == "Resource Request"

    async def test_checkbox(self, prompter):
        question = Question(
            name="rules",
            message="Rules?",
            kind=QuestionKind.CHECKBOX,
            choices=(Choice("a"), Choice("b"), Choice("c")),
        )
        with patch(PROMPT, side_effect=["9", "3, 1"]):
            answers = await prompter.ask([question])
        assert answers == {"rules": ["c", "a"]}

    async def test_checkbox_empty(self, prompter):
        question = Question(
            name="rules", message="Rules?", kind=QuestionKind.CHECKBOX, choices=(Choice("a"),)
        )
        with patch(PROMPT, return_value=""):
            answers = await prompter.ask([question])
        assert answers == {"rules": []}

    async def test_skipped_question_has_no_answer(self, prompter):
        questions = [
            Question(name="useCase", message="Use case?"),
            Question(
                name="elementType",
                message="Element?",
                when=lambda a: a.get("useCase") == "dom",
            ),
        ]
        with patch(PROMPT, return_value="request") as ask:
            answers = await prompter.ask(questions)
        assert answers == {"useCase": "request"}
        assert ask.call_count == 1

    async def test_later_questions_see_earlier_answers(self, prompter):
        questions = [
            Question(name="name", message="Name?"),
            Question(name="description", message=lambda a: f"About {a['name']}?"),
        ]
        with patch(PROMPT, side_effect=["rule", "desc"]) as ask:
            await prompter.ask(questions)
        assert ask.call_args_list[1].args[0] == "About rule?"
