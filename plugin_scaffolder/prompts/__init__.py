"""Prompting layer shared by the wizards.

Question definitions, the Rich-based prompter, and the repeat collector
used for variable-length answers (extra rules, parser events).
"""

from plugin_scaffolder.prompts.collector import RepeatCollector
from plugin_scaffolder.prompts.prompter import Prompter, RichPrompter
from plugin_scaffolder.prompts.questions import (
    Choice,
    Question,
    QuestionKind,
    QuestionsType,
)

__all__ = [
    "Choice",
    "Prompter",
    "Question",
    "QuestionKind",
    "QuestionsType",
    "RepeatCollector",
    "RichPrompter",
]
