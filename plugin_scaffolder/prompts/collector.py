"""Repeated prompt rounds for variable-length answers.

Used to gather the rules of a multi-rule package and the events of a
parser: ask one round, keep the entry unless it repeats an earlier one, and
ask again while the round says so.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Hashable, Mapping, Sequence
from typing import Any, Generic, TypeVar

from ..utils import print_warning

T = TypeVar("T")

AskOnce = Callable[[Sequence[T]], Awaitable[Mapping[str, Any]]]


class RepeatCollector(Generic[T]):
    """Collects entries from prompt rounds until a round says "no more".

    Args:
        convert: Turns one round's answers into an entry.
        key: Uniqueness key of an entry.  A round producing an entry whose
            key was already collected is dropped without a message, but its
            ``again`` answer is still honoured.
        again_key: Answer that asks for another round.  A missing or falsy
            answer ends the loop.
        max_rounds: Hard upper bound on the number of rounds.
    """

    def __init__(
        self,
        convert: Callable[[Mapping[str, Any]], T],
        key: Callable[[T], Hashable],
        *,
        again_key: str = "again",
        max_rounds: int = 50,
    ) -> None:
        self.convert = convert
        self.key = key
        self.again_key = again_key
        self.max_rounds = max_rounds

    async def collect(self, ask_once: AskOnce[T]) -> list[T]:
        """Run rounds of *ask_once* and return the unique entries in order.

        *ask_once* receives the entries collected so far, so it can adapt
        its questions (e.g. hide choices that are already taken).  At least
        one round always runs.
        """
        collected: list[T] = []
        seen: set[Hashable] = set()
        rounds = 0

        while True:
            answers = await ask_once(tuple(collected))
            rounds += 1

            entry = self.convert(answers)
            entry_key = self.key(entry)
            if entry_key not in seen:
                seen.add(entry_key)
                collected.append(entry)

            if not answers.get(self.again_key):
                break
            if rounds >= self.max_rounds:
                print_warning(f"Stopped after {rounds} rounds.")
                break

        return collected
