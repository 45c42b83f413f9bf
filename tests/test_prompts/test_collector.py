"""Tests for repeated prompt rounds (plugin_scaffolder.prompts.collector)."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from plugin_scaffolder.prompts.collector import RepeatCollector

pytestmark = pytest.mark.unit


def _asker(*rounds):
    """Return an ``ask_once`` replaying *rounds* and a list of what it saw."""
    pending = list(rounds)
    seen = []

    async def ask_once(collected):
        seen.append(collected)
        return pending.pop(0)

    return ask_once, seen


def _collector(**kwargs):
    return RepeatCollector(lambda a: a["name"], key=lambda name: name, **kwargs)


class TestRepeatCollector:
    async def test_single_round(self):
        ask_once, _ = _asker({"name": "a", "again": False})
        assert await _collector().collect(ask_once) == ["a"]

    async def test_missing_again_stops(self):
        ask_once, _ = _asker({"name": "a"})
        assert await _collector().collect(ask_once) == ["a"]

    async def test_duplicates_dropped_in_order(self):
        ask_once, _ = _asker(
            {"name": "a", "again": True},
            {"name": "b", "again": True},
            {"name": "a", "again": False},
        )
        assert await _collector().collect(ask_once) == ["a", "b"]

    async def test_duplicate_round_still_honours_again(self):
        ask_once, _ = _asker(
            {"name": "a", "again": True},
            {"name": "a", "again": True},
            {"name": "c", "again": False},
        )
        assert await _collector().collect(ask_once) == ["a", "c"]

    async def test_rounds_see_collected_entries(self):
        ask_once, seen = _asker(
            {"name": "a", "again": True},
            {"name": "b", "again": False},
        )
        await _collector().collect(ask_once)
        assert seen == [(), ("a",)]

    async def test_max_rounds(self):
        ask_once, _ = _asker(*({"name": str(i), "again": True} for i in range(10)))
        with patch("plugin_scaffolder.prompts.collector.print_warning") as warn:
            result = await _collector(max_rounds=3).collect(ask_once)
        assert result == ["0", "1", "2"]
        warn.assert_called_once()

    async def test_custom_again_key(self):
        ask_once, _ = _asker({"name": "a", "more": True}, {"name": "b", "more": False})
        assert await _collector(again_key="more").collect(ask_once) == ["a", "b"]
