from __future__ import annotations

from dataclasses import dataclass

import pytest


@dataclass(frozen=True)
class DummyOperator:
    name: str


class ScriptedSource:
    """Uniform source replaying a fixed list of draws."""

    def __init__(self, draws):
        self._draws = list(draws)

    def random(self) -> float:
        return self._draws.pop(0)


@pytest.fixture
def make_operators():
    def _make(*names: str) -> list[DummyOperator]:
        return [DummyOperator(name) for name in names]

    return _make


@pytest.fixture
def scripted_source():
    return ScriptedSource


@pytest.fixture
def three_operators(make_operators) -> list[DummyOperator]:
    return make_operators("swap", "invert", "scramble")
