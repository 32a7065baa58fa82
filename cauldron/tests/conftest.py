"""
Pytest fixtures for Cauldron tests.
"""

import pytest

from ..config import SearchConfig
from ..engine_core.action import Action
from ..engine_core.repository import ActionRepository
from ..engine_core.state import State


class FakeClock:
    """
    Deterministic clock for deadline tests.

    Each call returns the current time, then advances it by `step` seconds.
    """

    def __init__(self, start: float = 0.0, step: float = 0.0):
        self.now = start
        self.step = step
        self.calls = 0

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        self.calls += 1
        return value


# Action ids used throughout the tests
REST_ID = -50
PRODUCE_BLUE = 78  # +2 tier 0
BLUE_TO_GREEN = 79  # -1 tier 0, +1 tier 1
GREEN_TO_ORANGE = 80  # -1 tier 1, +1 tier 2
ORANGE_TO_YELLOW = 81  # -1 tier 2, +1 tier 3
TOME_SPELL = 30  # learnable, costs 1 to learn, pays back 2
CHEAP_ORDER = 50  # 2 tier 0 for 10 rupees
RICH_ORDER = 51  # 1 tier 1 + 1 tier 3 for 30 rupees


@pytest.fixture
def config() -> SearchConfig:
    """Default configuration."""
    return SearchConfig()


@pytest.fixture
def fake_clock() -> FakeClock:
    """Clock that never advances: searches run to exhaustion."""
    return FakeClock()


@pytest.fixture
def starter_actions() -> list[Action]:
    """The four starting spells, one tome spell and two orders."""
    return [
        Action.cast(PRODUCE_BLUE, (2, 0, 0, 0)),
        Action.cast(BLUE_TO_GREEN, (-1, 1, 0, 0)),
        Action.cast(GREEN_TO_ORANGE, (0, -1, 1, 0)),
        Action.cast(ORANGE_TO_YELLOW, (0, 0, -1, 1)),
        Action.learn(TOME_SPELL, (3, 0, 0, 0), tome_index=1, tax_gain=2),
        Action.brew(CHEAP_ORDER, (-2, 0, 0, 0), price=10),
        Action.brew(RICH_ORDER, (0, -1, 0, -1), price=30),
    ]


@pytest.fixture
def repo(starter_actions, config) -> ActionRepository:
    """Repository holding the starter actions plus rest."""
    return ActionRepository.build(starter_actions, config)


@pytest.fixture
def initial_state() -> State:
    """A turn's root state with 3 tier-0 ingredients."""
    return State.initial((3, 0, 0, 0), rupees=0)


TURN_TEXT = """\
7
78 CAST 2 0 0 0 0 -1 -1 1 0
79 CAST -1 1 0 0 0 -1 -1 0 0
80 CAST 0 -1 1 0 0 -1 -1 1 0
90 OPPONENT_CAST 2 0 0 0 0 -1 -1 1 0
30 LEARN 3 0 0 0 0 1 2 0 0
50 BREW -2 0 0 0 10 0 0 0 0
51 BREW 0 -1 0 -1 30 0 0 0 0
3 0 0 0 0
2 1 0 0 5
"""


@pytest.fixture
def turn_text() -> str:
    """One turn of protocol input."""
    return TURN_TEXT
