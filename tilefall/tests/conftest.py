"""
Pytest fixtures for Tilefall tests.
"""

import random

import pytest

from ..config import GameConfig
from ..engine_core.grid import GridPosition
from ..engine_core.platform import PlatformGraph
from ..engine_core.state import Actor, ActorRegistry, HUMAN_ID, Tile, TileStability
from ..session import GameSession, InMemoryHighScoreStore


class FakeClock:
    """Manually advanced clock for timed phases."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def full_platform(rng) -> PlatformGraph:
    """Default 7x7 platform."""
    return PlatformGraph(width=7, height=7, rng=rng)


@pytest.fixture
def make_platform(rng):
    """
    Build a platform from explicit cells.

    Usage: make_platform([(0, 0), (1, 0)], unstable=[(1, 0)])
    """
    def _make(cells, unstable=()):
        unstable = {GridPosition(*c) for c in unstable}
        tiles = []
        for c in cells:
            position = GridPosition(*c)
            stability = TileStability.UNSTABLE if position in unstable else TileStability.STABLE
            tiles.append(Tile(position, stability))
        return PlatformGraph.from_tiles(tiles, rng=rng)
    return _make


@pytest.fixture
def make_registry():
    """
    Build a registry: human position first, then bot positions.
    """
    def _make(human, *bots):
        return ActorRegistry(
            human=Actor(actor_id=HUMAN_ID, position=GridPosition(*human), is_bot=False),
            bots=[
                Actor(actor_id=f"bot_{i + 1}", position=GridPosition(*b))
                for i, b in enumerate(bots)
            ],
        )
    return _make


@pytest.fixture
def high_scores() -> InMemoryHighScoreStore:
    return InMemoryHighScoreStore()


@pytest.fixture
def seeded_session(clock, high_scores) -> GameSession:
    """Default 7x7 game with a fixed seed and a manual clock."""
    return GameSession(GameConfig(seed=42), high_scores=high_scores, clock=clock)
