"""Shared fixtures for auction tests."""
import itertools

import pytest

from games.player_auction.audience import AudienceGate
from games.player_auction.engine import AuctionEngine
from tests.support import BUDGET, PLAYERS, SECRET


@pytest.fixture
def clock():
    """Deterministic clock: 1000, 2000, 3000, ..."""
    ticks = itertools.count(1000, 1000)
    return lambda: next(ticks)


@pytest.fixture
def engine(clock):
    return AuctionEngine(initial_budget=BUDGET, clock=clock)


@pytest.fixture
def ready_engine(engine):
    """Engine initialized with Alice vs Bob and ten players."""
    engine.initialize("Alice", "Bob", PLAYERS, SECRET)
    return engine


@pytest.fixture
def gate():
    return AudienceGate(max_capacity=3)
