import random

import pytest

from mission_engine import MissionEngine


@pytest.fixture
def engine():
    """Fresh engine with the seed orders and deterministic jitter."""
    return MissionEngine(rng=random.Random(42))


@pytest.fixture
def flying_engine(engine):
    """Engine with ORD-4821 (Warehouse A -> Hospital B) in flight."""
    engine.approve_order("ORD-4821")
    assert engine.start_mission("ORD-4821")
    return engine
