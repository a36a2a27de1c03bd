"""
Shared pytest fixtures for knockout bracket tests.

Running tests:
    pytest tests/
"""
import pytest
import sys
import os

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from knockout.bracket import Bracket
from knockout.models import DEFAULT_ROSTER
from knockout.randomness import RandomSource

# Draws that leave the roster in order: randint(0, i) returning i
# swaps every element with itself.
IDENTITY_SHUFFLE = [7, 6, 5, 4, 3, 2, 1]


class ScriptedRandom(RandomSource):
    """Random source that replays a fixed list of draws and records every request."""

    def __init__(self, draws):
        super().__init__()
        self.draws = list(draws)
        self.requests = []

    def randint(self, low, high):
        if not self.draws:
            raise AssertionError(f"No scripted draw left for randint({low}, {high})")
        value = self.draws.pop(0)
        self.requests.append((low, high))
        assert low <= value <= high, f"Scripted draw {value} outside [{low}, {high}]"
        return value


@pytest.fixture
def roster():
    return list(DEFAULT_ROSTER)


@pytest.fixture
def seeded_bracket(roster):
    """Unplayed bracket with players in roster order: Alice v Bob, Carol v David, ..."""
    return Bracket.build(roster, ScriptedRandom(IDENTITY_SHUFFLE))


@pytest.fixture
def played_bracket(seeded_bracket):
    """
    Fully played bracket with known results.

    QF1 Alice 7-3 Bob, QF2 Carol 2-9 David, QF3 Eva 5-5 Frank, QF4 Grace 1-4 Henry,
    SF1 Alice 8-6 David, SF2 Eva 3-10 Henry, Final Alice 6-6 Henry.
    """
    draws = [7, 3, 2, 9, 5, 5, 1, 4, 8, 6, 3, 10, 6, 6]
    seeded_bracket.simulate(ScriptedRandom(draws))
    return seeded_bracket


@pytest.fixture
def random_bracket():
    """Bracket played with a real, seeded random source."""
    from knockout.bracket import run_tournament
    return run_tournament(rng=RandomSource(1234))
