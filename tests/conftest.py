"""
Pytest configuration and shared fixtures.
"""
import pytest

from minefield.engine import GameManager


class ScriptedRandom:
    """Stands in for random.Random: yields the given cells row then column."""

    def __init__(self, cells):
        self.values = [v for cell in cells for v in cell]

    def randrange(self, n):
        value = self.values.pop(0)
        assert 0 <= value < n
        return value


class Recorder:
    def __init__(self):
        self.tiles = []
        self.ends = []

    def on_tile_changed(self, tile, coord):
        self.tiles.append((coord, tile.state, tile.number))

    def on_game_end(self, phase):
        self.ends.append(phase)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def make_game(recorder):
    """Build a reset game whose mines land on the given cells, in order."""
    def _make(width, height, mine_cells=None, mines=None, seed=None):
        rng = ScriptedRandom(mine_cells) if mine_cells is not None else None
        game = GameManager(recorder.on_tile_changed, recorder.on_game_end, seed=seed, rng=rng)
        if mines is None:
            mines = len(mine_cells) if mine_cells is not None else max(1, width * height // 6)
        game.reset(width, height, mines)
        recorder.tiles.clear()
        return game
    return _make


@pytest.fixture
def scripted():
    return ScriptedRandom
