import random

import pytest

from emocrush.config import GameConfig
from emocrush.constants import EMOJI_PALETTE
from emocrush.engine import grid as grid_model
from emocrush.engine.matching import find_matches
from emocrush.engine.moves import apply_move, is_adjacent, is_legal
from tests.helpers import UniqueSpawnRandom, sparse_grid


def _one_move_grid():
    # Swapping (0, 2) with (0, 3) completes AAA in the top row.
    return sparse_grid(5, 5, {(0, 0): "A", (0, 1): "A", (0, 3): "A"})


@pytest.mark.parametrize("a,b,expected", [
    ((0, 0), (0, 1), True),
    ((0, 0), (1, 0), True),
    ((3, 3), (2, 3), True),
    ((0, 0), (1, 1), False),
    ((0, 0), (0, 2), False),
    ((2, 2), (2, 2), False),
])
def test_is_adjacent(a, b, expected):
    assert is_adjacent(a, b) is expected
    assert is_adjacent(b, a) is expected


def test_is_legal_requires_resulting_match():
    grid = _one_move_grid()
    assert is_legal(grid, (0, 2), (0, 3))
    assert is_legal(grid, (0, 3), (0, 2))
    assert not is_legal(grid, (0, 2), (1, 2)), "Swap that creates no run is illegal"
    assert not is_legal(grid, (0, 1), (0, 3)), "Non-adjacent swap is illegal"


def test_is_legal_out_of_bounds_is_false():
    grid = _one_move_grid()
    assert not is_legal(grid, (0, 4), (0, 5))
    assert not is_legal(grid, (-1, 0), (0, 0))


@pytest.mark.parametrize("seed", range(5))
def test_legality_matches_swap_then_detect(seed):
    grid = grid_model.create(6, 6, random.Random(seed), ("A", "B", "C", "D"))
    for pos in grid.positions():
        for neighbour in grid.neighbors(pos):
            expected = bool(find_matches(grid_model.swap(grid, pos, neighbour)))
            assert is_legal(grid, pos, neighbour) is expected, f"{pos} <-> {neighbour}"


def test_apply_move_rejects_illegal_swap():
    grid = _one_move_grid()
    outcome = apply_move(grid, (0, 2), (1, 2), random.Random(0))
    assert not outcome.accepted
    assert outcome.steps == ()
    assert outcome.grid is grid
    assert outcome.total_score == 0


def test_apply_move_resolves_legal_swap():
    grid = _one_move_grid()
    config = GameConfig(grid_width=5, grid_height=5, emoji_palette=EMOJI_PALETTE)
    outcome = apply_move(grid, (0, 2), (0, 3), UniqueSpawnRandom(), config)
    assert outcome.accepted
    assert len(outcome.steps) == 1
    assert outcome.steps[0].removed == ((0, 0), (0, 1), (0, 2))
    assert outcome.total_score == 100
    assert outcome.cascade_bonus == 0
    assert not outcome.cascade_limit_hit
    assert not find_matches(outcome.grid)
    # The tile that was not part of the run ends up where the swap put it.
    assert outcome.grid.get_cell((0, 3)).type == "f0_2"
