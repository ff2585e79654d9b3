import random
from dataclasses import replace

import pytest

from emocrush.constants import EMOJI_PALETTE
from emocrush.engine import grid as grid_model
from emocrush.engine.cascade import CascadeResolver, ResolverState
from emocrush.engine.hints import first_hint, has_possible_moves
from emocrush.engine.matching import find_matches
from emocrush.engine.moves import apply_move
from emocrush.engine.shuffle import shuffle_until_playable
from emocrush.engine.types import GridPosition, SpecialKind
from emocrush.errors import InvalidConfiguration
from tests.helpers import UniqueSpawnRandom, grid_from_rows, sparse_grid

# Each removal drops the next run into the bottom row: AAA, then BBB, then CCC.
CHAIN_ROWS = [
    "abcde",
    "ghijk",
    "mDCqn",
    "xBBCo",
    "AAABC",
]


def _resolver(**kwargs):
    return CascadeResolver(UniqueSpawnRandom(), EMOJI_PALETTE, **kwargs)


def test_chain_resolves_in_three_iterations():
    grid = grid_from_rows(CHAIN_ROWS)
    run = _resolver().resolve(grid)
    steps = run.run_to_completion()

    assert len(steps) == 3
    assert [step.combo_after for step in steps] == [0, 1, 2]
    assert [step.score_delta for step in steps] == [100, 110, 120]
    assert run.cascade_bonus == 1500
    assert run.total_score == 1830
    assert not run.limit_hit
    assert run.state is ResolverState.DONE
    assert not find_matches(run.grid)


def test_first_step_reports_displacement_and_spawns():
    grid = grid_from_rows(CHAIN_ROWS)
    step = next(iter(_resolver().resolve(grid)))
    assert step.removed == ((4, 0), (4, 1), (4, 2))
    assert len(step.displaced_cells) == 12, "Four cells fall in each of the three cleared columns"
    a_id = grid.get_cell((0, 0)).id
    assert step.displaced_cells[a_id] == (0, 1)
    assert [cell.position for cell in step.spawned_cells] == [(0, 0), (0, 1), (0, 2)]
    assert not step.specials_created and not step.specials_triggered


def test_iteration_cap_sets_limit_hit():
    grid = grid_from_rows(CHAIN_ROWS)
    run = _resolver(max_iterations=2).resolve(grid)
    steps = run.run_to_completion()
    assert len(steps) == 2
    assert run.limit_hit, "CCC is still on the board when the cap is reached"
    assert find_matches(run.grid)


def test_limit_not_hit_when_cascade_ends_exactly_at_cap():
    grid = grid_from_rows(CHAIN_ROWS)
    run = _resolver(max_iterations=3).resolve(grid)
    assert len(run.run_to_completion()) == 3
    assert not run.limit_hit


def test_resolver_rejects_zero_iteration_cap():
    with pytest.raises(InvalidConfiguration):
        CascadeResolver(random.Random(0), EMOJI_PALETTE, max_iterations=0)


def test_run_is_lazy_and_single_use():
    grid = grid_from_rows(CHAIN_ROWS)
    run = _resolver().resolve(grid)
    assert run.state is ResolverState.IDLE
    assert run.steps == []
    assert run.grid is grid

    steps = iter(run)
    first = next(steps)
    assert run.state is ResolverState.RESOLVING
    assert run.steps == [first]
    assert run.grid is not grid, "Grid is updated before each step is handed out"

    with pytest.raises(RuntimeError):
        iter(run)
    rest = list(steps)
    assert len(rest) == 2
    assert run.state is ResolverState.DONE


def test_input_grid_is_not_modified():
    grid = grid_from_rows(CHAIN_ROWS)
    before = [[cell.type for cell in row] for row in grid.cells]
    _resolver().resolve(grid).run_to_completion()
    assert [[cell.type for cell in row] for row in grid.cells] == before


def test_stable_grid_yields_no_steps():
    run = _resolver().resolve(sparse_grid(4, 4, {}))
    assert run.run_to_completion() == ()
    assert run.cascade_bonus == 0
    assert not run.limit_hit


def test_four_run_leaves_blast_at_swap_side_of_centre():
    grid = sparse_grid(5, 5, {(4, c): "A" for c in range(4)})
    run = _resolver().resolve(grid, swap=((4, 3), (3, 3)))
    steps = run.run_to_completion()
    assert len(steps) == 1
    assert dict(steps[0].specials_created) == {(4, 2): SpecialKind.VERTICAL_BLAST}
    assert (4, 2) not in steps[0].removed

    special = run.grid.get_cell((4, 2))
    assert special.is_special
    assert special.special_type is SpecialKind.VERTICAL_BLAST
    assert special.type == "A"
    assert special.id == grid.get_cell((4, 2)).id


def test_caught_special_clears_its_area():
    grid = sparse_grid(5, 5, {(4, 0): "A", (4, 1): "A", (4, 2): "A"})
    blast = replace(grid.get_cell((4, 1)), is_special=True, special_type=SpecialKind.VERTICAL_BLAST)
    grid = grid.set_cell((4, 1), blast)

    step = next(iter(_resolver().resolve(grid)))
    assert dict(step.specials_triggered) == {(4, 1): SpecialKind.VERTICAL_BLAST}
    assert set(step.removed) == {(4, 0), (4, 2)} | {(r, 1) for r in range(5)}
    assert len(step.spawned_cells) == 7


def test_special_chain_triggers_second_special():
    grid = sparse_grid(5, 5, {(4, 0): "A", (4, 1): "A", (4, 2): "A"})
    grid = grid.set_cell((4, 1), replace(
        grid.get_cell((4, 1)), is_special=True, special_type=SpecialKind.VERTICAL_BLAST,
    ))
    grid = grid.set_cell((0, 1), replace(
        grid.get_cell((0, 1)), is_special=True, special_type=SpecialKind.HORIZONTAL_BLAST,
    ))
    step = next(iter(_resolver().resolve(grid)))
    assert set(step.specials_triggered) == {GridPosition(4, 1), GridPosition(0, 1)}
    assert {(0, c) for c in range(5)} <= set(step.removed)


@pytest.mark.parametrize("seed", range(15))
def test_random_moves_settle_to_valid_grid(seed):
    rng = random.Random(seed)
    grid = grid_model.create(8, 8, rng, EMOJI_PALETTE)
    if not has_possible_moves(grid):
        grid = shuffle_until_playable(grid, rng)
    hint = first_hint(grid)
    assert hint is not None
    outcome = apply_move(grid, hint[0], hint[1], rng)
    assert outcome.accepted
    assert outcome.steps, "A legal move resolves at least one iteration"
    assert grid_model.positions_consistent(outcome.grid)
    assert len({cell.id for cell in outcome.grid.cells_flat()}) == 64
    assert not any(cell.is_matched for cell in outcome.grid.cells_flat())
    if not outcome.cascade_limit_hit:
        assert not find_matches(outcome.grid)
    for index, step in enumerate(outcome.steps):
        assert step.combo_after == index


def test_special_under_new_pivot_fires_before_being_replaced():
    grid = sparse_grid(5, 5, {(4, c): "A" for c in range(4)})
    grid = grid.set_cell((4, 1), replace(
        grid.get_cell((4, 1)), is_special=True, special_type=SpecialKind.HORIZONTAL_BLAST,
    ))
    run = _resolver().resolve(grid)
    step = next(iter(run))

    assert dict(step.specials_created) == {(4, 1): SpecialKind.VERTICAL_BLAST}
    assert dict(step.specials_triggered) == {(4, 1): SpecialKind.HORIZONTAL_BLAST}
    assert (4, 4) in step.removed, "The old blast still clears its row"
    assert (4, 1) not in step.removed
    survivor = run.grid.get_cell((4, 1))
    assert survivor.special_type is SpecialKind.VERTICAL_BLAST
    assert survivor.id == grid.get_cell((4, 1)).id
