"""GridModel: construction, swap, gravity and spawn over immutable grids."""
from __future__ import annotations

import logging
import random
import uuid
from dataclasses import replace
from typing import Dict, Iterable, List, Sequence, Set, Tuple

from emocrush.config import check_board_shape
from emocrush.constants import MIN_MATCH_LENGTH
from emocrush.engine.types import AnimationState, Cell, EmojiType, Grid, GridPosition

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


def new_cell_id(rng: random.Random) -> str:
    return f"emoji_{uuid.UUID(int=rng.getrandbits(128), version=4).hex}"


def random_cell(
    pos: Position,
    rng: random.Random,
    palette: Sequence[EmojiType],
    *,
    animation_state: AnimationState = AnimationState.IDLE,
) -> Cell:
    return Cell(
        id=new_cell_id(rng),
        type=rng.choice(palette),
        position=GridPosition(*pos),
        animation_state=animation_state,
    )


def from_types(rows: Sequence[Sequence[EmojiType]], rng: random.Random | None = None) -> Grid:
    """Build a grid from a row-major layout of type names."""
    rng = rng or random.Random()
    height = len(rows)
    width = len(rows[0]) if height else 0
    cells = []
    for r, row in enumerate(rows):
        if len(row) != width:
            raise ValueError(f"Row {r} has {len(row)} cells, expected {width}")
        cells.append(tuple(
            Cell(id=new_cell_id(rng), type=type_name, position=GridPosition(r, c))
            for c, type_name in enumerate(row)
        ))
    return Grid(cells=tuple(cells), width=width, height=height)


def create(
    width: int,
    height: int,
    rng: random.Random,
    palette: Sequence[EmojiType],
    *,
    min_match_length: int = MIN_MATCH_LENGTH,
) -> Grid:
    """Random fill followed by anti-match repair; the result has no runs."""
    check_board_shape(width, height, palette, min_match_length)
    layout: List[List[EmojiType]] = [
        [rng.choice(palette) for _ in range(width)] for _ in range(height)
    ]
    repairs = 0
    while True:
        changed = _repair_runs(layout, rng, palette, min_match_length)
        repairs += changed
        if not changed:
            break
    if repairs:
        logger.debug("Anti-match repair rewrote %d cells on %dx%d grid", repairs, width, height)
    return from_types(layout, rng)


def _run_type(line: Sequence[EmojiType], length: int) -> EmojiType | None:
    """Type shared by the last ``length - 1`` entries of ``line``, if uniform."""
    if len(line) < length - 1:
        return None
    tail = line[len(line) - (length - 1):]
    if all(value == tail[0] for value in tail):
        return tail[0]
    return None


def _repair_runs(
    layout: List[List[EmojiType]],
    rng: random.Random,
    palette: Sequence[EmojiType],
    min_match_length: int,
) -> int:
    changed = 0
    height = len(layout)
    width = len(layout[0])
    for r in range(height):
        for c in range(width):
            excluded: Set[EmojiType] = set()
            for line in (layout[r][:c], [layout[rr][c] for rr in range(r)]):
                run_type = _run_type(line, min_match_length)
                if run_type is not None:
                    excluded.add(run_type)
            if layout[r][c] not in excluded:
                continue
            available = [t for t in palette if t not in excluded]
            layout[r][c] = rng.choice(available)
            changed += 1
    return changed


def get_cell(grid: Grid, pos: Position) -> Cell:
    return grid.get_cell(pos)


def set_cell(grid: Grid, pos: Position, cell: Cell) -> Grid:
    return grid.set_cell(pos, cell)


def neighbors(grid: Grid, pos: Position) -> List[GridPosition]:
    return grid.neighbors(pos)


def swap(grid: Grid, pos1: Position, pos2: Position) -> Grid:
    """Exchange two cells; the original grid is left untouched."""
    first = grid.get_cell(pos1)
    second = grid.get_cell(pos2)
    return grid.set_cell(pos1, second).set_cell(pos2, first)


def mark_matched(grid: Grid, positions: Iterable[Position]) -> Grid:
    rows = [list(row) for row in grid.cells]
    for pos in positions:
        cell = grid.get_cell(pos)
        rows[cell.position.row][cell.position.col] = replace(
            cell, is_matched=True, animation_state=AnimationState.MATCHING
        )
    return Grid(cells=tuple(tuple(row) for row in rows), width=grid.width, height=grid.height)


def apply_gravity(grid: Grid) -> Tuple[Grid, Dict[str, Tuple[int, int]]]:
    """Drop surviving cells to the bottom of each column.

    Matched cells are kept as placeholders stacked at the top of their column
    so every slot still holds exactly one cell; ``spawn`` replaces them.
    Returns the new grid and ``{cell_id: (from_row, to_row)}`` for moved cells.
    """
    rows = [list(row) for row in grid.cells]
    displaced: Dict[str, Tuple[int, int]] = {}
    for col in range(grid.width):
        column = grid.column(col)
        survivors = [cell for cell in column if not cell.is_matched]
        removed = [cell for cell in column if cell.is_matched]
        stacked = removed + survivors
        for row, cell in enumerate(stacked):
            if cell.position.row != row:
                if not cell.is_matched:
                    displaced[cell.id] = (cell.position.row, row)
                    cell = replace(cell, animation_state=AnimationState.FALLING)
                cell = replace(cell, position=GridPosition(row, col))
            rows[row][col] = cell
    new_grid = Grid(cells=tuple(tuple(row) for row in rows), width=grid.width, height=grid.height)
    return new_grid, displaced


def spawn(
    grid: Grid, rng: random.Random, palette: Sequence[EmojiType]
) -> Tuple[Grid, Tuple[Cell, ...]]:
    """Replace every matched placeholder with a freshly generated cell."""
    rows = [list(row) for row in grid.cells]
    spawned: List[Cell] = []
    for col in range(grid.width):
        for row in range(grid.height):
            if not rows[row][col].is_matched:
                continue
            cell = random_cell((row, col), rng, palette, animation_state=AnimationState.SPAWNING)
            rows[row][col] = cell
            spawned.append(cell)
    new_grid = Grid(cells=tuple(tuple(row) for row in rows), width=grid.width, height=grid.height)
    return new_grid, tuple(spawned)


def positions_consistent(grid: Grid) -> bool:
    return all(
        grid.cells[row][col].position == (row, col)
        for row in range(grid.height)
        for col in range(grid.width)
    )
