"""SpecialTileClassifier and the area each special kind clears when triggered."""
from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple

from emocrush.engine.types import Grid, GridPosition, Match, Orientation, SpecialKind

Position = Tuple[int, int]

RAINBOW_LENGTH = 5
BLAST_LENGTH = 4


def classify(match: Match) -> Optional[SpecialKind]:
    """Rainbow beats a length-4 blast, which beats a shape bomb."""
    if match.length >= RAINBOW_LENGTH:
        return SpecialKind.RAINBOW
    if match.length == BLAST_LENGTH:
        # The blast clears perpendicular to the run that made it.
        if match.orientation is Orientation.HORIZONTAL:
            return SpecialKind.VERTICAL_BLAST
        if match.orientation is Orientation.VERTICAL:
            return SpecialKind.HORIZONTAL_BLAST
    if match.orientation in (Orientation.L_SHAPE, Orientation.T_SHAPE):
        return SpecialKind.BOMB
    return None


def _round_toward(value: float, target: Optional[int]) -> int:
    if value.is_integer():
        return int(value)
    if target is not None and target > value:
        return math.ceil(value)
    return math.floor(value)


def pivot(match: Match, swap: Sequence[Position] | None = None) -> GridPosition:
    """Cell that survives as the special tile.

    The geometric centre is rounded toward the swapped position lying in the
    match (floor when none does) and snapped to the nearest match cell.
    """
    anchor: Optional[GridPosition] = None
    for pos in swap or ():
        if match.contains(pos):
            anchor = GridPosition(*pos)
            break
    rows = [pos.row for pos in match.cells]
    cols = [pos.col for pos in match.cells]
    centre = GridPosition(
        _round_toward(sum(rows) / len(rows), anchor.row if anchor else None),
        _round_toward(sum(cols) / len(cols), anchor.col if anchor else None),
    )
    if match.contains(centre):
        return centre
    return min(
        match.cells,
        key=lambda pos: abs(pos.row - centre.row) + abs(pos.col - centre.col),
    )


def effect_area(grid: Grid, pos: Position, kind: SpecialKind) -> List[GridPosition]:
    """Positions cleared when the special at ``pos`` is triggered, in row-major order."""
    row, col = pos
    if kind is SpecialKind.HORIZONTAL_BLAST:
        return [GridPosition(row, c) for c in range(grid.width)]
    if kind is SpecialKind.VERTICAL_BLAST:
        return [GridPosition(r, col) for r in range(grid.height)]
    if kind is SpecialKind.BOMB:
        return [
            GridPosition(r, c)
            for r in range(row - 1, row + 2)
            for c in range(col - 1, col + 2)
            if grid.in_bounds((r, c))
        ]
    if kind is SpecialKind.RAINBOW:
        colour = grid.type_at(pos)
        return [p for p in grid.positions() if grid.type_at(p) == colour]
    raise ValueError(f"Unknown special kind '{kind}'")
