"""HintAdvisor: enumerate every legal adjacent swap."""
from __future__ import annotations

from typing import List, Optional, Tuple

from emocrush.constants import MIN_MATCH_LENGTH
from emocrush.engine.moves import is_legal
from emocrush.engine.types import Grid, GridPosition

MovePair = Tuple[GridPosition, GridPosition]


def find_possible_moves(grid: Grid, min_match_length: int = MIN_MATCH_LENGTH) -> List[MovePair]:
    """Legal swaps in row-major cell order, neighbours up/down/left/right.

    Each pair is reported from both endpoints; an empty list means deadlock.
    """
    moves: List[MovePair] = []
    for pos in grid.positions():
        for neighbour in grid.neighbors(pos):
            if is_legal(grid, pos, neighbour, min_match_length=min_match_length):
                moves.append((pos, neighbour))
    return moves


def first_hint(grid: Grid, min_match_length: int = MIN_MATCH_LENGTH) -> Optional[MovePair]:
    for pos in grid.positions():
        for neighbour in grid.neighbors(pos):
            if is_legal(grid, pos, neighbour, min_match_length=min_match_length):
                return pos, neighbour
    return None


def has_possible_moves(grid: Grid, min_match_length: int = MIN_MATCH_LENGTH) -> bool:
    return first_hint(grid, min_match_length) is not None
