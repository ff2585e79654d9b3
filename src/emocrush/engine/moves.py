"""MoveValidator: adjacency + simulate-then-detect legality, and move application."""
from __future__ import annotations

import logging
import random
from typing import Tuple

from emocrush.config import GameConfig
from emocrush.constants import MIN_MATCH_LENGTH
from emocrush.engine import grid as grid_model
from emocrush.engine.cascade import CascadeResolver
from emocrush.engine.matching import find_matches
from emocrush.engine.types import Grid, MoveOutcome

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


def is_adjacent(a: Position, b: Position) -> bool:
    ar, ac = a
    br, bc = b
    return (abs(ar - br) == 1 and ac == bc) or (abs(ac - bc) == 1 and ar == br)


def is_legal(grid: Grid, pos1: Position, pos2: Position, *, min_match_length: int = MIN_MATCH_LENGTH) -> bool:
    if not (grid.in_bounds(pos1) and grid.in_bounds(pos2)):
        return False
    if not is_adjacent(pos1, pos2):
        return False
    swapped = grid_model.swap(grid, pos1, pos2)
    return bool(find_matches(swapped, min_match_length))


def apply_move(
    grid: Grid,
    pos1: Position,
    pos2: Position,
    rng: random.Random,
    config: GameConfig | None = None,
) -> MoveOutcome:
    """Validate, swap and resolve the cascade for one player move.

    An illegal move comes back with ``accepted=False`` and the input grid.
    """
    config = config or GameConfig()
    if not is_legal(grid, pos1, pos2, min_match_length=config.min_match_length):
        logger.debug("Rejected swap %s <-> %s", tuple(pos1), tuple(pos2))
        return MoveOutcome(accepted=False, steps=(), cascade_limit_hit=False, grid=grid)
    swapped = grid_model.swap(grid, pos1, pos2)
    resolver = CascadeResolver(
        rng,
        config.emoji_palette,
        max_iterations=config.max_cascade_iterations,
        min_match_length=config.min_match_length,
    )
    run = resolver.resolve(swapped, swap=(pos1, pos2))
    steps = tuple(run)
    return MoveOutcome(
        accepted=True,
        steps=steps,
        cascade_limit_hit=run.limit_hit,
        grid=run.grid,
        cascade_bonus=run.cascade_bonus,
    )
