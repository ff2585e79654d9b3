"""ShuffleService: recover a deadlocked grid by permuting its tile types."""
from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import List

from emocrush.constants import MIN_MATCH_LENGTH, SHUFFLE_MAX_ATTEMPTS
from emocrush.engine.hints import has_possible_moves
from emocrush.engine.matching import find_matches
from emocrush.engine.types import AnimationState, EmojiType, Grid
from emocrush.errors import InvalidConfiguration

logger = logging.getLogger(__name__)


def shuffle(grid: Grid, rng: random.Random) -> Grid:
    """Permute all cell types and reassign them in row-major order.

    Cells keep their ids and positions. The result may contain matches or be
    deadlocked; see ``shuffle_until_playable``.
    """
    types: List[EmojiType] = [cell.type for cell in grid.cells_flat()]
    # Fisher-Yates
    for i in range(len(types) - 1, 0, -1):
        j = rng.randint(0, i)
        types[i], types[j] = types[j], types[i]
    rows = []
    index = 0
    for row in grid.cells:
        new_row = []
        for cell in row:
            new_row.append(replace(cell, type=types[index], animation_state=AnimationState.IDLE))
            index += 1
        rows.append(tuple(new_row))
    return Grid(cells=tuple(rows), width=grid.width, height=grid.height)


def shuffle_until_playable(
    grid: Grid,
    rng: random.Random,
    *,
    max_attempts: int = SHUFFLE_MAX_ATTEMPTS,
    min_match_length: int = MIN_MATCH_LENGTH,
) -> Grid:
    """Reshuffle until the grid has no matches and at least one legal move."""
    for attempt in range(1, max_attempts + 1):
        candidate = shuffle(grid, rng)
        if find_matches(candidate, min_match_length):
            continue
        if not has_possible_moves(candidate, min_match_length):
            continue
        logger.debug("Shuffle produced a playable grid after %d attempt(s)", attempt)
        return candidate
    logger.warning("No playable shuffle after %d attempts", max_attempts)
    raise InvalidConfiguration(
        f"Unable to shuffle {grid.width}x{grid.height} grid into a match-free, solvable layout "
        f"after {max_attempts} attempts"
    )
