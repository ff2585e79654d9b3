from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from emocrush.constants import (
    EMOJI_PALETTE,
    GRID_COLS,
    GRID_ROWS,
    MAX_CASCADE_ITERATIONS,
    MAX_MOVES,
    MIN_MATCH_LENGTH,
    MIN_PALETTE_SIZE,
    SHUFFLE_MAX_ATTEMPTS,
    TARGET_SCORE,
)
from emocrush.errors import InvalidConfiguration


def check_board_shape(width: int, height: int, palette: Sequence[str], min_match_length: int) -> None:
    """Raise InvalidConfiguration when the grid/palette cannot yield a match-free board."""
    if width < 1 or height < 1:
        raise InvalidConfiguration(f"Grid dimensions must be positive, got {width}x{height}")
    if min_match_length < 2:
        raise InvalidConfiguration(f"min_match_length must be at least 2, got {min_match_length}")
    if width < min_match_length and height < min_match_length:
        raise InvalidConfiguration(
            f"A {width}x{height} grid can never hold a run of {min_match_length}"
        )
    distinct = set(palette)
    if len(distinct) != len(palette):
        raise InvalidConfiguration("Palette contains duplicate types")
    if len(distinct) < MIN_PALETTE_SIZE:
        raise InvalidConfiguration(
            f"Palette needs at least {MIN_PALETTE_SIZE} types, got {len(distinct)}"
        )


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Values supplied by the configuration provider before a grid is built."""

    grid_width: int = GRID_COLS
    grid_height: int = GRID_ROWS
    emoji_palette: Tuple[str, ...] = EMOJI_PALETTE
    min_match_length: int = MIN_MATCH_LENGTH
    max_cascade_iterations: int = MAX_CASCADE_ITERATIONS
    shuffle_max_attempts: int = SHUFFLE_MAX_ATTEMPTS
    max_moves: int = MAX_MOVES
    target_score: int = TARGET_SCORE

    def __post_init__(self) -> None:
        # Accept any sequence for the palette but store it immutably.
        object.__setattr__(self, "emoji_palette", tuple(self.emoji_palette))

    def validate(self) -> "GameConfig":
        check_board_shape(self.grid_width, self.grid_height, self.emoji_palette, self.min_match_length)
        if self.max_cascade_iterations < 1:
            raise InvalidConfiguration("max_cascade_iterations must be at least 1")
        if self.shuffle_max_attempts < 1:
            raise InvalidConfiguration("shuffle_max_attempts must be at least 1")
        if self.max_moves < 1:
            raise InvalidConfiguration("max_moves must be at least 1")
        return self
