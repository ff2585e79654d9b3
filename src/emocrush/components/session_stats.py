from dataclasses import dataclass

from emocrush.constants import MAX_MOVES


@dataclass(slots=True)
class SessionStats:
    """Running score/combo/move counters for the current level."""

    score: int = 0
    combo: int = 0
    moves: int = 0
    max_moves: int = MAX_MOVES
    level: int = 1

    @property
    def moves_remaining(self) -> int:
        return max(self.max_moves - self.moves, 0)
