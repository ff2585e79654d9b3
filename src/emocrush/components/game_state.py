"""Game state resource describing the session's high-level status."""
from dataclasses import dataclass
from enum import Enum, auto


class GameStatus(Enum):
    """High-level statuses that gate which requests systems accept."""
    MENU = auto()
    PLAYING = auto()
    PAUSED = auto()
    LEVEL_COMPLETE = auto()
    GAME_OVER = auto()


@dataclass
class GameState:
    """Singleton component storing the current game status."""
    status: GameStatus = GameStatus.MENU
