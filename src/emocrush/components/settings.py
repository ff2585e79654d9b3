from dataclasses import dataclass

from emocrush.config import GameConfig


@dataclass(slots=True)
class Settings:
    """Singleton component carrying the validated configuration."""
    config: GameConfig
