from dataclasses import dataclass

from emocrush.engine.types import Grid

@dataclass(slots=True)
class Board:
    """Singleton component holding the current immutable grid.

    Systems replace ``grid`` wholesale; the Grid value itself is never mutated.
    """
    grid: Grid

    @property
    def rows(self) -> int:
        return self.grid.height

    @property
    def cols(self) -> int:
        return self.grid.width
