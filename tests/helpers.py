from __future__ import annotations

import random
from typing import Mapping, Sequence, Tuple

from emocrush.components.game_state import GameStatus
from emocrush.engine.grid import from_types
from emocrush.engine.types import Grid
from emocrush.events.bus import EventBus
from emocrush.systems.board import BoardSystem
from emocrush.world import create_world


class UniqueSpawnRandom(random.Random):
    """Random source whose ``choice`` always yields a brand-new type.

    Cells spawned from it can never complete a run, which keeps cascade tests
    deterministic regardless of the palette.
    """

    def __init__(self, seed: int = 0):
        super().__init__(seed)
        self.spawned = 0

    def choice(self, seq):
        self.spawned += 1
        return f"new{self.spawned}"


def grid_from_rows(rows: Sequence[str], seed: int = 0) -> Grid:
    """Build a grid where every character is a tile type."""
    return from_types([list(row) for row in rows], random.Random(seed))


def sparse_grid(width: int, height: int, placed: Mapping[Tuple[int, int], str], seed: int = 0) -> Grid:
    """Grid with ``placed`` types; every other cell gets a unique filler type."""
    layout = [
        [placed.get((r, c), f"f{r}_{c}") for c in range(width)]
        for r in range(height)
    ]
    return from_types(layout, random.Random(seed))


def deadlock_rows(size: int = 5, types: Sequence[str] = ("A", "B", "C")) -> list[str]:
    """Diagonal stripes of three types: no matches and no legal swap."""
    return ["".join(types[(row + col) % 3] for col in range(size)) for row in range(size)]


def wire(config=None, rng=None, status=GameStatus.PLAYING, systems=()):
    """Create a world/bus pair with a BoardSystem plus the given system classes."""
    bus = EventBus()
    world = create_world(bus, config, status, rng=rng)
    board = BoardSystem(world, bus)
    for system in systems:
        system(world, bus)
    return world, bus, board
