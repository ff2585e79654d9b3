from typing import Optional

from esper import World

from emocrush.components.board import Board
from emocrush.engine import grid as grid_model
from emocrush.engine.types import Cell, Grid
from emocrush.events.bus import EventBus, EVENT_BOARD_RESET, EVENT_BOARD_READY
from emocrush.utils.lookups import get_config, get_rng


class BoardSystem:
    """Owns the single Board entity and rebuilds its grid on reset/next level."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.board_entity = self.world.create_entity()
        self.world.add_component(self.board_entity, Board(grid=self._new_grid()))
        self.event_bus.subscribe(EVENT_BOARD_RESET, self.on_board_reset)

    def _new_grid(self) -> Grid:
        config = get_config(self.world)
        return grid_model.create(
            config.grid_width,
            config.grid_height,
            get_rng(self.world),
            config.emoji_palette,
            min_match_length=config.min_match_length,
        )

    @property
    def grid(self) -> Grid:
        return self.world.component_for_entity(self.board_entity, Board).grid

    def set_grid(self, grid: Grid) -> None:
        self.world.component_for_entity(self.board_entity, Board).grid = grid

    def on_board_reset(self, sender, **kwargs):
        reason = kwargs.get('reason', 'reset')
        self.set_grid(self._new_grid())
        self.event_bus.emit(EVENT_BOARD_READY, reason=reason, grid=self.grid)

    def cell_at(self, row: int, col: int) -> Optional[Cell]:
        grid = self.grid
        if not grid.in_bounds((row, col)):
            return None
        return grid.get_cell((row, col))
