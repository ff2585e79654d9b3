import logging

from esper import World

from emocrush.engine.hints import has_possible_moves
from emocrush.engine.shuffle import shuffle_until_playable
from emocrush.events.bus import (EventBus, EVENT_MOVE_RESOLVED, EVENT_BOARD_READY, EVENT_BOARD_CHANGED,
                                 EVENT_DEADLOCK_DETECTED, EVENT_BOARD_SHUFFLED)
from emocrush.utils.lookups import get_board, get_config, get_rng

logger = logging.getLogger(__name__)


class ShuffleSystem:
    """Reshuffles the board when it deadlocks or a cascade hits the iteration cap."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_MOVE_RESOLVED, self.on_move_resolved)
        self.event_bus.subscribe(EVENT_BOARD_READY, self.on_board_changed)
        self.event_bus.subscribe(EVENT_BOARD_CHANGED, self.on_board_changed)

    def on_move_resolved(self, sender, **kwargs):
        outcome = kwargs.get('outcome')
        if outcome is not None and outcome.cascade_limit_hit:
            self._reshuffle('cascade_limit')
            return
        self._check_deadlock('move_resolved')

    def on_board_changed(self, sender, **kwargs):
        self._check_deadlock(kwargs.get('reason', 'board_changed'))

    def _check_deadlock(self, reason: str) -> None:
        config = get_config(self.world)
        if has_possible_moves(get_board(self.world).grid, config.min_match_length):
            return
        self.event_bus.emit(EVENT_DEADLOCK_DETECTED, reason=reason)
        self._reshuffle('deadlock')

    def _reshuffle(self, reason: str) -> None:
        config = get_config(self.world)
        board = get_board(self.world)
        logger.info("Reshuffling board (%s)", reason)
        board.grid = shuffle_until_playable(
            board.grid,
            get_rng(self.world),
            max_attempts=config.shuffle_max_attempts,
            min_match_length=config.min_match_length,
        )
        self.event_bus.emit(EVENT_BOARD_SHUFFLED, reason=reason, grid=board.grid)
