from esper import World

from emocrush.components.game_state import GameStatus
from emocrush.engine.moves import is_legal
from emocrush.events.bus import (EventBus, EVENT_TILE_SWAP_REQUEST, EVENT_TILE_SWAP_VALID,
                                 EVENT_TILE_SWAP_INVALID, EVENT_TILE_SWAP_REJECTED)
from emocrush.utils.lookups import get_board, get_config, get_game_state, get_or_create_turn_state


class MatchSystem:
    """Gatekeeper for swap requests: serializes moves and checks legality."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        event_bus.subscribe(EVENT_TILE_SWAP_REQUEST, self.on_swap_request)

    def on_swap_request(self, sender, **kwargs):
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if not src or not dst:
            return
        if get_game_state(self.world).status is not GameStatus.PLAYING:
            self.event_bus.emit(EVENT_TILE_SWAP_REJECTED, src=src, dst=dst, reason='not_playing')
            return
        if get_or_create_turn_state(self.world).processing:
            self.event_bus.emit(EVENT_TILE_SWAP_REJECTED, src=src, dst=dst, reason='busy')
            return
        config = get_config(self.world)
        grid = get_board(self.world).grid
        if is_legal(grid, src, dst, min_match_length=config.min_match_length):
            self.event_bus.emit(EVENT_TILE_SWAP_VALID, src=src, dst=dst)
        else:
            self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=src, dst=dst)
