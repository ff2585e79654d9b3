from esper import World

from emocrush.engine.hints import first_hint
from emocrush.events.bus import EventBus, EVENT_HINT_REQUEST, EVENT_HINT_AVAILABLE, EVENT_DEADLOCK_DETECTED
from emocrush.utils.lookups import get_board, get_config


class HintSystem:
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_HINT_REQUEST, self.on_hint_request)

    def on_hint_request(self, sender, **kwargs):
        config = get_config(self.world)
        hint = first_hint(get_board(self.world).grid, config.min_match_length)
        if hint is None:
            self.event_bus.emit(EVENT_DEADLOCK_DETECTED, reason='hint')
            return
        src, dst = hint
        self.event_bus.emit(EVENT_HINT_AVAILABLE, src=src, dst=dst)
