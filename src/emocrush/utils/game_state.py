from __future__ import annotations

from esper import World

from emocrush.components.game_state import GameState, GameStatus
from emocrush.events.bus import EVENT_GAME_STATUS_CHANGED, EventBus


def set_game_status(world: World, event_bus: EventBus, status: GameStatus) -> None:
    """Update the global game status and emit a change event when it differs."""
    previous_status: GameStatus | None = None
    for _, state in world.get_component(GameState):
        previous_status = state.status
        if state.status == status:
            return
        state.status = status
        event_bus.emit(
            EVENT_GAME_STATUS_CHANGED,
            previous_status=previous_status,
            new_status=status,
        )
        return
    # No existing GameState component; create a new one.
    world.create_entity(GameState(status=status))
    event_bus.emit(
        EVENT_GAME_STATUS_CHANGED,
        previous_status=previous_status,
        new_status=status,
    )
