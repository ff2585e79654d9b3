from esper import World

from emocrush.components.game_state import GameStatus
from emocrush.components.objective import ObjectiveKind, score_objective
from emocrush.constants import MAX_MOVES_CAP, MOVES_PER_LEVEL
from emocrush.events.bus import (EventBus, EVENT_GAME_START, EVENT_GAME_PAUSE, EVENT_GAME_RESUME,
                                 EVENT_GAME_RESET, EVENT_NEXT_LEVEL, EVENT_MOVE_RESOLVED,
                                 EVENT_OBJECTIVE_COMPLETED, EVENT_BOARD_RESET)
from emocrush.utils.game_state import set_game_status
from emocrush.utils.lookups import (get_config, get_game_state, get_objectives, get_or_create_turn_state,
                                    get_session_stats)


class SessionSystem:
    """Level lifecycle: move limit, score objectives and status transitions."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_GAME_START, self.on_game_start)
        self.event_bus.subscribe(EVENT_GAME_PAUSE, self.on_game_pause)
        self.event_bus.subscribe(EVENT_GAME_RESUME, self.on_game_resume)
        self.event_bus.subscribe(EVENT_GAME_RESET, self.on_game_reset)
        self.event_bus.subscribe(EVENT_NEXT_LEVEL, self.on_next_level)
        self.event_bus.subscribe(EVENT_MOVE_RESOLVED, self.on_move_resolved)

    def on_game_start(self, sender, **kwargs):
        stats = get_session_stats(self.world)
        stats.score = 0
        stats.moves = 0
        stats.combo = 0
        get_or_create_turn_state(self.world).processing = False
        for objective in get_objectives(self.world).objectives:
            objective.current = 0
            objective.completed = False
        set_game_status(self.world, self.event_bus, GameStatus.PLAYING)

    def on_game_pause(self, sender, **kwargs):
        if get_game_state(self.world).status is GameStatus.PLAYING:
            set_game_status(self.world, self.event_bus, GameStatus.PAUSED)

    def on_game_resume(self, sender, **kwargs):
        if get_game_state(self.world).status is GameStatus.PAUSED:
            set_game_status(self.world, self.event_bus, GameStatus.PLAYING)

    def on_next_level(self, sender, **kwargs):
        config = get_config(self.world)
        stats = get_session_stats(self.world)
        stats.level += 1
        stats.moves = 0
        stats.combo = 0
        stats.max_moves = min(config.max_moves + stats.level * MOVES_PER_LEVEL, MAX_MOVES_CAP)
        get_objectives(self.world).objectives = [score_objective(stats.level, config.target_score)]
        get_or_create_turn_state(self.world).processing = False
        self.event_bus.emit(EVENT_BOARD_RESET, reason='next_level')
        set_game_status(self.world, self.event_bus, GameStatus.PLAYING)

    def on_game_reset(self, sender, **kwargs):
        config = get_config(self.world)
        stats = get_session_stats(self.world)
        stats.score = 0
        stats.combo = 0
        stats.moves = 0
        stats.level = 1
        stats.max_moves = config.max_moves
        get_objectives(self.world).objectives = [score_objective(1, config.target_score)]
        get_or_create_turn_state(self.world).processing = False
        self.event_bus.emit(EVENT_BOARD_RESET, reason='reset')
        set_game_status(self.world, self.event_bus, GameStatus.MENU)

    def on_move_resolved(self, sender, **kwargs):
        outcome = kwargs.get('outcome')
        if outcome is None or not outcome.accepted:
            return
        stats = get_session_stats(self.world)
        if stats.moves < stats.max_moves:
            stats.moves += 1
        objectives = get_objectives(self.world)
        for objective in objectives.objectives:
            if objective.kind is ObjectiveKind.SCORE and objective.advance_to(stats.score):
                self.event_bus.emit(EVENT_OBJECTIVE_COMPLETED, objective_id=objective.id)
        if objectives.all_completed():
            set_game_status(self.world, self.event_bus, GameStatus.LEVEL_COMPLETE)
        elif stats.moves >= stats.max_moves:
            set_game_status(self.world, self.event_bus, GameStatus.GAME_OVER)
