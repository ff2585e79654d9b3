from esper import World

from emocrush.engine import grid as grid_model
from emocrush.engine.cascade import CascadeResolver
from emocrush.engine.types import MoveOutcome
from emocrush.events.bus import (EventBus, EVENT_TILE_SWAP_VALID, EVENT_CASCADE_STEP,
                                 EVENT_CASCADE_COMPLETE, EVENT_MOVE_RESOLVED, EVENT_SCORE_CHANGED)
from emocrush.utils.lookups import get_board, get_config, get_or_create_turn_state, get_rng, get_session_stats


class MatchResolutionSystem:
    """Applies a validated swap and publishes each cascade step as it resolves."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TILE_SWAP_VALID, self.on_swap_valid)

    def on_swap_valid(self, sender, **kwargs):
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if not src or not dst:
            return
        state = get_or_create_turn_state(self.world)
        if state.processing:
            return
        state.processing = True
        try:
            outcome = self._resolve(src, dst)
        finally:
            state.processing = False
        self.event_bus.emit(EVENT_MOVE_RESOLVED, src=src, dst=dst, outcome=outcome)

    def _resolve(self, src, dst) -> MoveOutcome:
        config = get_config(self.world)
        board = get_board(self.world)
        stats = get_session_stats(self.world)
        state = get_or_create_turn_state(self.world)
        resolver = CascadeResolver(
            get_rng(self.world),
            config.emoji_palette,
            max_iterations=config.max_cascade_iterations,
            min_match_length=config.min_match_length,
        )
        # Combo restarts with every player move.
        stats.combo = 0
        state.cascade_depth = 0
        score_before = stats.score
        run = resolver.resolve(grid_model.swap(board.grid, src, dst), swap=(src, dst))
        for depth, step in enumerate(run, start=1):
            board.grid = run.grid
            stats.score += step.score_delta
            stats.combo = step.combo_after
            state.cascade_depth = depth
            self.event_bus.emit(EVENT_CASCADE_STEP, depth=depth, step=step, score=stats.score)
        board.grid = run.grid
        stats.score += run.cascade_bonus
        state.last_limit_hit = run.limit_hit
        self.event_bus.emit(
            EVENT_CASCADE_COMPLETE,
            depth=state.cascade_depth,
            bonus=run.cascade_bonus,
            limit_hit=run.limit_hit,
        )
        if stats.score != score_before:
            self.event_bus.emit(EVENT_SCORE_CHANGED, score=stats.score, delta=stats.score - score_before)
        return MoveOutcome(
            accepted=True,
            steps=tuple(run.steps),
            cascade_limit_hit=run.limit_hit,
            grid=run.grid,
            cascade_bonus=run.cascade_bonus,
        )
