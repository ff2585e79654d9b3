from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SWAP REQUESTS
# ============================================================================
EVENT_TILE_SWAP_REQUEST = "tile_swap_request"      # payload: src=(r,c), dst=(r,c)
EVENT_TILE_SWAP_VALID = "tile_swap_valid"          # payload: src=(r,c), dst=(r,c)
EVENT_TILE_SWAP_INVALID = "tile_swap_invalid"      # payload: src=(r,c), dst=(r,c)
EVENT_TILE_SWAP_REJECTED = "tile_swap_rejected"    # payload: src=(r,c), dst=(r,c), reason=str


# ============================================================================
# CASCADE RESOLUTION
# ============================================================================
EVENT_CASCADE_STEP = "cascade_step"                # payload: depth=int, step=CascadeStep, score=int
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int, bonus=int, limit_hit=bool
EVENT_MOVE_RESOLVED = "move_resolved"              # payload: src=(r,c), dst=(r,c), outcome=MoveOutcome


# ============================================================================
# BOARD
# ============================================================================
EVENT_BOARD_RESET = "board_reset"                  # payload: reason=str
EVENT_BOARD_READY = "board_ready"                  # payload: reason=str, grid=Grid
EVENT_BOARD_CHANGED = "board_changed"              # payload: reason=str
EVENT_BOARD_SHUFFLED = "board_shuffled"            # payload: reason=str, grid=Grid
EVENT_DEADLOCK_DETECTED = "deadlock_detected"      # payload: reason=str


# ============================================================================
# HINTS
# ============================================================================
EVENT_HINT_REQUEST = "hint_request"                # payload: None
EVENT_HINT_AVAILABLE = "hint_available"            # payload: src=(r,c), dst=(r,c)


# ============================================================================
# GAME FLOW & SESSION
# ============================================================================
EVENT_GAME_START = "game_start"                    # payload: None
EVENT_GAME_PAUSE = "game_pause"                    # payload: None
EVENT_GAME_RESUME = "game_resume"                  # payload: None
EVENT_GAME_RESET = "game_reset"                    # payload: None
EVENT_NEXT_LEVEL = "next_level"                    # payload: None
EVENT_GAME_STATUS_CHANGED = "game_status_changed"  # payload: previous_status=GameStatus, new_status=GameStatus
EVENT_SCORE_CHANGED = "score_changed"              # payload: score=int, delta=int
EVENT_OBJECTIVE_COMPLETED = "objective_completed"  # payload: objective_id=str
