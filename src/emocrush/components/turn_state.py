from dataclasses import dataclass


@dataclass(slots=True)
class TurnState:
    """Tracks the in-flight move; at most one cascade resolves at a time."""

    processing: bool = False
    cascade_depth: int = 0
    last_limit_hit: bool = False
