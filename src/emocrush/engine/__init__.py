"""Pure tile-matching engine. Every operation returns new values; nothing here touches the ECS world."""
from emocrush.engine.cascade import CascadeResolver, CascadeRun, ResolverState
from emocrush.engine.grid import apply_gravity, create, mark_matched, neighbors, spawn, swap
from emocrush.engine.hints import find_possible_moves, first_hint, has_possible_moves
from emocrush.engine.matching import find_matches, find_shape_matches
from emocrush.engine.moves import apply_move, is_adjacent, is_legal
from emocrush.engine.scoring import cascade_bonus, score_cascade_iteration, score_match
from emocrush.engine.shuffle import shuffle, shuffle_until_playable
from emocrush.engine.specials import classify, effect_area
from emocrush.engine.types import (
    AnimationState,
    CascadeStep,
    Cell,
    Grid,
    GridPosition,
    Match,
    MoveOutcome,
    Orientation,
    SpecialKind,
)

__all__ = [
    "AnimationState",
    "CascadeResolver",
    "CascadeRun",
    "CascadeStep",
    "Cell",
    "Grid",
    "GridPosition",
    "Match",
    "MoveOutcome",
    "Orientation",
    "ResolverState",
    "SpecialKind",
    "apply_gravity",
    "apply_move",
    "cascade_bonus",
    "classify",
    "create",
    "effect_area",
    "find_matches",
    "find_possible_moves",
    "find_shape_matches",
    "first_hint",
    "has_possible_moves",
    "is_adjacent",
    "is_legal",
    "mark_matched",
    "neighbors",
    "score_cascade_iteration",
    "score_match",
    "shuffle",
    "shuffle_until_playable",
    "spawn",
    "swap",
]
