"""Opaque session snapshots for the persistence layer.

The snapshot is a plain value; choosing a storage format is left to the caller.
"""
from __future__ import annotations

from dataclasses import dataclass

from esper import World

from emocrush.engine.types import Grid
from emocrush.utils.lookups import get_board, get_session_stats


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    grid: Grid
    score: int
    combo: int
    moves: int


def take_snapshot(world: World) -> SessionSnapshot:
    stats = get_session_stats(world)
    return SessionSnapshot(
        grid=get_board(world).grid,
        score=stats.score,
        combo=stats.combo,
        moves=stats.moves,
    )


def restore_snapshot(world: World, snapshot: SessionSnapshot) -> None:
    get_board(world).grid = snapshot.grid
    stats = get_session_stats(world)
    stats.score = snapshot.score
    stats.combo = snapshot.combo
    stats.moves = snapshot.moves
