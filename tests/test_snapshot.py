import random

from emocrush.utils.lookups import get_session_stats
from emocrush.utils.snapshot import restore_snapshot, take_snapshot
from tests.helpers import sparse_grid, wire


def test_snapshot_round_trip_restores_session():
    world, bus, board = wire(rng=random.Random(0))
    stats = get_session_stats(world)
    stats.score, stats.combo, stats.moves = 450, 2, 5
    snap = take_snapshot(world)

    board.set_grid(sparse_grid(8, 8, {}))
    stats.score, stats.combo, stats.moves = 0, 0, 0

    restore_snapshot(world, snap)
    assert board.grid is snap.grid
    assert (stats.score, stats.combo, stats.moves) == (450, 2, 5)
