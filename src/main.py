"""Headless driver for the EmoCrush engine.

Wires the world, event bus and systems, then plays a game by always taking
the first hinted move. Useful for smoke-testing balance and determinism.
"""
import logging
import random
import sys
from dataclasses import dataclass, field
from typing import List

from emocrush.components.game_state import GameStatus
from emocrush.config import GameConfig
from emocrush.events.bus import (EventBus, EVENT_GAME_START, EVENT_HINT_REQUEST, EVENT_HINT_AVAILABLE,
                                 EVENT_TILE_SWAP_REQUEST, EVENT_CASCADE_COMPLETE, EVENT_BOARD_SHUFFLED,
                                 EVENT_BOARD_CHANGED)
from emocrush.systems.board import BoardSystem
from emocrush.systems.hint import HintSystem
from emocrush.systems.match import MatchSystem
from emocrush.systems.match_resolution import MatchResolutionSystem
from emocrush.systems.session import SessionSystem
from emocrush.systems.shuffle import ShuffleSystem
from emocrush.utils.lookups import get_game_state, get_session_stats
from emocrush.world import create_world

logger = logging.getLogger("emocrush")


@dataclass
class AutoplayReport:
    score: int = 0
    moves: int = 0
    longest_cascade: int = 0
    shuffles: int = 0
    status: GameStatus = GameStatus.MENU
    cascade_depths: List[int] = field(default_factory=list)


def build_game(config: GameConfig | None = None, seed: int | None = None):
    bus = EventBus()
    world = create_world(bus, config, rng=random.Random(seed))
    board = BoardSystem(world, bus)
    MatchSystem(world, bus)
    MatchResolutionSystem(world, bus)
    SessionSystem(world, bus)
    HintSystem(world, bus)
    ShuffleSystem(world, bus)
    return world, bus, board


def run_autoplay(seed: int = 0, max_moves: int = 30, config: GameConfig | None = None) -> AutoplayReport:
    config = config or GameConfig(max_moves=max_moves)
    world, bus, _ = build_game(config, seed)
    report = AutoplayReport()
    hint: dict = {}

    bus.subscribe(EVENT_HINT_AVAILABLE, lambda sender, **k: hint.update(k))
    bus.subscribe(EVENT_CASCADE_COMPLETE, lambda sender, **k: report.cascade_depths.append(k['depth']))

    def on_shuffled(sender, **kwargs):
        report.shuffles += 1

    bus.subscribe(EVENT_BOARD_SHUFFLED, on_shuffled)
    bus.emit(EVENT_GAME_START)
    while get_game_state(world).status is GameStatus.PLAYING:
        hint.clear()
        bus.emit(EVENT_HINT_REQUEST)
        if not hint:
            # Let ShuffleSystem recover a stuck opening board, then ask once more.
            bus.emit(EVENT_BOARD_CHANGED, reason='autoplay')
            bus.emit(EVENT_HINT_REQUEST)
        if not hint:
            logger.warning("No legal move available, stopping autoplay")
            break
        bus.emit(EVENT_TILE_SWAP_REQUEST, src=hint['src'], dst=hint['dst'])
    stats = get_session_stats(world)
    report.score = stats.score
    report.moves = stats.moves
    report.longest_cascade = max(report.cascade_depths, default=0)
    report.status = get_game_state(world).status
    return report


def main(argv: List[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    argv = sys.argv[1:] if argv is None else argv
    seed = int(argv[0]) if argv else 0
    report = run_autoplay(seed)
    logger.info(
        "Finished with %s: score=%d moves=%d longest cascade=%d shuffles=%d",
        report.status.name, report.score, report.moves, report.longest_cascade, report.shuffles,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
