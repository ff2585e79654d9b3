import random

from esper import World

from emocrush.components.game_state import GameState, GameStatus
from emocrush.components.objective import LevelObjectives, score_objective
from emocrush.components.session_stats import SessionStats
from emocrush.components.settings import Settings
from emocrush.components.turn_state import TurnState
from emocrush.config import GameConfig
from emocrush.events.bus import EventBus


def create_world(
    event_bus: EventBus,
    config: GameConfig | None = None,
    initial_status: GameStatus = GameStatus.MENU,
    *,
    rng: random.Random | None = None,
) -> World:
    """Create the world resources; the board itself is added by BoardSystem.

    ``event_bus`` is accepted so callers wire world and systems the same way;
    no system is created here.
    """
    config = (config or GameConfig()).validate()
    world = World()
    setattr(world, "random", rng or random.Random())

    world.create_entity(Settings(config=config))

    # Session resources live on a single entity.
    world.create_entity(
        GameState(status=initial_status),
        SessionStats(max_moves=config.max_moves),
        LevelObjectives(objectives=[score_objective(1, config.target_score)]),
        TurnState(),
    )
    return world
