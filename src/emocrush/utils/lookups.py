from __future__ import annotations

import random
from typing import Type, TypeVar

from esper import World

from emocrush.components.board import Board
from emocrush.components.game_state import GameState
from emocrush.components.objective import LevelObjectives
from emocrush.components.session_stats import SessionStats
from emocrush.components.settings import Settings
from emocrush.components.turn_state import TurnState
from emocrush.config import GameConfig

C = TypeVar("C")


def _singleton(world: World, component_type: Type[C]) -> C:
    for _, component in world.get_component(component_type):
        return component
    raise RuntimeError(f"{component_type.__name__} component not found")


def get_board(world: World) -> Board:
    return _singleton(world, Board)


def get_config(world: World) -> GameConfig:
    return _singleton(world, Settings).config


def get_game_state(world: World) -> GameState:
    return _singleton(world, GameState)


def get_session_stats(world: World) -> SessionStats:
    return _singleton(world, SessionStats)


def get_objectives(world: World) -> LevelObjectives:
    return _singleton(world, LevelObjectives)


def get_or_create_turn_state(world: World) -> TurnState:
    """Return the shared TurnState component, creating it if absent."""
    existing = list(world.get_component(TurnState))
    if existing:
        return existing[0][1]
    world.create_entity(TurnState())
    return list(world.get_component(TurnState))[0][1]


def get_rng(world: World) -> random.Random:
    rng = getattr(world, "random", None)
    if isinstance(rng, random.Random):
        return rng
    rng = random.Random()
    setattr(world, "random", rng)
    return rng
