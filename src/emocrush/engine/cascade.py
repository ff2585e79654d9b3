"""CascadeResolver: match → remove → gravity → spawn until the grid settles."""
from __future__ import annotations

import logging
import random
from dataclasses import replace
from enum import Enum, auto
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from emocrush.constants import MAX_CASCADE_ITERATIONS, MIN_MATCH_LENGTH
from emocrush.engine import grid as grid_model
from emocrush.engine.matching import find_matches, find_shape_matches
from emocrush.engine.scoring import cascade_bonus, score_cascade_iteration
from emocrush.engine.specials import classify, effect_area, pivot
from emocrush.engine.types import (
    AnimationState,
    CascadeStep,
    EmojiType,
    Grid,
    GridPosition,
    Match,
    SpecialKind,
)
from emocrush.errors import InvalidConfiguration

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class ResolverState(Enum):
    IDLE = auto()
    RESOLVING = auto()
    DONE = auto()


class CascadeRun:
    """Single-use, lazily evaluated sequence of cascade steps for one move.

    Iterate it once (the caller may pause between steps to animate). After
    exhaustion ``grid`` holds the settled grid and ``limit_hit`` tells whether
    the iteration cap stopped the cascade with matches still on the board.
    """

    def __init__(self, resolver: "CascadeResolver", grid: Grid, swap: Sequence[Position] | None = None):
        self._resolver = resolver
        self._swap = tuple(swap) if swap else None
        self.state = ResolverState.IDLE
        self.grid = grid
        self.steps: List[CascadeStep] = []
        self.limit_hit = False

    def __iter__(self) -> Iterator[CascadeStep]:
        if self.state is not ResolverState.IDLE:
            raise RuntimeError("Cascade run already consumed; resolve the grid again")
        self.state = ResolverState.RESOLVING
        return self._steps()

    def _steps(self) -> Iterator[CascadeStep]:
        resolver = self._resolver
        swap = self._swap
        iteration = 0
        while True:
            matches = find_matches(self.grid, resolver.min_match_length)
            if not matches:
                break
            step, self.grid = resolver.resolve_iteration(self.grid, matches, iteration, swap)
            self.steps.append(step)
            logger.debug(
                "Cascade iteration %d: %d matches, +%d", iteration, len(matches), step.score_delta
            )
            yield step
            iteration += 1
            # Only the first iteration is anchored to the player's swap.
            swap = None
            if iteration >= resolver.max_iterations:
                self.limit_hit = bool(find_matches(self.grid, resolver.min_match_length))
                if self.limit_hit:
                    logger.warning("Cascade stopped at iteration cap %d", resolver.max_iterations)
                break
        self.state = ResolverState.DONE

    def run_to_completion(self) -> Tuple[CascadeStep, ...]:
        if self.state is ResolverState.IDLE:
            for _ in self:
                pass
        return tuple(self.steps)

    @property
    def iterations(self) -> int:
        return len(self.steps)

    @property
    def cascade_bonus(self) -> int:
        return cascade_bonus(self.iterations)

    @property
    def total_score(self) -> int:
        return sum(step.score_delta for step in self.steps) + self.cascade_bonus


class CascadeResolver:
    def __init__(
        self,
        rng: random.Random,
        palette: Sequence[EmojiType],
        *,
        max_iterations: int = MAX_CASCADE_ITERATIONS,
        min_match_length: int = MIN_MATCH_LENGTH,
    ):
        if max_iterations < 1:
            raise InvalidConfiguration(f"max_iterations must be at least 1, got {max_iterations}")
        self.rng = rng
        self.palette = tuple(palette)
        self.max_iterations = max_iterations
        self.min_match_length = min_match_length

    def resolve(self, grid: Grid, swap: Sequence[Position] | None = None) -> CascadeRun:
        """Start resolving ``grid`` (already swapped); nothing runs until iterated."""
        return CascadeRun(self, grid, swap)

    def resolve_iteration(
        self,
        grid: Grid,
        matches: Sequence[Match],
        combo_count: int,
        swap: Sequence[Position] | None = None,
    ) -> Tuple[CascadeStep, Grid]:
        score = score_cascade_iteration(matches, combo_count)
        created = self._plan_specials(grid, matches, swap)

        removal: Dict[GridPosition, None] = {}
        for match in matches:
            for pos in match.cells:
                if pos not in created:
                    removal[pos] = None
        triggered = self._trigger_specials(grid, removal, created)

        grid = grid_model.mark_matched(grid, removal)
        for pos, kind in created.items():
            cell = grid.get_cell(pos)
            grid = grid.set_cell(pos, replace(
                cell,
                is_matched=False,
                is_special=True,
                special_type=kind,
                animation_state=AnimationState.IDLE,
            ))
        grid, displaced = grid_model.apply_gravity(grid)
        grid, spawned = grid_model.spawn(grid, self.rng, self.palette)

        step = CascadeStep(
            matches=tuple(matches),
            score_delta=score,
            combo_after=combo_count,
            specials_created=dict(created),
            displaced_cells=displaced,
            spawned_cells=spawned,
            specials_triggered=triggered,
            removed=tuple(sorted(removal)),
        )
        return step, grid

    def _plan_specials(
        self, grid: Grid, matches: Sequence[Match], swap: Sequence[Position] | None
    ) -> Dict[GridPosition, SpecialKind]:
        shapes = find_shape_matches(grid, self.min_match_length, matches=matches)
        shape_cells = [set(shape.cells) for shape in shapes]
        # A run that belongs to a shape is classified through the shape.
        candidates: List[Match] = list(shapes)
        for match in matches:
            if any(set(match.cells) <= cells for cells in shape_cells):
                continue
            candidates.append(match)
        created: Dict[GridPosition, SpecialKind] = {}
        for candidate in candidates:
            kind = classify(candidate)
            if kind is None:
                continue
            created.setdefault(pivot(candidate, swap), kind)
        return created

    def _trigger_specials(
        self,
        grid: Grid,
        removal: Dict[GridPosition, None],
        created: Dict[GridPosition, SpecialKind],
    ) -> Dict[GridPosition, SpecialKind]:
        """Expand ``removal`` in place with the areas of special cells caught in it.

        A special sitting on a new pivot fires too; the pivot itself stays.
        """
        triggered: Dict[GridPosition, SpecialKind] = {}
        pending: List[GridPosition] = [
            pos for pos in (*removal, *created) if grid.get_cell(pos).is_special
        ]
        while pending:
            pos = pending.pop(0)
            if pos in triggered:
                continue
            kind: Optional[SpecialKind] = grid.get_cell(pos).special_type
            if kind is None:
                continue
            triggered[pos] = kind
            for hit in effect_area(grid, pos, kind):
                if hit in created or hit in removal:
                    continue
                removal[hit] = None
                if grid.get_cell(hit).is_special:
                    pending.append(hit)
        return triggered
