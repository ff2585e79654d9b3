from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterator, List, Mapping, NamedTuple, Optional, Tuple

from emocrush.errors import OutOfBounds

EmojiType = str


class GridPosition(NamedTuple):
    row: int
    col: int


class Orientation(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    L_SHAPE = "l_shape"
    T_SHAPE = "t_shape"


class SpecialKind(str, Enum):
    HORIZONTAL_BLAST = "horizontal_blast"
    VERTICAL_BLAST = "vertical_blast"
    BOMB = "bomb"
    RAINBOW = "rainbow"


class AnimationState(str, Enum):
    """Presentation hint attached to a cell; the engine never reads it."""
    IDLE = "idle"
    FALLING = "falling"
    SWAPPING = "swapping"
    MATCHING = "matching"
    EXPLODING = "exploding"
    SPAWNING = "spawning"


@dataclass(frozen=True, slots=True)
class Cell:
    id: str
    type: EmojiType
    position: GridPosition
    is_matched: bool = False
    is_special: bool = False
    special_type: Optional[SpecialKind] = None
    animation_state: AnimationState = AnimationState.IDLE


@dataclass(frozen=True, slots=True)
class Grid:
    """Fixed-size, row-major grid of cells. Every mutation returns a new Grid."""

    cells: Tuple[Tuple[Cell, ...], ...]
    width: int
    height: int

    def in_bounds(self, pos: Tuple[int, int]) -> bool:
        row, col = pos
        return 0 <= row < self.height and 0 <= col < self.width

    def _check(self, pos: Tuple[int, int]) -> GridPosition:
        if not self.in_bounds(pos):
            raise OutOfBounds(pos, self.width, self.height)
        return GridPosition(*pos)

    def get_cell(self, pos: Tuple[int, int]) -> Cell:
        row, col = self._check(pos)
        return self.cells[row][col]

    def type_at(self, pos: Tuple[int, int]) -> EmojiType:
        return self.get_cell(pos).type

    def set_cell(self, pos: Tuple[int, int], cell: Cell) -> "Grid":
        """Return a copy with ``cell`` placed at ``pos`` (its position is rewritten)."""
        target = self._check(pos)
        if cell.position != target:
            cell = _moved(cell, target)
        rows = list(self.cells)
        row = list(rows[target.row])
        row[target.col] = cell
        rows[target.row] = tuple(row)
        return Grid(cells=tuple(rows), width=self.width, height=self.height)

    def neighbors(self, pos: Tuple[int, int]) -> List[GridPosition]:
        """In-bounds orthogonal neighbours in up, down, left, right order."""
        row, col = self._check(pos)
        candidates = (
            GridPosition(row - 1, col),
            GridPosition(row + 1, col),
            GridPosition(row, col - 1),
            GridPosition(row, col + 1),
        )
        return [p for p in candidates if self.in_bounds(p)]

    def positions(self) -> Iterator[GridPosition]:
        for row in range(self.height):
            for col in range(self.width):
                yield GridPosition(row, col)

    def cells_flat(self) -> List[Cell]:
        return [cell for row in self.cells for cell in row]

    def column(self, col: int) -> List[Cell]:
        return [self.cells[row][col] for row in range(self.height)]


def _moved(cell: Cell, pos: GridPosition) -> Cell:
    return replace(cell, position=pos)


@dataclass(frozen=True, slots=True)
class Match:
    cells: Tuple[GridPosition, ...]
    orientation: Orientation
    length: int

    @classmethod
    def from_cells(cls, cells, orientation: Orientation) -> "Match":
        ordered = tuple(GridPosition(*pos) for pos in cells)
        return cls(cells=ordered, orientation=orientation, length=len(ordered))

    def contains(self, pos: Tuple[int, int]) -> bool:
        return GridPosition(*pos) in self.cells


@dataclass(frozen=True, slots=True)
class CascadeStep:
    """Everything one match→remove→gravity→spawn iteration changed."""

    matches: Tuple[Match, ...]
    score_delta: int
    combo_after: int
    specials_created: Mapping[GridPosition, SpecialKind] = field(default_factory=dict)
    displaced_cells: Mapping[str, Tuple[int, int]] = field(default_factory=dict)
    spawned_cells: Tuple[Cell, ...] = ()
    specials_triggered: Mapping[GridPosition, SpecialKind] = field(default_factory=dict)
    removed: Tuple[GridPosition, ...] = ()


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    accepted: bool
    steps: Tuple[CascadeStep, ...]
    cascade_limit_hit: bool
    grid: Grid
    cascade_bonus: int = 0

    @property
    def total_score(self) -> int:
        return sum(step.score_delta for step in self.steps) + self.cascade_bonus
