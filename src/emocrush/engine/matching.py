"""MatchDetector: runs of identical tile types plus L/T shape tagging."""
from __future__ import annotations

from typing import Iterable, List, Sequence, Set, Tuple

from emocrush.constants import MIN_MATCH_LENGTH
from emocrush.engine.types import Grid, GridPosition, Match, Orientation

Position = Tuple[int, int]

SHAPE_PRIORITY = 100
LINE_PRIORITY_PER_CELL = 10


def _runs(types: Sequence[str], min_length: int) -> List[Tuple[int, int]]:
    """Return (start, end_exclusive) for every maximal run of length >= min_length."""
    found: List[Tuple[int, int]] = []
    start = 0
    for index in range(1, len(types) + 1):
        if index < len(types) and types[index] == types[start]:
            continue
        if index - start >= min_length:
            found.append((start, index))
        start = index
    return found


def find_horizontal_matches(grid: Grid, min_match_length: int = MIN_MATCH_LENGTH) -> List[Match]:
    matches: List[Match] = []
    for row in range(grid.height):
        types = [cell.type for cell in grid.cells[row]]
        for start, end in _runs(types, min_match_length):
            cells = [GridPosition(row, col) for col in range(start, end)]
            matches.append(Match.from_cells(cells, Orientation.HORIZONTAL))
    return matches


def find_vertical_matches(grid: Grid, min_match_length: int = MIN_MATCH_LENGTH) -> List[Match]:
    matches: List[Match] = []
    for col in range(grid.width):
        types = [cell.type for cell in grid.column(col)]
        for start, end in _runs(types, min_match_length):
            cells = [GridPosition(row, col) for row in range(start, end)]
            matches.append(Match.from_cells(cells, Orientation.VERTICAL))
    return matches


def find_matches(grid: Grid, min_match_length: int = MIN_MATCH_LENGTH) -> List[Match]:
    """All horizontal runs (row-major) followed by all vertical runs (column-major).

    A cross intersection yields two separate records; nothing is merged here.
    """
    return find_horizontal_matches(grid, min_match_length) + find_vertical_matches(grid, min_match_length)


def _shape_orientation(horizontal: Match, vertical: Match, shared: GridPosition) -> Orientation:
    h_end = shared in (horizontal.cells[0], horizontal.cells[-1])
    v_end = shared in (vertical.cells[0], vertical.cells[-1])
    if h_end and v_end:
        return Orientation.L_SHAPE
    # One arm meets the other mid-run (T), or both cross mid-run (plus), which
    # classifies the same way.
    return Orientation.T_SHAPE


def find_shape_matches(
    grid: Grid,
    min_match_length: int = MIN_MATCH_LENGTH,
    *,
    matches: Sequence[Match] | None = None,
) -> List[Match]:
    """Tag every horizontal/vertical run pair sharing a cell as an L or T shape.

    Working from run intersections covers every rotation of both shapes.
    The shape's cells are the union of both runs in row-major order.
    """
    if matches is None:
        matches = find_matches(grid, min_match_length)
    horizontals = [m for m in matches if m.orientation is Orientation.HORIZONTAL]
    verticals = [m for m in matches if m.orientation is Orientation.VERTICAL]
    shapes: List[Match] = []
    for horizontal in horizontals:
        row = horizontal.cells[0].row
        for vertical in verticals:
            col = vertical.cells[0].col
            shared = GridPosition(row, col)
            if not (horizontal.contains(shared) and vertical.contains(shared)):
                continue
            union = sorted(set(horizontal.cells) | set(vertical.cells))
            shapes.append(Match.from_cells(union, _shape_orientation(horizontal, vertical, shared)))
    return shapes


def find_matches_from_position(
    grid: Grid, pos: Position, min_match_length: int = MIN_MATCH_LENGTH
) -> List[Match]:
    target = GridPosition(*pos)
    return [m for m in find_matches(grid, min_match_length) if m.contains(target)]


def match_key(match: Match) -> Tuple[str, Tuple[GridPosition, ...]]:
    return match.orientation.value, tuple(sorted(match.cells))


def merge_overlapping_matches(matches: Iterable[Match]) -> List[Match]:
    """Drop duplicate records (same orientation and cell set), keeping first occurrences."""
    seen: Set[Tuple[str, Tuple[GridPosition, ...]]] = set()
    merged: List[Match] = []
    for match in matches:
        key = match_key(match)
        if key in seen:
            continue
        seen.add(key)
        merged.append(match)
    return merged


def match_priority(match: Match) -> int:
    if match.orientation in (Orientation.L_SHAPE, Orientation.T_SHAPE):
        return SHAPE_PRIORITY
    return match.length * LINE_PRIORITY_PER_CELL


def sort_matches_by_priority(matches: Iterable[Match]) -> List[Match]:
    # Stable sort keeps detection order among equal priorities.
    return sorted(matches, key=match_priority, reverse=True)


def validate_match(grid: Grid, match: Match, min_match_length: int = MIN_MATCH_LENGTH) -> bool:
    """True if the match is long enough and every cell holds the same type."""
    if len(match.cells) < min_match_length:
        return False
    if not all(grid.in_bounds(pos) for pos in match.cells):
        return False
    first = grid.type_at(match.cells[0])
    return all(grid.type_at(pos) == first for pos in match.cells)


def is_grid_stable(grid: Grid, min_match_length: int = MIN_MATCH_LENGTH) -> bool:
    return not find_matches(grid, min_match_length)
