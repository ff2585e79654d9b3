"""ScoreCalculator: per-match, per-iteration and cascade bonus scoring."""
from __future__ import annotations

import math
from fractions import Fraction
from typing import Dict, Iterable

from emocrush.constants import BASE_MATCH_SCORE, CASCADE_BONUS_PER_ITERATION, COMBO_STEP_PERCENT
from emocrush.engine.types import Match, Orientation

# Fractions keep the floor() exact; 1.1 as a float would drift.
ORIENTATION_MULTIPLIERS: Dict[Orientation, Fraction] = {
    Orientation.HORIZONTAL: Fraction(1),
    Orientation.VERTICAL: Fraction(11, 10),
    Orientation.L_SHAPE: Fraction(1),
    Orientation.T_SHAPE: Fraction(1),
}


def score_match(match: Match) -> int:
    multiplier = ORIENTATION_MULTIPLIERS[match.orientation]
    return math.floor(BASE_MATCH_SCORE * (match.length - 2) * multiplier)


def calculate_total_score(matches: Iterable[Match]) -> int:
    return sum(score_match(match) for match in matches)


def combo_score(base: int, combo_count: int) -> int:
    """Apply the +10%-per-iteration combo multiplier to a base score."""
    return math.floor(base * (1 + Fraction(combo_count * COMBO_STEP_PERCENT, 100)))


def score_cascade_iteration(matches: Iterable[Match], combo_count: int) -> int:
    return combo_score(calculate_total_score(matches), combo_count)


def cascade_bonus(iterations: int) -> int:
    """Flat bonus for chains; a single iteration earns nothing."""
    if iterations <= 1:
        return 0
    return iterations * CASCADE_BONUS_PER_ITERATION
