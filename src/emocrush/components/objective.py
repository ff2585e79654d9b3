from dataclasses import dataclass, field
from enum import Enum
from typing import List


class ObjectiveKind(str, Enum):
    SCORE = "score"


@dataclass(slots=True)
class LevelObjective:
    id: str
    kind: ObjectiveKind
    target: int
    description: str = ""
    current: int = 0
    completed: bool = False

    def advance_to(self, value: int) -> bool:
        """Set progress; return True when this call completes the objective."""
        was_completed = self.completed
        self.current = min(value, self.target)
        self.completed = self.current >= self.target
        return self.completed and not was_completed


@dataclass(slots=True)
class LevelObjectives:
    """Objectives of the current level, stored on the session entity."""
    objectives: List[LevelObjective] = field(default_factory=list)

    def all_completed(self) -> bool:
        return all(objective.completed for objective in self.objectives)


def score_objective(level: int, target_score: int) -> LevelObjective:
    target = target_score * level
    return LevelObjective(
        id="score_target",
        kind=ObjectiveKind.SCORE,
        target=target,
        description=f"Reach {target:,} points",
    )
