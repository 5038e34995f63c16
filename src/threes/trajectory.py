"""
Per-episode trajectory buffer for TD learning.

Each step: (features, reward) where features are (table, cell) pairs selected
by the afterstate and reward is the transformed slide reward.
"""

from dataclasses import dataclass
from typing import Iterator, List, Tuple

Feature = Tuple[int, int]


@dataclass
class Step:
    features: List[Feature]
    reward: float


class Trajectory:
    """Ordered record of one episode's accepted slides, oldest first."""

    def __init__(self):
        self.steps: List[Step] = []

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(self.steps)

    def __reversed__(self) -> Iterator[Step]:
        return reversed(self.steps)

    def add(self, features: List[Feature], reward: float):
        """Append a step."""
        self.steps.append(Step(list(features), float(reward)))

    def clear(self):
        self.steps.clear()
