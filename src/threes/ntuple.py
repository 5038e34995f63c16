"""
N-tuple network slider with backward TD learning.

Value of an afterstate = sum over encodings of table[t][index], where index
packs the encoding's cell values (4 bits each, first cell most significant)
and t is the table assigned to the encoding.

Learning happens once per episode, in close_episode, with a single backward
sweep over the buffered afterstates.
"""

import logging
import math
from typing import Dict, List, Optional, Sequence

import torch

from .action import Action
from .agent import Agent
from .config import LearningConfig
from .errors import ConfigurationError
from .game import Board, ILLEGAL, UP, RIGHT, DOWN, LEFT
from .symmetries import DEFAULT_ENCODINGS
from .trajectory import Feature, Trajectory
from .weights import WeightStore

logger = logging.getLogger(__name__)

# Candidate order; ties go to the earliest
SEARCH_ORDER = (LEFT, UP, RIGHT, DOWN)


def reward_transform(reward: int, scale: float = 32.0) -> float:
    """Compress a merge reward: scale * 2^floor(ln(reward + 1))."""
    return scale * (1 << int(math.floor(math.log(reward + 1))))


class TupleNetwork:
    """Encodings over a WeightStore."""

    def __init__(
        self,
        weights: WeightStore,
        encodings: Sequence[Sequence[int]],
        share: str = "modulo",
    ):
        self.weights = weights
        self.share = share
        self.encodings: List[List[int]] = []
        self.set_encoding(encodings)

    def table_for(self, i: int) -> int:
        if self.share == "modulo":
            return i % len(self.weights)
        return i

    def set_encoding(self, encodings: Sequence[Sequence[int]]):
        """Replace the encodings, checking each fits its table."""
        encodings = [list(e) for e in encodings]
        if encodings and len(self.weights) == 0:
            raise ConfigurationError("encodings given but no weight tables; set init=")
        if self.share == "direct" and len(encodings) > len(self.weights):
            raise ConfigurationError(
                f"{len(encodings)} encodings need {len(encodings)} tables, have {len(self.weights)}"
            )
        for i, enc in enumerate(encodings):
            if any(not 0 <= p < 16 for p in enc):
                raise ConfigurationError(f"encoding {i} has a cell outside 0-15: {enc}")
            t = self.table_for(i)
            need = 16 ** len(enc)
            have = self.weights[t].numel()
            if need > have:
                raise ConfigurationError(
                    f"encoding {i} ({len(enc)} cells) needs {need} weights, table {t} has {have}"
                )
        self.encodings = encodings

    def index(self, board: Board, enc: Sequence[int]) -> int:
        idx = 0
        for p in enc:
            idx = (idx << 4) | board[p]
        return idx

    def features(self, board: Board) -> List[Feature]:
        """(table, cell) pairs selected by board, one per encoding."""
        return [(self.table_for(i), self.index(board, enc)) for i, enc in enumerate(self.encodings)]

    @staticmethod
    def group(features: Sequence[Feature]) -> Dict[int, torch.Tensor]:
        """Cell indices per table, repeats kept."""
        cells: Dict[int, List[int]] = {}
        for t, c in features:
            cells.setdefault(t, []).append(c)
        return {t: torch.tensor(idx, dtype=torch.long) for t, idx in cells.items()}

    @torch.no_grad()
    def estimate(self, features: Sequence[Feature]) -> float:
        """Sum of the referenced weights."""
        return float(sum(self.weights[t][idx].sum().item() for t, idx in self.group(features).items()))

    @torch.no_grad()
    def update(self, features: Sequence[Feature], delta: float):
        """Add delta to every referenced weight (repeats add repeatedly)."""
        for t, idx in self.group(features).items():
            table = self.weights[t]
            table.index_add_(0, idx, torch.full((idx.numel(),), delta, dtype=table.dtype))

    def value(self, board: Board) -> float:
        return self.estimate(self.features(board))


class NTupleSlider(Agent):
    """
    Greedy afterstate-value slider that learns by backward TD sweeps.

    Config keys: init, load, save, alpha, reward_scale, share.
    """

    defaults = "name=ntuple role=slider"

    def __init__(self, args: str = "", encodings: Optional[Sequence[Sequence[int]]] = None):
        super().__init__(args)
        self.config = LearningConfig.from_meta(self.meta)
        self.alpha = self.config.alpha

        self.weights = WeightStore()
        if self.config.init:
            self.weights.init(self.config.init)
        if self.config.load:
            self.weights.load(self.config.load)

        self.network = TupleNetwork(
            self.weights,
            DEFAULT_ENCODINGS if encodings is None else encodings,
            share=self.config.share,
        )
        self.trajectory = Trajectory()
        self.last_loss = 0.0

    def set_encoding(self, encodings: Sequence[Sequence[int]]):
        self.network.set_encoding(encodings)

    def reward_fn(self, reward: int) -> float:
        return reward_transform(reward, self.config.reward_scale)

    def open_episode(self, flag: str = ""):
        self.trajectory.clear()

    def close_episode(self, flag: str = ""):
        """
        Backward TD sweep, most recent step first.

        For step t: loss = r_{t+1} + V(s_{t+1}) - V(s_t), where r_{t+1} is the
        stored reward of the following step and both terms are 0 past the end.
        V(s_{t+1}) is the value read before that step's own update.
        """
        r = 0.0
        next_value = 0.0
        total = 0.0

        for step in reversed(self.trajectory):
            current_value = self.network.estimate(step.features)
            loss = r + next_value - current_value
            self.network.update(step.features, self.alpha * loss)
            total += abs(loss)

            next_value = current_value
            r = step.reward

        self.last_loss = total / len(self.trajectory) if len(self.trajectory) else 0.0
        logger.debug("episode of %d steps, mean |td error| %.4f", len(self.trajectory), self.last_loss)

    def take_action(self, board: Board) -> Action:
        best = None
        best_value = -math.inf

        for direction in SEARCH_ORDER:
            after = board.copy()
            reward = after.slide(direction)
            if reward == ILLEGAL:
                continue

            features = self.network.features(after)
            value = self.reward_fn(reward) + self.network.estimate(features)
            if value > best_value:
                best, best_value = (direction, features, reward), value

        if best is None:
            return Action()

        direction, features, reward = best
        self.trajectory.add(features, self.reward_fn(reward))
        return Action.slide(direction)

    def close(self):
        if self.config.save:
            self.weights.save(self.config.save)
