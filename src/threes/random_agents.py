"""
Uniform-random agents: the default environment (placer) and a random slider.
"""

import random
from typing import List

from .action import Action
from .agent import Agent
from .config import RandomConfig
from .game import Board, BAG_RANKS, ILLEGAL, Direction

# Cells a new tile may land on, indexed by the last slide direction.
# A slide empties the edge opposite to its direction; index 4 is the whole board.
SPACES = (
    [12, 13, 14, 15],   # after UP: bottom row
    [0, 4, 8, 12],      # after RIGHT: left column
    [0, 1, 2, 3],       # after DOWN: top row
    [3, 7, 11, 15],     # after LEFT: right column
    list(range(16)),    # before any slide
)


def make_engine(config: RandomConfig) -> random.Random:
    """Generator seeded from config.seed."""
    return random.Random(config.seed)


class RandomPlacer(Agent):
    """Place the hint tile on a random open cell and decide a new hint."""

    defaults = "name=place role=placer"

    def __init__(self, args: str = ""):
        super().__init__(args)
        self.config = RandomConfig.from_meta(self.meta)
        self.engine = make_engine(self.config)

    def take_action(self, board: Board) -> Action:
        space = list(SPACES[board.last()])
        self.engine.shuffle(space)
        for pos in space:
            if board[pos] != 0:
                continue

            bag: List[int] = []
            for rank in BAG_RANKS:
                bag.extend([rank] * board.bag(rank))
            self.engine.shuffle(bag)

            tile = board.hint() or bag.pop()
            hint = bag.pop()
            return Action.place(pos, tile, hint)
        return Action()


class RandomSlider(Agent):
    """Select a legal slide uniformly at random."""

    defaults = "name=slide role=slider"

    def __init__(self, args: str = ""):
        super().__init__(args)
        self.config = RandomConfig.from_meta(self.meta)
        self.engine = make_engine(self.config)
        self.opcode = list(Direction)

    def take_action(self, board: Board) -> Action:
        self.engine.shuffle(self.opcode)
        for op in self.opcode:
            if board.copy().slide(op) != ILLEGAL:
                return Action.slide(op)
        return Action()
