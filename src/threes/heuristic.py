"""
Rule-based slider: merge the larger pile first.

Slide priority: left > up > right > down.
"""

from .action import Action
from .agent import Agent
from .game import Board, ILLEGAL, UP, RIGHT, DOWN, LEFT

# Bonus for a 1 next to a 2
ONETWO_SCORE = 5

# Bonus once any empty cell is seen
SPACE_SCORE = 1


def merge_larger(board: Board, transpose: bool = False) -> int:
    """
    Score how well the rows (or columns, with transpose) of a board merge.

    Scans every line left to right with a moving pivot. A 1-2 pair earns
    ONETWO_SCORE, an equal pair above 2 earns the tile index, and the first
    empty cell anywhere earns SPACE_SCORE once for the whole board.
    """
    if transpose:
        board.transpose()

    space = 0
    score = 0

    for r in range(4):
        row = board.row(r)
        pivot = row[0]
        c = 1
        while c < 4:
            cell = row[c]
            if cell == 0:
                space = SPACE_SCORE
            elif pivot == 0:
                pivot = cell
            elif cell + pivot == 3:
                score += ONETWO_SCORE
                if c < 3:
                    pivot = row[c + 1]
                    c += 1
            elif cell > 2 and pivot > 2 and cell == pivot:
                score += pivot
                if c < 3:
                    pivot = row[c + 1]
                    c += 1
            else:
                pivot = cell
            c += 1

    if transpose:
        board.transpose()

    return score + space


def _legal(board: Board, direction: int) -> bool:
    return board.copy().slide(direction) != ILLEGAL


class MergeLargerAgent(Agent):
    """Deterministic slider driven by merge_larger scores."""

    defaults = "name=merge role=slider"

    def take_action(self, board: Board) -> Action:
        b = board.copy()
        horizontal = merge_larger(b)
        vertical = merge_larger(b, transpose=True)

        if horizontal >= vertical and _legal(b, LEFT):
            return Action.slide(LEFT)
        if horizontal < vertical and _legal(b, UP):
            return Action.slide(UP)
        for direction in (RIGHT, DOWN):
            if _legal(b, direction):
                return Action.slide(direction)
        return Action()
