"""Merge-larger heuristic slider."""

from threes.action import Action
from threes.game import UP, RIGHT, DOWN, LEFT, Board
from threes.heuristic import MergeLargerAgent, merge_larger

EMPTY = [0, 0, 0, 0]


def test_merge_larger_scores():
    b = Board.from_rows([[3, 3, 0, 0], EMPTY, EMPTY, EMPTY])
    # equal pair scores its index, plus the board-wide space bonus
    assert merge_larger(b) == 4

    b = Board.from_rows([[1, 2, 0, 0], EMPTY, EMPTY, EMPTY])
    assert merge_larger(b) == 6


def test_merge_larger_restores_transposed_board():
    b = Board.from_rows([[1, 0, 0, 0], [2, 0, 0, 0], EMPTY, EMPTY])
    before = b.copy()
    assert merge_larger(b, transpose=True) == 6
    assert b == before


def test_tie_prefers_left():
    b = Board.from_rows([[0, 1, 0, 0], EMPTY, EMPTY, EMPTY])
    assert MergeLargerAgent().take_action(b) == Action.slide(LEFT)


def test_vertical_score_prefers_up_even_if_left_is_legal():
    b = Board.from_rows([[1, 0, 0, 0], [2, 0, 0, 0], EMPTY, [0, 0, 0, 3]])
    assert merge_larger(b.copy()) < merge_larger(b.copy(), transpose=True)
    assert MergeLargerAgent().take_action(b) == Action.slide(UP)


def test_falls_back_to_right_when_left_is_illegal():
    b = Board.from_rows([[1, 0, 0, 0], EMPTY, EMPTY, EMPTY])
    assert MergeLargerAgent().take_action(b) == Action.slide(RIGHT)


def test_vertical_preference_skips_left():
    # only (3, 0) is empty: column scan sees the space, row scan does not
    rows = [[1 if (r + c) % 2 == 0 else 3 for c in range(4)] for r in range(4)]
    rows[3][0] = 0
    b = Board.from_rows(rows)
    assert merge_larger(b.copy()) == 0
    assert merge_larger(b.copy(), transpose=True) == 1
    assert MergeLargerAgent().take_action(b) == Action.slide(DOWN)


def test_stuck_board_gives_null_action():
    b = Board.from_rows([[1 if (r + c) % 2 == 0 else 3 for c in range(4)] for r in range(4)])
    assert not MergeLargerAgent().take_action(b)


def test_does_not_mutate_board():
    b = Board.from_rows([[1, 2, 0, 0], EMPTY, EMPTY, EMPTY])
    before = b.copy()
    MergeLargerAgent().take_action(b)
    assert b == before
