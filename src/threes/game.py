"""
Threes! board rules and state management.

Board representation: list[int] of length 16, row-major
  - 0: empty
  - 1, 2: the "1" and "2" tiles
  - k >= 3: face value 3 * 2^(k - 3), i.e. 3, 6, 12, 24, ...

Direction codes: UP=0, RIGHT=1, DOWN=2, LEFT=3
"""

from enum import IntEnum
from typing import Dict, List, Optional, Sequence


class Direction(IntEnum):
    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3


UP, RIGHT, DOWN, LEFT = Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT

# last() before any slide: a new tile may go anywhere
ANY = 4

# Reward reported by a slide or placement that has no effect
ILLEGAL = -1

# Largest tile index (12288); cells fit in 4 bits
MAX_TILE = 15

BAG_RANKS = (1, 2, 3)
BAG_COPIES = 4


def tile_value(index: int) -> int:
    """Face value of a tile index (0 for empty)."""
    if index < 3:
        return index
    return 3 << (index - 3)


def tile_score(index: int) -> int:
    """Points a tile is worth on the final board."""
    if index < 3:
        return 0
    return 3 ** (index - 2)


def merge(a: int, b: int) -> int:
    """Result of sliding tile b onto tile a, or 0 if they do not combine."""
    if a + b == 3 and a * b == 2:
        return 3
    if a == b and 3 <= a < MAX_TILE:
        return a + 1
    return 0


def slide_row_left(row: List[int]) -> bool:
    """Slide one line toward index 0 in place. Returns True if anything moved."""
    moved = False
    for c in range(1, 4):
        if row[c] == 0:
            continue
        if row[c - 1] == 0:
            row[c - 1], row[c] = row[c], 0
            moved = True
            continue
        merged = merge(row[c - 1], row[c])
        if merged:
            row[c - 1], row[c] = merged, 0
            moved = True
    return moved


class Board:
    """4x4 Threes! board with its tile bag and pending hint."""

    def __init__(
        self,
        cells: Optional[Sequence[int]] = None,
        hint: int = 0,
        bag: Optional[Dict[int, int]] = None,
        last: int = ANY,
    ):
        self.cells = list(cells) if cells is not None else [0] * 16
        if len(self.cells) != 16:
            raise ValueError(f"expected 16 cells, got {len(self.cells)}")
        if any(not 0 <= v <= MAX_TILE for v in self.cells):
            raise ValueError(f"cell values must be in 0-{MAX_TILE}")
        self._hint = hint
        self._bag = dict(bag) if bag is not None else {t: BAG_COPIES for t in BAG_RANKS}
        self._last = last

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]], **kwargs) -> "Board":
        return cls([v for row in rows for v in row], **kwargs)

    def copy(self) -> "Board":
        return Board(self.cells, hint=self._hint, bag=self._bag, last=self._last)

    def __getitem__(self, key) -> int:
        if isinstance(key, tuple):
            r, c = key
            return self.cells[r * 4 + c]
        return self.cells[key]

    def __setitem__(self, key, value: int):
        if isinstance(key, tuple):
            r, c = key
            key = r * 4 + c
        self.cells[key] = value

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (self.cells == other.cells and self._hint == other._hint
                and self._bag == other._bag and self._last == other._last)

    def row(self, r: int) -> List[int]:
        return self.cells[r * 4:(r + 1) * 4]

    def rows(self) -> List[List[int]]:
        return [self.row(r) for r in range(4)]

    def last(self) -> int:
        """Direction of the most recent slide, or ANY."""
        return self._last

    def hint(self) -> int:
        """Pending hint rank, 0 if none."""
        return self._hint

    def bag(self, rank: int) -> int:
        """Remaining copies of a rank in the tile bag."""
        return self._bag.get(rank, 0)

    def score(self) -> int:
        return sum(tile_score(v) for v in self.cells)

    def max_tile(self) -> int:
        return max(self.cells)

    def empty_cells(self) -> List[int]:
        return [i for i, v in enumerate(self.cells) if v == 0]

    def transpose(self):
        """Swap rows and columns in place."""
        self.cells = [self.cells[c * 4 + r] for r in range(4) for c in range(4)]

    def reflect_horizontal(self):
        """Mirror each row in place."""
        self.cells = [self.cells[r * 4 + (3 - c)] for r in range(4) for c in range(4)]

    def slide(self, direction: int) -> int:
        """
        Apply a slide in place.

        Returns:
            the reward (score gained), or ILLEGAL if no tile could move
        """
        direction = Direction(direction)
        before = self.score()

        # Reduce every direction to a left slide
        if direction in (UP, DOWN):
            self.transpose()
        if direction in (RIGHT, DOWN):
            self.reflect_horizontal()

        moved = False
        for r in range(4):
            row = self.row(r)
            if slide_row_left(row):
                self.cells[r * 4:(r + 1) * 4] = row
                moved = True

        if direction in (RIGHT, DOWN):
            self.reflect_horizontal()
        if direction in (UP, DOWN):
            self.transpose()

        if not moved:
            return ILLEGAL
        self._last = int(direction)
        return self.score() - before

    def place(self, pos: int, tile: int, hint: int) -> int:
        """
        Put a tile on an empty cell and announce the next hint.

        The placed tile is the pending hint when one exists, otherwise it is
        drawn from the bag. The new hint is always drawn from the bag.

        Returns:
            0 on success, ILLEGAL if the placement is not allowed
        """
        if not 0 <= pos < 16 or self.cells[pos] != 0:
            return ILLEGAL
        if tile not in BAG_RANKS or hint not in BAG_RANKS:
            return ILLEGAL
        if self._hint and tile != self._hint:
            return ILLEGAL

        draws = [hint] if self._hint else [tile, hint]
        for rank in BAG_RANKS:
            if draws.count(rank) > self._bag.get(rank, 0):
                return ILLEGAL

        for rank in draws:
            self._bag[rank] -= 1
        if sum(self._bag.values()) == 0:
            self._bag = {t: BAG_COPIES for t in BAG_RANKS}

        self.cells[pos] = tile
        self._hint = hint
        return 0

    def __str__(self) -> str:
        lines = []
        for r in range(4):
            lines.append(" ".join(f"{tile_value(v):5d}" if v else "    ." for v in self.row(r)))
        lines.append(f"hint: {tile_value(self._hint) if self._hint else '-'}")
        return "\n".join(lines)


def is_stuck(board: Board) -> bool:
    """True if no direction can move any tile."""
    return all(board.copy().slide(d) == ILLEGAL for d in Direction)


def legal_moves(board: Board) -> List[Direction]:
    """Directions whose slide would change the board."""
    return [d for d in Direction if board.copy().slide(d) != ILLEGAL]
