"""
Actions produced by agents: slide, place, or pass.
"""

from dataclasses import dataclass
from enum import Enum

from .game import Board, ILLEGAL


class ActionType(Enum):
    NULL = 0
    SLIDE = 1
    PLACE = 2


@dataclass(frozen=True)
class Action:
    """An agent's decision. The default instance is the null action."""
    kind: ActionType = ActionType.NULL
    direction: int = -1
    position: int = -1
    tile: int = 0
    hint: int = 0

    @classmethod
    def slide(cls, direction: int) -> "Action":
        return cls(ActionType.SLIDE, direction=int(direction))

    @classmethod
    def place(cls, position: int, tile: int, hint: int) -> "Action":
        return cls(ActionType.PLACE, position=position, tile=tile, hint=hint)

    def __bool__(self) -> bool:
        return self.kind is not ActionType.NULL

    def apply(self, board: Board) -> int:
        """Apply to board in place. Returns the reward, or ILLEGAL."""
        if self.kind is ActionType.SLIDE:
            return board.slide(self.direction)
        if self.kind is ActionType.PLACE:
            return board.place(self.position, self.tile, self.hint)
        return ILLEGAL

    def __str__(self) -> str:
        if self.kind is ActionType.SLIDE:
            return f"#{'URDL'[self.direction]}"
        if self.kind is ActionType.PLACE:
            return f"{self.position:X}{self.tile}+{self.hint}"
        return "??"
