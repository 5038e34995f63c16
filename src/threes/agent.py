"""
Agent contract shared by placers and sliders.

Agents are configured with whitespace-separated key=value tokens, e.g.
"name=ntuple role=slider alpha=0.1 init=65536,65536". Each agent may override
open_episode, close_episode, take_action and check_for_win.
"""

from typing import Dict

from .action import Action
from .errors import MissingKey
from .game import Board


class Property(str):
    """A configuration value: text, convertible to a number on demand."""

    def __float__(self) -> float:
        return float(str(self))

    def __int__(self) -> int:
        return int(float(str(self)))


def parse_args(args: str) -> Dict[str, Property]:
    """Split "k1=v1 k2=v2" into a dict. Later tokens win."""
    meta = {}
    for pair in args.split():
        key, _, value = pair.partition("=")
        meta[key] = Property(value)
    return meta


class Agent:
    """Base agent: holds configuration and plays the null action."""

    defaults = ""

    def __init__(self, args: str = ""):
        self.meta: Dict[str, Property] = parse_args(
            f"name=unknown role=unknown {self.defaults} {args}"
        )

    def open_episode(self, flag: str = ""):
        pass

    def close_episode(self, flag: str = ""):
        pass

    def take_action(self, board: Board) -> Action:
        return Action()

    def check_for_win(self, board: Board) -> bool:
        return False

    def close(self):
        """Release the agent at the end of a run."""

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False

    def notify(self, msg: str):
        """Insert or overwrite one key=value pair."""
        key, _, value = msg.partition("=")
        self.meta[key] = Property(value)

    def has(self, key: str) -> bool:
        return key in self.meta

    def name(self) -> str:
        return self.property("name")

    def role(self) -> str:
        return self.property("role")

    def property(self, key: str) -> Property:
        try:
            return self.meta[key]
        except KeyError:
            raise MissingKey(key) from None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.meta.get('name')!r}, role={self.meta.get('role')!r})"
