"""
Threes! agents - environment placers and sliders, including an n-tuple
network slider trained by backward TD learning.
"""

from .action import Action, ActionType
from .agent import Agent, Property
from .config import LearningConfig, RandomConfig
from .errors import AgentError, ConfigurationError, MissingKey, WeightFileError
from .game import ANY, ILLEGAL, Board, Direction, UP, RIGHT, DOWN, LEFT
from .heuristic import MergeLargerAgent, merge_larger
from .random_agents import RandomPlacer, RandomSlider
from .weights import WeightStore
from .ntuple import NTupleSlider, TupleNetwork, reward_transform
from .symmetries import DEFAULT_ENCODINGS, DEFAULT_INIT, isomorphic_encodings
from .trajectory import Trajectory
from .episode import EpisodeRecord, play_episode, summarize
from .train import TrainConfig, make_agent, train
from .eval import eval_baselines, eval_slider

__version__ = "0.1.0"
__all__ = [
    "Action",
    "ActionType",
    "Agent",
    "Property",
    "LearningConfig",
    "RandomConfig",
    "AgentError",
    "ConfigurationError",
    "MissingKey",
    "WeightFileError",
    "ANY",
    "ILLEGAL",
    "Board",
    "Direction",
    "UP",
    "RIGHT",
    "DOWN",
    "LEFT",
    "MergeLargerAgent",
    "merge_larger",
    "RandomPlacer",
    "RandomSlider",
    "WeightStore",
    "NTupleSlider",
    "TupleNetwork",
    "reward_transform",
    "DEFAULT_ENCODINGS",
    "DEFAULT_INIT",
    "isomorphic_encodings",
    "Trajectory",
    "EpisodeRecord",
    "play_episode",
    "summarize",
    "TrainConfig",
    "make_agent",
    "train",
    "eval_baselines",
    "eval_slider",
]
