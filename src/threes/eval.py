"""
Evaluation functions.

Compares sliders against the same random environment with learning frozen.
"""

from typing import Dict, Optional, Sequence

from tqdm.auto import tqdm

from .action import Action
from .agent import Agent
from .episode import play_episode, summarize
from .game import Board
from .random_agents import RandomPlacer
from .train import make_agent


def eval_slider(
    kind: str,
    args: str = "",
    episodes: int = 100,
    seed: Optional[int] = 0,
) -> Dict[str, float]:
    """
    Play episodes with one slider kind and summarize them.

    Learning agents get alpha=0 appended so evaluation never changes weights,
    and their save= path is dropped.
    """
    args = f"{args} alpha=0 save="
    placer = RandomPlacer("" if seed is None else f"seed={seed}")
    with make_agent(kind, args) as slider:
        records = [
            play_episode(placer, slider)
            for _ in tqdm(range(episodes), desc=f"Eval {kind}", leave=False)
        ]
    return summarize(records)


def eval_baselines(
    ntuple_args: str,
    episodes: int = 100,
    kinds: Sequence[str] = ("ntuple", "merge", "random"),
    seed: Optional[int] = 0,
) -> Dict[str, Dict[str, float]]:
    """
    Evaluate the learned slider against the heuristic and random baselines.

    Every kind sees the same placer seed, so tile sequences start identically.

    Returns:
        dict: kind -> summarize() output
    """
    results = {}
    for kind in kinds:
        args = ntuple_args if kind == "ntuple" else f"seed={seed}" if seed is not None else ""
        results[kind] = eval_slider(kind, args, episodes=episodes, seed=seed)
    return results


def suggest_move(slider: Agent, board: Board) -> Action:
    """Ask a slider for its move without keeping the step for learning."""
    slider.open_episode()
    action = slider.take_action(board)
    slider.open_episode()
    return action
