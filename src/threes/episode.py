"""
Episode runner and block statistics.

An episode starts with INITIAL_PLACEMENTS placer turns, then the slider and
placer alternate until one of them has no legal action.
"""

import logging
import time
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from .action import ActionType
from .agent import Agent
from .game import Board, ILLEGAL, tile_value

logger = logging.getLogger(__name__)

INITIAL_PLACEMENTS = 9


@dataclass
class EpisodeRecord:
    """Outcome of one episode."""
    score: int
    max_tile: int
    slides: int
    reward: int
    seconds: float
    won: bool = False


def take_turns(placer: Agent, slider: Agent, step: int) -> Agent:
    """Agent to move at a given step (0-based)."""
    if step < INITIAL_PLACEMENTS:
        return placer
    return slider if (step - INITIAL_PLACEMENTS) % 2 == 0 else placer


def play_episode(placer: Agent, slider: Agent, board: Optional[Board] = None) -> EpisodeRecord:
    """
    Play one episode on board (a fresh board if None).

    Returns:
        EpisodeRecord for the finished game
    """
    board = Board() if board is None else board
    t0 = time.perf_counter()

    placer.open_episode("~:" + placer.name())
    slider.open_episode(slider.name() + ":~")

    step = slides = total_reward = 0
    won = False
    while True:
        who = take_turns(placer, slider, step)
        action = who.take_action(board)
        if not action:
            break
        reward = action.apply(board)
        if reward == ILLEGAL:
            logger.warning("%s produced an illegal action %s", who.name(), action)
            break
        if action.kind is ActionType.SLIDE:
            slides += 1
            total_reward += reward
        step += 1
        if who is slider and slider.check_for_win(board):
            won = True
            break

    # flag names the agent that ended the episode
    placer.close_episode(who.name())
    slider.close_episode(who.name())

    record = EpisodeRecord(
        score=board.score(),
        max_tile=board.max_tile(),
        slides=slides,
        reward=total_reward,
        seconds=time.perf_counter() - t0,
        won=won,
    )
    logger.debug("episode done: score %d, max tile %d, %d slides",
                 record.score, tile_value(record.max_tile), record.slides)
    return record


def summarize(records: Sequence[EpisodeRecord]) -> Dict[str, float]:
    """
    Block statistics.

    Returns:
        dict with 'episodes', 'avg_score', 'max_score', 'avg_slides',
        'ops_per_s' and 'reach' (tile face value -> fraction of episodes
        whose max tile is at least that tile)
    """
    n = len(records)
    if n == 0:
        return {"episodes": 0, "avg_score": 0.0, "max_score": 0, "avg_slides": 0.0,
                "ops_per_s": 0.0, "reach": {}}

    seconds = sum(r.seconds for r in records)
    counts = Counter(r.max_tile for r in records)
    reach = {}
    at_least = 0
    for tile in sorted(counts, reverse=True):
        at_least += counts[tile]
        reach[tile_value(tile)] = at_least / n

    return {
        "episodes": n,
        "avg_score": sum(r.score for r in records) / n,
        "max_score": max(r.score for r in records),
        "avg_slides": sum(r.slides for r in records) / n,
        "ops_per_s": sum(r.slides for r in records) / seconds if seconds > 0 else 0.0,
        "reach": dict(sorted(reach.items())),
    }


def format_summary(stats: Dict[str, float], label: str = "") -> List[str]:
    """Render summarize() output as lines of text."""
    lines = [
        f"{label}avg = {stats['avg_score']:.0f}, max = {stats['max_score']}, "
        f"slides = {stats['avg_slides']:.1f}, ops = {stats['ops_per_s']:.0f}/s"
    ]
    for tile, rate in stats["reach"].items():
        lines.append(f"\t{tile}\t{rate:.1%}")
    return lines
