"""
Training utilities: agent construction and the self-play training loop.
"""

import time
from dataclasses import dataclass
from typing import Dict, List

from tqdm.auto import trange, tqdm

from .agent import Agent
from .episode import EpisodeRecord, format_summary, play_episode, summarize
from .heuristic import MergeLargerAgent
from .ntuple import NTupleSlider
from .random_agents import RandomPlacer, RandomSlider
from .symmetries import DEFAULT_INIT

SLIDERS = {
    "ntuple": NTupleSlider,
    "merge": MergeLargerAgent,
    "random": RandomSlider,
}


@dataclass
class TrainConfig:
    """Training configuration."""

    # Episodes to play
    total: int = 1000

    # Episodes per statistics block
    block: int = 100

    # Slider kind, one of SLIDERS
    agent: str = "ntuple"

    # key=value strings handed to the agents
    slide_args: str = f"init={DEFAULT_INIT} alpha=0.00625"
    place_args: str = ""

    # Placer seed, also given to the random slider
    seed: int = 0


def make_agent(kind: str, args: str = "") -> Agent:
    """Build a slider by kind name."""
    try:
        cls = SLIDERS[kind]
    except KeyError:
        raise ValueError(f"unknown slider {kind!r}, expected one of {sorted(SLIDERS)}") from None
    return cls(args)


def make_placer(config: TrainConfig) -> RandomPlacer:
    args = config.place_args
    if config.seed is not None and "seed=" not in args:
        args = f"seed={config.seed} {args}"
    return RandomPlacer(args)


def make_slider(config: TrainConfig) -> Agent:
    args = config.slide_args
    if config.agent == "random" and config.seed is not None and "seed=" not in args:
        args = f"seed={config.seed} {args}"
    return make_agent(config.agent, args)


def run_block(placer: Agent, slider: Agent, episodes: int) -> List[EpisodeRecord]:
    """Play a block of episodes."""
    return [play_episode(placer, slider) for _ in range(episodes)]


def train(config: TrainConfig) -> List[Dict]:
    """
    Play config.total episodes, reporting every config.block.

    The slider is closed at the end, which saves its weights when configured.

    Returns:
        list of per-block summaries (each with 'episode' and 'block_s' keys)
    """
    placer = make_placer(config)
    slider = make_slider(config)

    history = []
    records: List[EpisodeRecord] = []
    t0 = time.perf_counter()

    with placer, slider:
        iterator = trange(1, config.total + 1, desc="Training")
        for episode in iterator:
            records.append(play_episode(placer, slider))

            if episode % config.block == 0 or episode == config.total:
                stats = summarize(records)
                stats["episode"] = episode
                stats["block_s"] = time.perf_counter() - t0
                if isinstance(slider, NTupleSlider):
                    stats["td_error"] = slider.last_loss
                history.append(stats)

                for line in format_summary(stats, label=f"[{episode:6d}] "):
                    tqdm.write(line)
                iterator.set_postfix(avg=f"{stats['avg_score']:.0f}")

                records = []
                t0 = time.perf_counter()

    return history
