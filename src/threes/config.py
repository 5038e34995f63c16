"""
Typed views of agent configuration, read once at construction.
"""

from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigurationError

SHARE_POLICIES = ("modulo", "direct")

# Seed used when none is configured
DEFAULT_SEED = 1


def _number(meta: Mapping[str, str], key: str, kind, default):
    if key not in meta:
        return default
    try:
        return kind(float(meta[key]))
    except ValueError:
        raise ConfigurationError(f"{key}={meta[key]!r} is not a number") from None


@dataclass
class RandomConfig:
    """Settings for agents with a random engine."""

    # Engine seed, fixed so unseeded runs repeat
    seed: int = DEFAULT_SEED

    @classmethod
    def from_meta(cls, meta: Mapping[str, str]) -> "RandomConfig":
        return cls(seed=_number(meta, "seed", int, DEFAULT_SEED))


@dataclass
class LearningConfig:
    """Settings for agents that own weight tables."""

    # Learning rate
    alpha: float = 0.0

    # Comma-separated table sizes, e.g. "65536,65536"
    init: Optional[str] = None

    # Weight file paths
    load: Optional[str] = None
    save: Optional[str] = None

    # Multiplier in the reward transform scale * 2^floor(ln(r + 1))
    reward_scale: float = 32.0

    # Encoding i uses table i % n ("modulo") or table i ("direct")
    share: str = "modulo"

    @classmethod
    def from_meta(cls, meta: Mapping[str, str]) -> "LearningConfig":
        share = str(meta.get("share", "modulo"))
        if share not in SHARE_POLICIES:
            raise ConfigurationError(f"share={share!r}, expected one of {SHARE_POLICIES}")
        return cls(
            alpha=_number(meta, "alpha", float, 0.0),
            init=meta.get("init") or None,
            load=meta.get("load") or None,
            save=meta.get("save") or None,
            reward_scale=_number(meta, "reward_scale", float, 32.0),
            share=share,
        )
