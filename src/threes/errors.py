"""
Exceptions raised by agents and the weight store.
"""


class AgentError(Exception):
    """Base class for agent failures."""


class MissingKey(AgentError, KeyError):
    """An agent property was read before being set."""

    def __init__(self, key: str):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"missing agent property: {self.key!r}"


class ConfigurationError(AgentError, ValueError):
    """A configuration value, table-size list or encoding is unusable."""


class WeightFileError(AgentError, OSError):
    """A weight file could not be opened, or ended early."""
