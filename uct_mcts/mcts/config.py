"""
Configuration for the UCT search.

This module defines the parameters of a single search call: how many
rounds to run, how long each random rollout may be, and how strongly
UCB1 favours exploration.
"""
from dataclasses import dataclass, fields
from typing import Any, ClassVar, Dict, Mapping, Optional


@dataclass
class UCTConfig:
    """
    Configuration parameters for Upper Confidence Bound Tree search.

    Invalid values are rejected on construction.
    """
    iterations: int = 1000
    """Number of select/expand/simulate/backpropagate rounds per search"""

    simulations_per_iteration: int = 100
    """Maximum number of random rollout steps per round"""

    exploration_constant: float = 1.0
    """UCB1 C parameter (large -> breadth first, small -> depth first)"""

    time_limit: Optional[float] = None
    """Optional time limit in seconds, checked before each round (None = no limit)"""

    seed: Optional[int] = None
    """Seed for the random source when none is injected into the search"""

    # Accepted spellings for keys coming from other tools
    KEY_ALIASES: ClassVar[Dict[str, str]] = {
        "simulationsPerIteration": "simulations_per_iteration",
        "explorationConstant": "exploration_constant",
        "simulations": "simulations_per_iteration",
        "ucbc": "exploration_constant",
        "timeLimit": "time_limit",
    }

    def __post_init__(self):
        """Validate configuration parameters."""
        if self.iterations < 1:
            raise ValueError("iterations must be at least 1")

        if self.simulations_per_iteration < 0:
            raise ValueError("simulations_per_iteration must be non-negative")

        if self.exploration_constant < 0:
            raise ValueError("exploration_constant must be non-negative")

        if self.time_limit is not None and self.time_limit <= 0:
            raise ValueError("time_limit must be positive or None")

    @classmethod
    def default(cls) -> 'UCTConfig':
        """Get the default configuration."""
        return cls()

    @classmethod
    def fast(cls) -> 'UCTConfig':
        """
        Get a configuration optimized for speed (fewer iterations).

        Returns:
            Fast UCTConfig object
        """
        return cls(iterations=100, simulations_per_iteration=50)

    @classmethod
    def deep(cls) -> 'UCTConfig':
        """
        Get a configuration optimized for deep search.

        Returns:
            Deep UCTConfig object
        """
        return cls(
            iterations=10000,
            simulations_per_iteration=200,
            exploration_constant=0.7  # Slightly less exploration
        )

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> 'UCTConfig':
        """
        Create a configuration from a dictionary.

        Unknown keys are ignored. Both snake_case field names and the
        aliases in ``KEY_ALIASES`` are accepted.

        Args:
            config_dict: Dictionary of configuration parameters

        Returns:
            UCTConfig object
        """
        field_names = {f.name for f in fields(cls)}
        params = {}
        for key, value in config_dict.items():
            name = cls.KEY_ALIASES.get(key, key)
            if name in field_names:
                params[name] = value
        return cls(**params)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the configuration to a dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def __str__(self) -> str:
        params = ", ".join(f"{name}={value}" for name, value in self.to_dict().items())
        return f"UCTConfig({params})"
