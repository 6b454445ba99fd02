"""
StrategyRegistry

Holds the scoring strategies a pipeline runs, in registration order.
Strategies are registered at startup; the registry is read-only during a
ranking call.
"""

import logging
from typing import Any, Iterable, Optional

from ..matching_config import MatchingConfig
from .scoring_strategy import ScoringStrategy
from .strategies import AffectiveStrategy, AnalyticalStrategy, ExploratoryStrategy

logger = logging.getLogger(__name__)


class StrategyRegistry:
    """
    Ordered, name-keyed collection of ScoringStrategy implementations.

    Examples:
        >>> registry = StrategyRegistry()
        >>> registry.register(AnalyticalStrategy())
        >>> registry.names()
        ['analytical']
        >>> registry.register(AnalyticalStrategy())
        Traceback (most recent call last):
        ...
        ValueError: Strategy 'analytical' is already registered
    """

    def __init__(self, strategies: Optional[Iterable[ScoringStrategy]] = None) -> None:
        self._strategies: dict[str, ScoringStrategy] = {}
        for strategy in strategies or ():
            self.register(strategy)

    def register(self, strategy: ScoringStrategy) -> None:
        """
        Add a strategy.

        Raises:
            ValueError: If the name is empty, already registered, or the
                object does not implement ScoringStrategy
        """
        if not isinstance(strategy, ScoringStrategy):
            raise ValueError(
                f"{type(strategy).__name__} does not implement ScoringStrategy "
                "(needs name, description and async evaluate)"
            )
        name = strategy.name
        if not name:
            raise ValueError("Strategy name cannot be empty")
        if name in self._strategies:
            raise ValueError(f"Strategy '{name}' is already registered")
        self._strategies[name] = strategy
        logger.debug(f"Registered scoring strategy '{name}'")

    def get(self, name: str) -> ScoringStrategy:
        """
        Raises:
            KeyError: If no strategy has that name
        """
        try:
            return self._strategies[name]
        except KeyError:
            raise KeyError(f"Unknown strategy '{name}'") from None

    def strategies(self) -> list[ScoringStrategy]:
        return list(self._strategies.values())

    def names(self) -> list[str]:
        return list(self._strategies)

    def diagnostics(self, config: Optional[MatchingConfig] = None) -> list[dict[str, Any]]:
        """Status of every registered strategy with its effective timeout."""
        config = config or MatchingConfig.default()
        return [
            {
                "name": name,
                "status": "online",
                "description": getattr(strategy, "description", ""),
                "timeout_s": config.timeout_for(name),
            }
            for name, strategy in self._strategies.items()
        ]

    def __len__(self) -> int:
        return len(self._strategies)

    def __contains__(self, name: object) -> bool:
        return name in self._strategies


def default_registry() -> StrategyRegistry:
    """Registry with the analytical, affective and exploratory strategies."""
    return StrategyRegistry(
        [AnalyticalStrategy(), AffectiveStrategy(), ExploratoryStrategy()]
    )
