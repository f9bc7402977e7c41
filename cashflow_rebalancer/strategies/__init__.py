"""Ways of splitting one period's contribution across assets."""

from .base import ContributionStrategy
from .greedy import GreedyContributionStrategy
from .shortfall import ShortfallContributionStrategy

__all__ = [
    "ContributionStrategy",
    "GreedyContributionStrategy",
    "ShortfallContributionStrategy",
]
