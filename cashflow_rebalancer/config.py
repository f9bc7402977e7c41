"""Configuration constants for the rebalancer."""

from dataclasses import dataclass
from enum import Enum
from fractions import Fraction


class StrategyName(str, Enum):
    """Available ways of splitting a monthly contribution."""

    GREEDY = "greedy"
    SHORTFALL = "shortfall"


@dataclass(frozen=True)
class RebalanceConfig:
    """Policy constants for a rebalancing run.

    tolerance: maximum per-asset distance from target (as a fraction of total
        value) at which the portfolio counts as balanced.
    max_periods: number of monthly instructions after which an unbalanced
        portfolio is reported as not converging.
    allocation_sum_tolerance: how far the target fractions may sum from 1.
    """

    tolerance: Fraction = Fraction(1, 100)
    max_periods: int = 1200
    allocation_sum_tolerance: Fraction = Fraction(1, 10000)
    default_strategy: StrategyName = StrategyName.GREEDY
