"""Data models for the cash-flow rebalancer."""

from dataclasses import dataclass
from fractions import Fraction

from .config import StrategyName

MonthlyInvestment = dict[str, Fraction]


@dataclass(frozen=True)
class AssetGap:
    """Distance between an asset's target and current fraction, unsigned."""

    asset: str
    gap: Fraction

    def __str__(self) -> str:
        return f"{self.asset} ({float(self.gap):.2%})"


@dataclass(frozen=True)
class RebalanceRequest:
    """Everything needed to compute a contribution schedule."""

    holdings: dict[str, Fraction]
    target_allocation: dict[str, Fraction]
    monthly_contribution: Fraction
    tolerance: Fraction | None = None
    strategy: StrategyName = StrategyName.GREEDY
