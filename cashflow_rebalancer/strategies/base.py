"""Abstract base class for contribution strategies."""

from abc import ABC, abstractmethod
from fractions import Fraction

from ..models import AssetGap, MonthlyInvestment
from ..portfolio import Portfolio


class ContributionStrategy(ABC):
    """Decides how one monthly contribution is split across assets."""

    @abstractmethod
    def split_contribution(
        self,
        portfolio: Portfolio,
        target_allocation: dict[str, Fraction],
        monthly_contribution: Fraction,
    ) -> MonthlyInvestment:
        """Calculate this period's investment instruction.

        Args:
            portfolio: Current state of the portfolio being rebalanced.
            target_allocation: Target fraction per asset, summing to exactly 1.
            monthly_contribution: Amount invested this period.

        Returns:
            Amount to buy for every asset in the portfolio. Amounts are never
            negative and sum to ``monthly_contribution``.
        """
        pass

    def _classify_gaps(
        self,
        allocation: dict[str, Fraction],
        target_allocation: dict[str, Fraction],
    ) -> tuple[list[AssetGap], list[AssetGap]]:
        """Split assets into over-target and under-target lists.

        Both lists are ordered by gap size, largest first. Equal gaps keep
        the order in which the assets appear in ``allocation``.
        """
        over_target: list[AssetGap] = []
        under_target: list[AssetGap] = []

        for asset, current in allocation.items():
            difference = target_allocation[asset] - current
            if difference < 0:
                over_target.append(AssetGap(asset, -difference))
            elif difference > 0:
                under_target.append(AssetGap(asset, difference))

        return (
            sorted(over_target, key=lambda g: g.gap, reverse=True),
            sorted(under_target, key=lambda g: g.gap, reverse=True),
        )
