"""Greedy strategy: freed capacity goes to the most underweight asset."""

import logging
from fractions import Fraction

from ..models import MonthlyInvestment
from ..portfolio import Portfolio
from .base import ContributionStrategy

logger = logging.getLogger(__name__)


class GreedyContributionStrategy(ContributionStrategy):
    """Starve overweight assets and pour the difference into the worst one.

    Each period starts from the target split. Every over-target asset has its
    share cut by the size of its gap, never below zero, and everything cut
    this way is handed to the single asset furthest below its target. Assets
    with no gap keep their target share.

    An over-target asset keeps ``target - gap`` of the split, so it only drops
    to zero once its gap reaches its target.
    """

    def split_contribution(
        self,
        portfolio: Portfolio,
        target_allocation: dict[str, Fraction],
        monthly_contribution: Fraction,
    ) -> MonthlyInvestment:
        over_target, under_target = self._classify_gaps(
            portfolio.allocation(), target_allocation
        )
        adjusted = dict(target_allocation)

        freed = Fraction(0)
        for asset_gap in over_target:
            target = target_allocation[asset_gap.asset]
            if target - asset_gap.gap < 0:
                adjusted[asset_gap.asset] = Fraction(0)
                freed += target
            else:
                adjusted[asset_gap.asset] = target - asset_gap.gap
                freed += asset_gap.gap

        if under_target:
            recipient = under_target[0]
            adjusted[recipient.asset] += freed
            logger.debug(
                "Moving %s of contribution share from %s to %s",
                freed,
                ", ".join(str(g) for g in over_target),
                recipient,
            )

        return {
            asset: monthly_contribution * adjusted[asset]
            for asset in portfolio.assets()
        }
