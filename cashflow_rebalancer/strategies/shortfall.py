"""Shortfall strategy: pace contributions toward the ideal portfolio.

After this period's contribution the ideal portfolio holds
``target * (value + contribution)`` of each asset. Every asset holding less
than that has a shortfall, and the contribution is split in proportion to
those shortfalls. The shortfalls add up to at least the contribution, so no
asset is ever pushed past its ideal holding.
"""

from fractions import Fraction

from ..models import MonthlyInvestment
from ..portfolio import Portfolio
from .base import ContributionStrategy


class ShortfallContributionStrategy(ContributionStrategy):
    """Split each contribution in proportion to every asset's shortfall."""

    def split_contribution(
        self,
        portfolio: Portfolio,
        target_allocation: dict[str, Fraction],
        monthly_contribution: Fraction,
    ) -> MonthlyInvestment:
        future_value = portfolio.value() + monthly_contribution
        holdings = portfolio.holdings

        shortfalls = {
            asset: max(Fraction(0), target_allocation[asset] * future_value - held)
            for asset, held in holdings.items()
        }
        total_shortfall = sum(shortfalls.values(), start=Fraction(0))

        return {
            asset: monthly_contribution * shortfall / total_shortfall
            for asset, shortfall in shortfalls.items()
        }
