"""
Cash-flow Rebalancer - plan monthly contributions that bring a portfolio back
to its target allocation without selling anything.

Exports:
    Portfolio: Held value per asset with derived total value and allocation
    rebalance_portfolio: Compute the month-by-month investment schedule
    is_balanced: Check every asset is within tolerance of its target
    apply_investment: Add one month's purchases to a portfolio
    RebalanceConfig: Policy constants (tolerance, period cap)
    ContributionStrategy: Abstract base class for contribution strategies
    GreedyContributionStrategy: Freed capacity goes to the worst asset (default)
    ShortfallContributionStrategy: Split in proportion to each asset's shortfall
    load_plan_file / parse_allocation: Read plans from JSON files or text
"""

from .config import RebalanceConfig, StrategyName
from .errors import (
    ConfigurationMismatchError,
    EmptyPortfolioError,
    InvalidArgumentError,
    NonConvergenceError,
    PlanFormatError,
    RebalanceError,
)
from .loaders import load_plan, load_plan_file, parse_allocation
from .models import AssetGap, MonthlyInvestment, RebalanceRequest
from .portfolio import Portfolio
from .rebalancer import (
    apply_investment,
    is_balanced,
    rebalance_portfolio,
    validate_target_allocation,
)
from .strategies import (
    ContributionStrategy,
    GreedyContributionStrategy,
    ShortfallContributionStrategy,
)

__all__ = [
    "Portfolio",
    "rebalance_portfolio",
    "is_balanced",
    "apply_investment",
    "validate_target_allocation",
    "RebalanceConfig",
    "StrategyName",
    "AssetGap",
    "MonthlyInvestment",
    "RebalanceRequest",
    "ContributionStrategy",
    "GreedyContributionStrategy",
    "ShortfallContributionStrategy",
    "load_plan",
    "load_plan_file",
    "parse_allocation",
    "RebalanceError",
    "InvalidArgumentError",
    "ConfigurationMismatchError",
    "EmptyPortfolioError",
    "NonConvergenceError",
    "PlanFormatError",
]
