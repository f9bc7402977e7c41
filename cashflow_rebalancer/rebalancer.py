"""Month-by-month contribution schedule that rebalances without selling."""

import logging
from fractions import Fraction

from .config import RebalanceConfig, StrategyName
from .errors import (
    ConfigurationMismatchError,
    InvalidArgumentError,
    NonConvergenceError,
)
from .models import MonthlyInvestment
from .numeric import Number, to_fraction, to_fraction_map
from .portfolio import Portfolio
from .strategies import (
    ContributionStrategy,
    GreedyContributionStrategy,
    ShortfallContributionStrategy,
)

logger = logging.getLogger(__name__)

STRATEGIES: dict[StrategyName, type[ContributionStrategy]] = {
    StrategyName.GREEDY: GreedyContributionStrategy,
    StrategyName.SHORTFALL: ShortfallContributionStrategy,
}


def get_strategy(name: str | StrategyName) -> ContributionStrategy:
    try:
        strategy_cls = STRATEGIES[StrategyName(name)]
    except ValueError:
        raise InvalidArgumentError(
            f"Unknown strategy: {name}. "
            f"Valid strategies are: {', '.join(s.value for s in StrategyName)}"
        ) from None
    return strategy_cls()


def validate_target_allocation(
    portfolio: Portfolio,
    target_allocation: dict[str, Number],
    config: RebalanceConfig | None = None,
) -> dict[str, Fraction]:
    """Check a target allocation against a portfolio and normalise it.

    Returns:
        The target as Fractions in portfolio order, scaled to sum to exactly 1.

    Raises:
        ConfigurationMismatchError: If the assets differ from the portfolio's,
            a fraction is outside [0, 1], or the fractions do not sum to 1
            within ``config.allocation_sum_tolerance``.
    """
    config = config or RebalanceConfig()
    target = to_fraction_map(target_allocation)

    assets = portfolio.assets()
    missing = [asset for asset in assets if asset not in target]
    unknown = [asset for asset in target if asset not in assets]
    if missing or unknown:
        raise ConfigurationMismatchError(
            f"Target allocation does not match portfolio assets "
            f"(missing targets: {missing}, not held: {unknown})"
        )

    for asset, fraction in target.items():
        if fraction < 0 or fraction > 1:
            raise ConfigurationMismatchError(
                f"Allocation for {asset} must be between 0 and 1, got {fraction}"
            )

    total = sum(target.values(), start=Fraction(0))
    if total == 0:
        raise ConfigurationMismatchError("Allocations must not all be zero")
    if abs(total - 1) > config.allocation_sum_tolerance:
        raise ConfigurationMismatchError(
            f"Allocations must sum to 1.0, got {float(total)}"
        )

    return {asset: target[asset] / total for asset in assets}


def is_balanced(
    portfolio: Portfolio,
    target_allocation: dict[str, Fraction],
    tolerance: Fraction,
) -> bool:
    """True when every asset is within ``tolerance`` of its target fraction."""
    return all(
        abs(target_allocation[asset] - current) <= tolerance
        for asset, current in portfolio.allocation().items()
    )


def apply_investment(portfolio: Portfolio, investment: MonthlyInvestment) -> None:
    """Add one period's purchases to the portfolio's holdings."""
    holdings = portfolio.holdings
    for asset, amount in investment.items():
        holdings[asset] = holdings.get(asset, Fraction(0)) + amount
    portfolio.set_holdings(holdings)


def rebalance_portfolio(
    portfolio: Portfolio,
    target_allocation: dict[str, Number],
    monthly_contribution: Number,
    tolerance: Number | None = None,
    strategy: str | StrategyName | None = None,
    config: RebalanceConfig | None = None,
) -> list[MonthlyInvestment]:
    """Calculate the monthly purchases that bring a portfolio to its target.

    The portfolio passed in is never modified; the schedule is computed on a
    private copy.

    Args:
        portfolio: Current holdings.
        target_allocation: Target fraction per asset. Must name exactly the
            portfolio's assets and sum to 1.
        monthly_contribution: Positive amount invested every period.
        tolerance: Largest acceptable distance from target per asset.
            Defaults to ``config.tolerance``.
        strategy: How each contribution is split, "greedy" (default) or
            "shortfall".
        config: Policy constants; defaults to ``RebalanceConfig()``.

    Returns:
        One investment per month, first month first. Empty if the portfolio
        is already balanced.

    Raises:
        InvalidArgumentError: Non-positive contribution, negative tolerance or
            unknown strategy.
        ConfigurationMismatchError: Target allocation does not fit the portfolio.
        EmptyPortfolioError: Portfolio has zero total value.
        NonConvergenceError: Still unbalanced after ``config.max_periods``.
    """
    config = config or RebalanceConfig()
    contribution = to_fraction(monthly_contribution)
    tolerance = config.tolerance if tolerance is None else to_fraction(tolerance)

    if contribution <= 0:
        raise InvalidArgumentError(
            f"Monthly contribution must be positive, got {contribution}"
        )
    if tolerance < 0:
        raise InvalidArgumentError(f"Tolerance must not be negative, got {tolerance}")

    splitter = get_strategy(strategy or config.default_strategy)
    target = validate_target_allocation(portfolio, target_allocation, config)

    working = portfolio.copy()
    investments: list[MonthlyInvestment] = []

    while not is_balanced(working, target, tolerance):
        if len(investments) >= config.max_periods:
            raise NonConvergenceError(len(investments))

        investment = splitter.split_contribution(working, target, contribution)
        apply_investment(working, investment)
        investments.append(investment)
        logger.debug("Period %d: %s", len(investments), investment)

    logger.info(
        "Portfolio balanced within %s after %d periods",
        float(tolerance),
        len(investments),
    )
    return investments
