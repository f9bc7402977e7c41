"""Exceptions raised by the rebalancer."""


class RebalanceError(Exception):
    """Base class for every error raised by this package."""


class InvalidArgumentError(RebalanceError, ValueError):
    """An argument is out of its valid range or cannot be parsed."""


class ConfigurationMismatchError(RebalanceError, ValueError):
    """The target allocation does not fit the portfolio it is applied to."""


class EmptyPortfolioError(RebalanceError, ZeroDivisionError):
    """The portfolio has no value, so allocation fractions are undefined."""


class NonConvergenceError(RebalanceError):
    """The portfolio did not balance within the allowed number of periods."""

    def __init__(self, periods: int) -> None:
        super().__init__(
            f"Portfolio still unbalanced after {periods} periods; "
            f"the target may be unreachable with contributions alone"
        )
        self.periods = periods


class PlanFormatError(RebalanceError, ValueError):
    """A plan file is missing fields or is not valid JSON."""
