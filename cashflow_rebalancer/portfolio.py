from fractions import Fraction

from .errors import EmptyPortfolioError, InvalidArgumentError
from .numeric import Number, to_fraction_map


class Portfolio:
    """Held value per asset, with total value and allocation derived from it.

    Holdings are only changed by replacing the whole map with
    ``set_holdings``, which keeps the total value in step with them.
    """

    def __init__(self, holdings: dict[str, Number] | None = None) -> None:
        self._holdings: dict[str, Fraction] = {}
        self._value = Fraction(0)
        self.set_holdings(holdings or {})

    @property
    def holdings(self) -> dict[str, Fraction]:
        return dict(self._holdings)

    def set_holdings(self, holdings: dict[str, Number]) -> None:
        converted = to_fraction_map(holdings)
        for asset, amount in converted.items():
            if amount < 0:
                raise InvalidArgumentError(
                    f"Holding for {asset} must not be negative, got {amount}"
                )

        self._holdings = converted
        self._value = sum(converted.values(), start=Fraction(0))

    def assets(self) -> list[str]:
        return list(self._holdings)

    def value(self) -> Fraction:
        return self._value

    def allocation(self) -> dict[str, Fraction]:
        """Fraction of total value held in each asset.

        Raises:
            EmptyPortfolioError: If the portfolio is empty or worth nothing.
        """
        if self._value == 0:
            raise EmptyPortfolioError(
                "Cannot compute allocation of a portfolio with zero total value"
            )

        return {
            asset: amount / self._value
            for asset, amount in self._holdings.items()
        }

    def copy(self) -> "Portfolio":
        return Portfolio(self._holdings)

    def __repr__(self) -> str:
        holdings = {asset: str(amount) for asset, amount in self._holdings.items()}
        return f"Portfolio(holdings={holdings}, value={self._value})"
