"""Loaders for rebalancing plans from files and text."""

import json
from pathlib import Path

from .config import StrategyName
from .errors import InvalidArgumentError, PlanFormatError
from .models import RebalanceRequest
from .numeric import Number, to_fraction, to_fraction_map

REQUIRED_FIELDS = ("holdings", "target_allocation", "monthly_contribution")


def parse_allocation(text: str) -> dict[str, Number]:
    """Parse an ``ASSET=AMOUNT`` list such as ``"VTI=900, BND=100"``.

    Args:
        text: Comma or newline separated pairs. Amounts may be decimals or
            ratios like ``3/5``; a trailing ``%`` divides by 100.

    Returns:
        Dictionary mapping asset names to their amounts as strings, in the
        order given.

    Raises:
        InvalidArgumentError: If a pair is malformed or an asset repeats.
    """
    result: dict[str, Number] = {}

    for chunk in text.replace("\n", ",").split(","):
        chunk = chunk.strip()
        if not chunk:
            continue

        name, sep, amount = chunk.partition("=")
        name, amount = name.strip(), amount.strip()
        if not sep or not name or not amount:
            raise InvalidArgumentError(f"Expected ASSET=AMOUNT, got '{chunk}'")
        if name in result:
            raise InvalidArgumentError(f"Asset {name} listed more than once")

        if amount.endswith("%"):
            amount = to_fraction(amount[:-1]) / 100
        result[name] = amount

    if not result:
        raise InvalidArgumentError("No assets given")
    return result


def load_plan(data: dict) -> RebalanceRequest:
    """Build a RebalanceRequest from a decoded plan object.

    Raises:
        PlanFormatError: If a required field is missing or has the wrong shape.
        InvalidArgumentError: If a number cannot be parsed.
    """
    if not isinstance(data, dict):
        raise PlanFormatError("Plan must be a JSON object")

    missing = [name for name in REQUIRED_FIELDS if name not in data]
    if missing:
        raise PlanFormatError(f"Plan is missing fields: {', '.join(missing)}")

    for name in ("holdings", "target_allocation"):
        if not isinstance(data[name], dict):
            raise PlanFormatError(f"'{name}' must map asset names to numbers")

    strategy = data.get("strategy", StrategyName.GREEDY.value)
    try:
        strategy = StrategyName(strategy)
    except ValueError:
        raise PlanFormatError(f"Unknown strategy in plan: {strategy}") from None

    tolerance = data.get("tolerance")
    return RebalanceRequest(
        holdings=to_fraction_map(data["holdings"]),
        target_allocation=to_fraction_map(data["target_allocation"]),
        monthly_contribution=to_fraction(data["monthly_contribution"]),
        tolerance=None if tolerance is None else to_fraction(tolerance),
        strategy=strategy,
    )


def load_plan_file(path: str | Path) -> RebalanceRequest:
    """Load a rebalancing plan from a JSON file.

    Example file::

        {
            "holdings": {"VTI": "9000", "BND": "1000"},
            "target_allocation": {"VTI": "0.6", "BND": "0.4"},
            "monthly_contribution": 500,
            "tolerance": "0.01"
        }
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise PlanFormatError(f"{path} is not valid UTF-8 JSON: {e}") from e
    except json.JSONDecodeError as e:
        raise PlanFormatError(f"{path} is not valid JSON: {e}") from e

    return load_plan(data)
