#!/usr/bin/env python3
import argparse
import logging
import sys
from fractions import Fraction

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from cashflow_rebalancer import (
    MonthlyInvestment,
    Portfolio,
    RebalanceConfig,
    RebalanceError,
    RebalanceRequest,
    StrategyName,
    apply_investment,
    load_plan_file,
    parse_allocation,
    rebalance_portfolio,
)
from cashflow_rebalancer.numeric import to_decimal, to_fraction, to_fraction_map

logger = logging.getLogger(__name__)
console = Console()

# Thresholds and defaults
DRIFT_THRESHOLD = Fraction(2, 100)
MAX_SCHEDULE_ROWS = 24

STRATEGY_LABELS: dict[StrategyName, str] = {
    StrategyName.GREEDY: "Greedy (most underweight first)",
    StrategyName.SHORTFALL: "Shortfall (proportional to gap)",
}


def _money(amount: Fraction) -> str:
    return f"${to_decimal(amount):,.2f}"


def _percent(fraction: Fraction) -> str:
    return f"{float(fraction):.1%}"


def _drift_color(drift: Fraction) -> str:
    """Return color based on drift magnitude and direction."""
    if abs(drift) < DRIFT_THRESHOLD:
        return "green"
    return "red" if drift > 0 else "blue"


def holdings_table(
    portfolio: Portfolio, target_allocation: dict[str, Fraction], title: str
) -> Table:
    """Build a Rich table showing holdings and drift from target."""
    t = Table(title=title, box=box.ROUNDED, title_style="bold white")
    t.add_column("Asset", style="cyan")
    t.add_column("Value", justify="right")
    t.add_column("Alloc", justify="right", style="yellow")
    t.add_column("Target", justify="right", style="green")
    t.add_column("Drift", justify="right")

    alloc = portfolio.allocation()
    for asset, amount in portfolio.holdings.items():
        cur = alloc[asset]
        tgt = target_allocation.get(asset, Fraction(0))
        drift = cur - tgt
        t.add_row(
            asset,
            _money(amount),
            _percent(cur),
            _percent(tgt),
            Text(f"{float(drift):+.1%}", style=_drift_color(drift)),
        )

    t.add_section()
    t.add_row("Total", f"[bold]{_money(portfolio.value())}[/bold]", "", "", "")
    return t


def _schedule_rows(count: int) -> list[int | None]:
    """Indexes of the schedule rows to show; None marks the elided middle."""
    if count <= MAX_SCHEDULE_ROWS:
        return list(range(count))
    head = MAX_SCHEDULE_ROWS // 2
    tail = MAX_SCHEDULE_ROWS - head - 1
    return [*range(head), None, *range(count - tail, count)]


def schedule_table(investments: list[MonthlyInvestment], assets: list[str]) -> Table:
    """Build a Rich table with one row per month of the schedule."""
    t = Table(title="Monthly Contributions", box=box.ROUNDED, title_style="bold white")
    t.add_column("Month", justify="right", style="dim")
    for asset in assets:
        t.add_column(asset, justify="right", style="cyan")
    t.add_column("Total", justify="right", style="bold")

    for index in _schedule_rows(len(investments)):
        if index is None:
            t.add_row("…", *("…" for _ in assets), "…")
            continue
        investment = investments[index]
        t.add_row(
            str(index + 1),
            *(_money(investment[asset]) for asset in assets),
            _money(sum(investment.values(), start=Fraction(0))),
        )

    totals = {
        asset: sum((inv[asset] for inv in investments), start=Fraction(0))
        for asset in assets
    }
    t.add_section()
    t.add_row(
        "All",
        *(_money(totals[asset]) for asset in assets),
        _money(sum(totals.values(), start=Fraction(0))),
    )
    return t


def apply_schedule(
    portfolio: Portfolio, investments: list[MonthlyInvestment]
) -> Portfolio:
    """Apply every month's investment to a copy of the portfolio."""
    result = portfolio.copy()
    for investment in investments:
        apply_investment(result, investment)
    return result


def _ask_allocation(label: str) -> dict[str, Fraction]:
    while True:
        text = Prompt.ask(f"  {label} [dim](e.g. VTI=60, BND=40)[/dim]")
        try:
            return to_fraction_map(parse_allocation(text))
        except RebalanceError as e:
            logger.warning("Rejected input %r: %s", text, e)
            console.print(f"  [red]{escape(str(e))}[/red]")


def _ask_amount(label: str) -> Fraction:
    while True:
        text = Prompt.ask(f"  {label}")
        try:
            return to_fraction(text)
        except RebalanceError as e:
            logger.warning("Rejected input %r: %s", text, e)
            console.print(f"  [red]{escape(str(e))}[/red]")


def prompt_request() -> RebalanceRequest:
    """Ask for holdings, target and contribution interactively."""
    console.print("[bold]Portfolio:[/bold]")
    holdings = _ask_allocation("Current holdings")
    target = _ask_allocation("Target allocation")

    # Targets typed as whole percentages (60, 40) are scaled to fractions
    percent_slack = 100 * RebalanceConfig.allocation_sum_tolerance
    if abs(sum(target.values()) - 100) <= percent_slack:
        target = {asset: pct / 100 for asset, pct in target.items()}

    contribution = _ask_amount("Monthly contribution")
    return RebalanceRequest(
        holdings=holdings,
        target_allocation=target,
        monthly_contribution=contribution,
    )


def display_rebalance_results(
    portfolio: Portfolio,
    target_allocation: dict[str, Fraction],
    investments: list[MonthlyInvestment],
    strategy: StrategyName,
) -> None:
    """Display the contribution schedule and the resulting portfolio."""
    if not investments:
        console.print("[green]  Already balanced, no contributions needed.[/green]")
        return

    console.print(schedule_table(investments, portfolio.assets()))
    console.print(
        f"  [dim]{len(investments)} months using {STRATEGY_LABELS[strategy]}[/dim]"
    )

    result = apply_schedule(portfolio, investments)
    console.print()
    console.print(holdings_table(result, target_allocation, "After contributions"))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Plan monthly contributions that rebalance a portfolio."
    )
    parser.add_argument("plan", nargs="?", help="JSON plan file; prompts if omitted")
    parser.add_argument(
        "--strategy",
        choices=[s.value for s in StrategyName],
        help="How each contribution is split (default: greedy)",
    )
    parser.add_argument("--tolerance", help="Allowed drift per asset, e.g. 0.01")
    parser.add_argument(
        "--max-periods",
        type=int,
        default=RebalanceConfig.max_periods,
        help="Give up after this many months",
    )
    parser.add_argument("--verbose", action="store_true", help="Log every month")
    return parser


def run(args: argparse.Namespace) -> int:
    request = load_plan_file(args.plan) if args.plan else prompt_request()

    strategy = StrategyName(args.strategy) if args.strategy else request.strategy
    tolerance = to_fraction(args.tolerance) if args.tolerance else request.tolerance
    config = RebalanceConfig(max_periods=args.max_periods)

    portfolio = Portfolio(request.holdings)
    console.print()
    console.print(holdings_table(portfolio, request.target_allocation, "Current portfolio"))

    investments = rebalance_portfolio(
        portfolio,
        request.target_allocation,
        request.monthly_contribution,
        tolerance=tolerance,
        strategy=strategy,
        config=config,
    )

    console.print()
    display_rebalance_results(
        portfolio, request.target_allocation, investments, strategy
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the CLI application."""
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    console.print()
    console.print(
        Panel("[bold]Cash-flow Rebalancer[/bold] · contributions only", box=box.DOUBLE)
    )

    try:
        return run(args)
    except (RebalanceError, OSError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
