"""CLI entry point for the options journal."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click

from .core.config import STARTING_BALANCE_KEY, Settings, load_settings
from .core.errors import JournalError


@click.group()
def main() -> None:
    """Options trading journal analytics."""


def _load_rows(path: str) -> list[dict[str, Any]]:
    """Trade rows from a JSON file: a list, or ``{"trades": [...]}``."""
    try:
        payload = json.loads(Path(path).read_text())
    except json.JSONDecodeError as e:
        raise click.ClickException(f"{path} is not valid JSON: {e}") from e
    if isinstance(payload, dict):
        payload = payload.get("trades", [])
    if not isinstance(payload, list):
        raise click.ClickException(f"{path}: expected a list of trades")
    for i, row in enumerate(payload):
        if not isinstance(row, dict):
            raise click.ClickException(f"{path}: trade {i} is not an object")
    return payload


def _settings(config: str | None) -> Settings:
    try:
        return load_settings(config_path=config)
    except JournalError as e:
        raise click.ClickException(str(e)) from e


@main.command()
@click.option("--trades", "trades_path", required=True, type=click.Path(exists=True, dir_okay=False), help="JSON file of trade rows")
@click.option("--config", default=None, help="Config file path")
@click.option("--starting-balance", default=None, help="Account starting balance")
@click.option("--year", default=None, type=int, help="Year of the monthly overview")
@click.option("--format", "fmt", type=click.Choice(["text", "json"]), default="text")
def report(
    trades_path: str,
    config: str | None,
    starting_balance: str | None,
    year: int | None,
    fmt: str,
) -> None:
    """Build the performance report for a file of trades."""
    from .analytics.report import PerformanceService
    from .observability.logger import setup_logging
    from .storage.memory import InMemorySettingsStore, InMemoryTradeRepository

    settings = _settings(config)
    setup_logging(
        level=settings.observability.log_level,
        format=settings.observability.log_format,
    )

    repo = InMemoryTradeRepository(
        contract_multiplier=settings.analytics.contract_multiplier,
        time_windows=settings.time_windows,
        tz=settings.analytics.tzinfo,
    )
    try:
        for row in _load_rows(trades_path):
            repo.create(row)
    except JournalError as e:
        raise click.ClickException(str(e)) from e

    store = InMemorySettingsStore()
    if starting_balance is not None:
        store.set_setting(STARTING_BALANCE_KEY, starting_balance)

    result = PerformanceService(repo, store, config=settings).generate(year=year)

    if fmt == "json":
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    s = result.summary
    dd = result.drawdown
    st = result.streaks
    final = result.equity_curve[-1].balance

    click.echo(f"\n{'=' * 60}")
    click.echo("PERFORMANCE REPORT")
    click.echo(f"{'=' * 60}")
    click.echo(f"  Starting Balance: {result.starting_balance:,.2f}")
    click.echo(f"  Final Balance:    {final:,.2f}")
    click.echo(f"  Trades:           {s.total_trades} ({s.closed_trades} closed)")
    click.echo(f"  Total P&L:        {s.total_pnl:+,.2f}")
    click.echo(f"  Win Rate:         {s.win_rate:.1f}%")
    click.echo(f"  Avg Win / Loss:   {s.avg_win:,.2f} / {s.avg_loss:,.2f}")
    click.echo(f"  Max Drawdown:     {dd.max_drawdown:,.2f} ({dd.max_drawdown_percent:.2f}%)")
    click.echo(f"  Current Drawdown: {dd.current_drawdown:,.2f}")
    click.echo(f"  Sharpe Ratio:     {result.sharpe_ratio:.4f}")
    click.echo(f"  Current Streak:   {st.current_streak:+d}")
    click.echo(f"  Best / Worst Run: {st.max_win_streak}W / {st.max_loss_streak}L")

    if result.pnl_histogram:
        click.echo("\n  P&L Distribution:")
        for bucket, count in result.pnl_histogram.items():
            click.echo(f"    {bucket:>10,.0f}  {'#' * count} {count}")

    click.echo(f"\n  {result.year} by Month:")
    for month, cell in result.monthly_calendar.items():
        if cell.trade_count:
            click.echo(f"    {month}  {cell.pnl_sum:>+12,.2f}  {cell.trade_count:>4} trades")

    click.echo(f"\n{'=' * 60}\n")


@main.command()
@click.argument("entry_time")
@click.option("--config", default=None, help="Config file path")
def classify(entry_time: str, config: str | None) -> None:
    """Print the session label for ENTRY_TIME (HH:MM or ISO-8601)."""
    from .journal.time_of_day import classify_time_of_day

    settings = _settings(config)
    try:
        label = classify_time_of_day(
            entry_time, settings.time_windows, tz=settings.analytics.tzinfo
        )
    except JournalError as e:
        raise click.ClickException(str(e)) from e
    click.echo(label)


if __name__ == "__main__":
    main()
