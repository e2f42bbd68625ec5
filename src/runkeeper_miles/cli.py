from dataclasses import replace
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from runkeeper_miles.config import load_config
from runkeeper_miles.errors import RunkeeperError
from runkeeper_miles.stats.monthly import MonthlyMilesCalculator, build_source
from runkeeper_miles.util.cache import PageCache, listing_key
from runkeeper_miles.util.logging import configure_logging

app = typer.Typer(add_completion=False)
console = Console()


def _calculator(config: Path | None, cache_dir: Path | None, verbose: bool) -> MonthlyMilesCalculator:
    configure_logging(logging.DEBUG if verbose else logging.INFO)
    cfg = load_config(config)
    if cache_dir is not None:
        cfg = replace(cfg, app=replace(cfg.app, cache_dir=str(cache_dir)))
    return MonthlyMilesCalculator(build_source(cfg))


def _check_month(month: int) -> None:
    if not 1 <= month <= 12:
        console.print(f"[red]Month must be between 1 and 12, got {month}[/red]")
        raise typer.Exit(code=2)


@app.command()
def miles(
    user: str,
    year: int,
    month: int,
    config: Path | None = None,
    cache_dir: Path | None = None,
    verbose: bool = False,
) -> None:
    """Print the total distance a user covered in a month."""
    _check_month(month)
    calculator = _calculator(config, cache_dir, verbose)
    try:
        total = calculator.monthly_miles(user, year, month)
    except (RunkeeperError, OSError) as exc:
        console.print(f"[red]Failed for {user}: {exc}[/red]")
        raise typer.Exit(code=1) from exc
    console.print(f"{user} {year}-{month:02d}: {total:.2f} miles")
    console.print(f"Network fetches: {calculator.source.fetch_count}")


@app.command()
def activities(
    user: str,
    year: int,
    month: int,
    config: Path | None = None,
    cache_dir: Path | None = None,
    verbose: bool = False,
) -> None:
    """List the activities a user logged in a month."""
    _check_month(month)
    calculator = _calculator(config, cache_dir, verbose)
    table = Table(title=f"{user} {year}-{month:02d}")
    table.add_column("Activity")
    table.add_column("Started")
    table.add_column("Miles", justify="right")
    total = 0.0
    try:
        for activity in calculator.monthly_activities(user, year, month):
            distance = activity.miles
            total += distance
            table.add_row(activity.path, activity.started_at.strftime("%Y-%m-%d %H:%M"), f"{distance:.2f}")
    except (RunkeeperError, OSError) as exc:
        console.print(f"[red]Failed for {user}: {exc}[/red]")
        raise typer.Exit(code=1) from exc
    console.print(table)
    console.print(f"Total: {total:.2f} miles")


@app.command()
def cache_path(
    user: str,
    config: Path | None = None,
    cache_dir: Path | None = None,
) -> None:
    """Show where today's activity list for a user is cached."""
    cfg = load_config(config)
    cache = PageCache(cache_dir or cfg.cache_dir)
    path = cache.path_for(listing_key(user, cache.today()))
    status = "cached" if path.exists() else "not cached"
    console.print(f"{path} ({status})", soft_wrap=True)


if __name__ == "__main__":
    app()
