from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from typing import Iterator

from runkeeper_miles.config import Config, default_config
from runkeeper_miles.ingest.runkeeper.client import RunkeeperClient
from runkeeper_miles.ingest.runkeeper.parse import MarkupInterpreter, PageInterpreter
from runkeeper_miles.ingest.runkeeper.source import ActivityPageSource, PageFetcher
from runkeeper_miles.models.activity import Activity, User
from runkeeper_miles.util.cache import Clock, PageCache
from runkeeper_miles.util.logging import get_logger

LOG = get_logger(__name__)


class MonthlyMilesCalculator:
    def __init__(self, source: ActivityPageSource) -> None:
        self.source = source

    def user(self, user: str) -> User:
        return User.from_listing(self.source.get_listing_page(user), self.source)

    def monthly_activities(self, user: str, year: int, month: int) -> Iterator[Activity]:
        """Yield the user's activities that started in ``year``/``month``.

        The listing is newest first, so the scan stops at the first activity
        older than the month. Anything listed after it is never looked at,
        even if it would match.
        """
        month_start = _month_start(year, month)
        for activity in self.user(user).activities:
            started_at = activity.started_at
            if started_at < month_start:
                LOG.debug("Stopping at %s (%s)", activity.path, started_at)
                break
            if started_at.year == year and started_at.month == month:
                yield activity

    def monthly_miles(self, user: str, year: int, month: int) -> float:
        total = 0.0
        for activity in self.monthly_activities(user, year, month):
            total += activity.miles
        return total


def build_source(
    cfg: Config,
    clock: Clock | None = None,
    fetcher: PageFetcher | None = None,
    interpreter: PageInterpreter | None = None,
) -> ActivityPageSource:
    cache = PageCache(Path(cfg.app.cache_dir), clock or date.today)
    return ActivityPageSource(
        cfg.app.base_url,
        cache,
        fetcher or RunkeeperClient(cfg.app.user_agent, cfg.scrape),
        interpreter or MarkupInterpreter(),
    )


def monthly_miles(
    user: str,
    year: int,
    month: int,
    cfg: Config | None = None,
    *,
    clock: Clock | None = None,
    source: ActivityPageSource | None = None,
) -> float:
    """Total distance the user logged in the given month."""
    _month_start(year, month)
    if source is None:
        source = build_source(cfg or default_config(), clock=clock)
    return MonthlyMilesCalculator(source).monthly_miles(user, year, month)


def _month_start(year: int, month: int) -> datetime:
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")
    return datetime(year, month, 1)
