from __future__ import annotations

from typing import Protocol

from runkeeper_miles.ingest.runkeeper.parse import (
    DetailPage,
    ListingPage,
    PageInterpreter,
    activity_number,
)
from runkeeper_miles.util.cache import PageCache, activity_key, listing_key
from runkeeper_miles.util.logging import get_logger

LOG = get_logger(__name__)

USER_PATH = "/user/"


class PageFetcher(Protocol):
    def fetch(self, url: str) -> str: ...


class ActivityPageSource:
    """Serves interpreted Runkeeper pages, preferring the on-disk cache."""

    def __init__(
        self,
        base_url: str,
        cache: PageCache,
        fetcher: PageFetcher,
        interpreter: PageInterpreter,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.cache = cache
        self.fetcher = fetcher
        self.interpreter = interpreter
        self.fetch_count = 0

    def get_listing_page(self, user: str) -> ListingPage:
        key = listing_key(user, self.cache.today())
        raw = self.cache.read(key)
        if raw is None:
            LOG.info("Downloading the activities for %s", user)
            raw = self._download(self.listing_url(user), key)
        return self.interpreter.listing(raw)

    def get_detail_page(self, path: str) -> DetailPage:
        key = activity_key(activity_number(path))
        raw = self.cache.read(key)
        if raw is None:
            LOG.info("Downloading the activity on %s", path)
            raw = self._download(self.detail_url(path), key)
        return self.interpreter.detail(raw)

    def listing_url(self, user: str) -> str:
        return f"{self.base_url}{USER_PATH}{user}/activitylist"

    def detail_url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _download(self, url: str, key: str) -> str:
        raw = self.fetcher.fetch(url)
        self.fetch_count += 1
        self.cache.write(key, raw)
        return raw
