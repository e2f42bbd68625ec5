from __future__ import annotations

import requests

from runkeeper_miles.config import ScrapeConfig
from runkeeper_miles.errors import FetchError
from runkeeper_miles.util.logging import get_logger
from runkeeper_miles.util.ratelimit import Throttle

LOG = get_logger(__name__)


class RunkeeperClient:
    """Blocking page fetcher. Every request waits the configured pause first."""

    def __init__(
        self,
        user_agent: str,
        scrape_config: ScrapeConfig,
        throttle: Throttle | None = None,
    ) -> None:
        self.scrape = scrape_config
        self.throttle = throttle or Throttle(scrape_config.rate_limit_seconds)
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": user_agent})

    def fetch(self, url: str) -> str:
        return self.throttle.run(lambda: self._get(url))

    def _get(self, url: str) -> str:
        LOG.debug("Fetching: %s", url)
        try:
            resp = self.session.get(url, timeout=self.scrape.timeout_seconds)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise FetchError(url, str(exc)) from exc
        return resp.text
