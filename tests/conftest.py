from datetime import date
from pathlib import Path

import pytest

from runkeeper_miles.errors import FetchError
from runkeeper_miles.ingest.runkeeper.parse import MarkupInterpreter
from runkeeper_miles.ingest.runkeeper.source import ActivityPageSource
from runkeeper_miles.util.cache import PageCache

FIXTURES = Path(__file__).parent / "fixtures"
BASE_URL = "http://runkeeper.test"


def load(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


def listing_url(user: str) -> str:
    return f"{BASE_URL}/user/{user}/activitylist"


def listing_html(paths: list[str], name: str = "Test Runner") -> str:
    items = "\n".join(f'<li class="menuItem" link="{path}">{path}</li>' for path in paths)
    return f"""
    <html><body>
      <div class="username"><a class="usernameLinkNoSpace">{name}</a></div>
      <ul id="activityHistoryMenu">{items}</ul>
    </body></html>
    """


def detail_html(date_text: str | None, distance: str) -> str:
    date_block = ""
    if date_text is not None:
        date_block = f'<div id="activityDateText"><span class="secondary">{date_text}</span></div>'
    return f"""
    <html><body>
      {date_block}
      <div id="statsDistance"><span class="mainText">{distance}</span></div>
    </body></html>
    """


class FakeFetcher:
    def __init__(self, pages: dict[str, str]) -> None:
        self.pages = pages
        self.calls: list[str] = []

    def fetch(self, url: str) -> str:
        self.calls.append(url)
        if url not in self.pages:
            raise FetchError(url, "404 Client Error: Not Found")
        return self.pages[url]


class FakeClock:
    def __init__(self, today: date) -> None:
        self.today = today

    def __call__(self) -> date:
        return self.today


def alice_pages() -> dict[str, str]:
    pages = {listing_url("alice"): load("activitylist_alice.html")}
    for number in ("101", "102", "103"):
        pages[f"{BASE_URL}/user/alice/activity/{number}"] = load(f"activity_{number}.html")
    return pages


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(date(2024, 3, 20))


@pytest.fixture
def make_source(tmp_path, clock):
    def _make(pages: dict[str, str]) -> tuple[ActivityPageSource, FakeFetcher]:
        fetcher = FakeFetcher(pages)
        source = ActivityPageSource(
            BASE_URL,
            PageCache(tmp_path / "cache", clock),
            fetcher,
            MarkupInterpreter(),
        )
        return source, fetcher

    return _make
