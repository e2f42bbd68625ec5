from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Protocol

from bs4 import BeautifulSoup

from runkeeper_miles.errors import ActivityIdError

ACTIVITY_ID_PATTERN = re.compile(r"\d+")


@dataclass(frozen=True)
class ListingPage:
    name: str
    activity_paths: tuple[str, ...]


@dataclass(frozen=True)
class DetailPage:
    distance_text: str
    date_text: str | None


class PageInterpreter(Protocol):
    def listing(self, raw: str) -> ListingPage: ...

    def detail(self, raw: str) -> DetailPage: ...


class MarkupInterpreter:
    """Reads the Runkeeper activity list and activity pages.

    Cached and freshly downloaded markup go through the same lenient HTML
    parser.
    """

    def listing(self, raw: str) -> ListingPage:
        soup = _soup(raw)
        return ListingPage(name=parse_user_name(soup), activity_paths=parse_activity_paths(soup))

    def detail(self, raw: str) -> DetailPage:
        soup = _soup(raw)
        return DetailPage(distance_text=parse_distance_text(soup), date_text=parse_date_text(soup))


def _soup(raw: str) -> BeautifulSoup:
    return BeautifulSoup(raw, "lxml")


def parse_user_name(soup: BeautifulSoup) -> str:
    return _joined_text(soup, ".username .usernameLinkNoSpace")


def parse_activity_paths(soup: BeautifulSoup) -> tuple[str, ...]:
    paths: list[str] = []
    for item in soup.select("#activityHistoryMenu .menuItem"):
        link = item.get("link")
        if link:
            paths.append(link)
    return tuple(paths)


def parse_distance_text(soup: BeautifulSoup) -> str:
    return _joined_text(soup, "#statsDistance .mainText")


def parse_date_text(soup: BeautifulSoup) -> str | None:
    node = soup.select_one("#activityDateText .secondary")
    if node is None:
        return None
    return node.get_text()


def _joined_text(soup: BeautifulSoup, selector: str) -> str:
    return "".join(node.get_text() for node in soup.select(selector)).strip()


def activity_number(path: str) -> str:
    """Last run of digits in an activity path, e.g. ``/user/run4fun/activity/77`` -> ``77``."""
    numbers = ACTIVITY_ID_PATTERN.findall(path)
    if not numbers:
        raise ActivityIdError(path)
    return numbers[-1]
