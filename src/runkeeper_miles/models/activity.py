from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from functools import cached_property
import re
from typing import TYPE_CHECKING

from dateutil import parser as date_parser

from runkeeper_miles.errors import ActivityDateError
from runkeeper_miles.ingest.runkeeper.parse import DetailPage, ListingPage, activity_number

if TYPE_CHECKING:
    from runkeeper_miles.ingest.runkeeper.source import ActivityPageSource

# Leading number of a string, the rest is ignored: "3.1 mi" -> 3.1
LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")

# Two fill-ins that disagree on year, month and day; an incomplete date
# parses differently against each.
DATE_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


class Activity:
    """One logged session, resolved lazily from its detail page.

    The detail page is fetched on the first access to ``miles`` or
    ``started_at`` and kept for the life of the instance; each value is parsed
    once and then stored.
    """

    def __init__(self, path: str, source: ActivityPageSource) -> None:
        self.path = path
        self._source = source
        self._detail: DetailPage | None = None

    def __repr__(self) -> str:
        state = "resolved" if self.is_resolved else "unresolved"
        return f"Activity(path={self.path!r}, {state})"

    @property
    def is_resolved(self) -> bool:
        return self._detail is not None

    def resolve(self) -> DetailPage:
        if self._detail is None:
            self._detail = self._source.get_detail_page(self.path)
        return self._detail

    @property
    def number(self) -> str:
        return activity_number(self.path)

    @cached_property
    def miles(self) -> float:
        return parse_miles(self.resolve().distance_text)

    @cached_property
    def started_at(self) -> datetime:
        return parse_started_at(self.path, self.resolve().date_text)


@dataclass(frozen=True)
class User:
    name: str
    activities: tuple[Activity, ...]

    @classmethod
    def from_listing(cls, listing: ListingPage, source: ActivityPageSource) -> User:
        return cls(
            name=listing.name,
            activities=tuple(Activity(path, source) for path in listing.activity_paths),
        )


def parse_miles(text: str | None) -> float:
    if not text:
        return 0.0
    match = LEADING_FLOAT.match(text)
    if not match:
        return 0.0
    return float(match.group(1))


def parse_started_at(path: str, text: str | None) -> datetime:
    """Parse the part of the activity date line before the first dash.

    The page shows e.g. ``Fri Mar 15 07:12:00 EDT 2024 - Running``; timezone
    names are dropped, so the result is the naive wall-clock time. The year,
    month and day must all be on the page; nothing is filled in from today.
    """
    if text is None:
        raise ActivityDateError(path, text)
    head = text.split("-", 1)[0].strip()
    if not head:
        raise ActivityDateError(path, text)
    try:
        parsed = date_parser.parse(head, ignoretz=True, default=DATE_DEFAULTS[0])
        check = date_parser.parse(head, ignoretz=True, default=DATE_DEFAULTS[1])
    except (ValueError, OverflowError) as exc:
        raise ActivityDateError(path, text) from exc
    if parsed.date() != check.date():
        raise ActivityDateError(path, text)
    return parsed
