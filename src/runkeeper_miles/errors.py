from __future__ import annotations


class RunkeeperError(Exception):
    """Base class for failures raised while scraping Runkeeper pages."""


class FetchError(RunkeeperError, RuntimeError):
    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason


class ActivityDateError(RunkeeperError, ValueError):
    def __init__(self, path: str, text: str | None) -> None:
        super().__init__(f"Cannot parse start date {text!r} for activity {path}")
        self.path = path
        self.text = text


class ActivityIdError(RunkeeperError, LookupError):
    def __init__(self, path: str) -> None:
        super().__init__(f"No activity id in path {path!r}")
        self.path = path
