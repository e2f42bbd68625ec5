from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
import os
from pathlib import Path
import tempfile

Clock = Callable[[], date]


@dataclass(frozen=True)
class CacheEntry:
    path: Path

    def exists(self) -> bool:
        return self.path.exists()

    def read_text(self) -> str:
        return self.path.read_text(encoding="utf-8")

    def write_text(self, content: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(content)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class FileCache:
    def __init__(self, base_dir: Path) -> None:
        self.base_dir = base_dir

    def entry(self, *parts: str) -> CacheEntry:
        return CacheEntry(self.base_dir.joinpath(*parts))


def date_stamp(day: date) -> str:
    return day.strftime("%Y%m%d")


def listing_key(user: str, day: date) -> str:
    return f"runkeeper.{user}.activities.{date_stamp(day)}.xml"


def activity_key(activity_id: str) -> str:
    # Detail pages carry no date stamp, so they never expire.
    return f"runkeeper.activity.{activity_id}.xml"


class PageCache:
    """Raw page contents on disk, one flat file per key.

    Listing pages expire daily because their key embeds today's date; files
    from earlier days are left in place and never read again.
    """

    def __init__(self, base_dir: Path, clock: Clock = date.today) -> None:
        self.files = FileCache(base_dir)
        self.clock = clock

    def today(self) -> date:
        return self.clock()

    def path_for(self, key: str) -> Path:
        return self.files.entry(key).path

    def read(self, key: str) -> str | None:
        entry = self.files.entry(key)
        if not entry.exists():
            return None
        return entry.read_text()

    def write(self, key: str, content: str) -> None:
        self.files.entry(key).write_text(content)
