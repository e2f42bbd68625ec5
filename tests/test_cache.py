from datetime import date

import pytest

from runkeeper_miles.util.cache import PageCache, activity_key, date_stamp, listing_key

from conftest import FakeClock


def test_key_families() -> None:
    assert date_stamp(date(2024, 3, 5)) == "20240305"
    assert listing_key("alice", date(2024, 3, 5)) == "runkeeper.alice.activities.20240305.xml"
    assert activity_key("101") == "runkeeper.activity.101.xml"


def test_round_trip_same_day(tmp_path) -> None:
    clock = FakeClock(date(2024, 3, 20))
    cache = PageCache(tmp_path, clock)
    key = listing_key("alice", cache.today())
    content = "<html><body>café – 5 mi</body></html>\n"

    assert cache.read(key) is None
    cache.write(key, content)
    assert cache.read(key) == content
    assert cache.path_for(key).read_bytes() == content.encode("utf-8")


def test_listing_miss_on_next_day(tmp_path) -> None:
    clock = FakeClock(date(2024, 3, 20))
    cache = PageCache(tmp_path, clock)
    cache.write(listing_key("alice", cache.today()), "yesterday")

    clock.today = date(2024, 3, 21)
    assert cache.read(listing_key("alice", cache.today())) is None
    # The stale file stays on disk.
    assert cache.path_for(listing_key("alice", date(2024, 3, 20))).exists()


def test_write_creates_directories(tmp_path) -> None:
    cache = PageCache(tmp_path / "nested" / "cache")
    cache.write("runkeeper.activity.7.xml", "page")
    assert (tmp_path / "nested" / "cache" / "runkeeper.activity.7.xml").read_text(encoding="utf-8") == "page"


def test_write_replaces_without_leftovers(tmp_path) -> None:
    cache = PageCache(tmp_path)
    cache.write("runkeeper.activity.7.xml", "first")
    cache.write("runkeeper.activity.7.xml", "second")
    assert cache.read("runkeeper.activity.7.xml") == "second"
    assert [p.name for p in tmp_path.iterdir()] == ["runkeeper.activity.7.xml"]


def test_write_failure_propagates(tmp_path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x", encoding="utf-8")
    cache = PageCache(blocker)
    with pytest.raises(OSError):
        cache.write("runkeeper.activity.7.xml", "page")
