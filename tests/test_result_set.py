"""Tests for adopters.discovery.result_set exercising concurrent inserts.

Run with:
    pytest tests/test_result_set.py --maxfail=1 -v --cov=adopters.discovery.result_set --cov-report=term-missing
"""

import datetime as dt
import threading

from adopters.discovery.models import RepositoryRecord
from adopters.discovery.result_set import DeduplicatingResultSet

WHEN = dt.datetime(2020, 1, 1, tzinfo=dt.timezone.utc)


def _record(identity, stars=1):
    return RepositoryRecord(identity=identity, star_count=stars, adoption_date=WHEN)


def test_first_insert_wins():
    results = DeduplicatingResultSet()
    assert results.try_insert(_record("a/b", 10)) is True
    assert results.try_insert(_record("a/b", 99)) is False
    assert len(results) == 1
    assert "a/b" in results
    assert results.snapshot()[0].star_count == 10


def test_concurrent_duplicates_insert_exactly_once():
    results = DeduplicatingResultSet()
    identities = [f"owner/repo{i % 7}" for i in range(140)]
    barrier = threading.Barrier(len(identities))
    wins = []
    lock = threading.Lock()

    def worker(identity):
        barrier.wait()
        if results.try_insert(_record(identity)):
            with lock:
                wins.append(identity)

    threads = [threading.Thread(target=worker, args=(identity,)) for identity in identities]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(wins) == sorted(set(identities))
    assert len(results) == 7


def test_snapshot_is_a_copy():
    results = DeduplicatingResultSet()
    results.try_insert(_record("a/b"))
    snap = results.snapshot()
    results.try_insert(_record("c/d"))
    assert [record.identity for record in snap] == ["a/b"]
