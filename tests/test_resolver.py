"""Tests for adopters.discovery.resolver covering the resolve steps and silent drops.

Run with:
    pytest tests/test_resolver.py --maxfail=1 -v --cov=adopters.discovery.resolver --cov-report=term-missing
"""

import datetime as dt
from unittest.mock import MagicMock

import pytest

from adopters.discovery.errors import GitHubAPIError, RateLimited
from adopters.discovery.invoker import RateLimitInvoker
from adopters.discovery.resolver import RepositoryResolver, parse_github_timestamp

from fakes import FakeGitHub, hit


def _resolver(client, **kwargs):
    return RepositoryResolver(client, RateLimitInvoker(sleep=lambda _: None), **kwargs)


def test_parse_github_timestamp():
    parsed = parse_github_timestamp("2019-05-01T10:00:00Z")
    assert parsed == dt.datetime(2019, 5, 1, 10, tzinfo=dt.timezone.utc)
    assert parse_github_timestamp(None) is None
    assert parse_github_timestamp("not a date") is None


def test_resolve_uses_oldest_commit_and_star_count():
    client = FakeGitHub(repos={"o/r": 120}, commits={"o/r": ["new", "old"]})
    record = _resolver(client).resolve(hit("o/r"))
    assert record.identity == "o/r"
    assert record.star_count == 120
    assert record.adoption_date == dt.datetime(2020, 1, 1, tzinfo=dt.timezone.utc)


def test_empty_commit_list_is_dropped_without_error():
    client = FakeGitHub(repos={"o/r": 5}, commits={"o/r": []})
    assert _resolver(client).resolve(hit("o/r")) is None


def test_excluded_location_is_dropped_before_listing_commits():
    client = FakeGitHub(repos={"o/r": 5})
    record = _resolver(client).resolve(hit("o/r", path="vendor/github.com/x/.goreleaser.yml"))
    assert record is None
    assert client.repo_calls == ["o/r"]
    assert client.commit_calls == []


def test_custom_excluded_markers():
    client = FakeGitHub()
    resolver = _resolver(client, excluded_markers=["third_party"])
    assert resolver.is_excluded("third_party/a.yml")
    assert not resolver.is_excluded("vendor/a.yml")


def test_repository_failure_propagates():
    client = FakeGitHub(failing={"o/gone"})
    with pytest.raises(GitHubAPIError):
        _resolver(client).resolve(hit("o/gone"))


def test_missing_committer_date_is_dropped():
    client = MagicMock()
    client.get_repository.return_value = {"full_name": "o/r", "stargazers_count": 1}
    client.list_commits.return_value = [{"sha": "abc"}]
    client.get_commit.return_value = {"sha": "abc", "committer": {}}
    assert _resolver(client).resolve(hit("o/r")) is None


def test_rate_limited_step_is_retried_through_invoker():
    client = MagicMock()
    client.get_repository.return_value = {"full_name": "o/r", "stargazers_count": 3}
    client.list_commits.side_effect = [RateLimited(reset_at=0), [{"sha": "abc"}]]
    client.get_commit.return_value = {"committer": {"date": "2021-02-03T04:05:06Z"}}
    record = _resolver(client).resolve(hit("o/r"))
    assert record.star_count == 3
    assert client.list_commits.call_count == 2


def test_non_mapping_committer_is_dropped():
    client = MagicMock()
    client.get_repository.return_value = {"full_name": "o/r", "stargazers_count": 1}
    client.list_commits.return_value = [{"sha": "abc"}]
    client.get_commit.return_value = {"sha": "abc", "committer": "someone"}
    assert _resolver(client).resolve(hit("o/r")) is None
