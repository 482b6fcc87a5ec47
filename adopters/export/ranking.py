"""The two orderings consumed by the exporters."""

from __future__ import annotations

from typing import Iterable, List

from adopters.discovery.models import RepositoryRecord


def rank_by_stars(records: Iterable[RepositoryRecord]) -> List[RepositoryRecord]:
    """Most starred first; ties broken by identity so output is stable."""
    return sorted(records, key=lambda record: (-record.star_count, record.identity))


def order_by_adoption(records: Iterable[RepositoryRecord]) -> List[RepositoryRecord]:
    return sorted(records, key=lambda record: (record.adoption_date, record.identity))


__all__ = ["rank_by_stars", "order_by_adoption"]
