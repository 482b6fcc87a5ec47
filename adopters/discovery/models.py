"""Value objects passed between the crawler, resolver, and exporters."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class SearchHit:
    """One file match returned by a code-search page."""

    owner: str
    name: str
    path: str

    @property
    def identity(self) -> str:
        return f"{self.owner}/{self.name}"

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "SearchHit":
        repo = item.get("repository") or {}
        owner = (repo.get("owner") or {}).get("login") or ""
        name = repo.get("name") or ""
        if not (owner and name) and "/" in (repo.get("full_name") or ""):
            owner, name = repo["full_name"].split("/", 1)
        return cls(owner=owner, name=name, path=item.get("path") or "")


@dataclass(frozen=True)
class SearchPage:
    hits: List[SearchHit] = field(default_factory=list)
    next_page: Optional[int] = None
    total_count: int = 0


@dataclass(frozen=True)
class RepositoryRecord:
    """Immutable output row: who adopted the tool, how popular, and since when."""

    identity: str
    star_count: int
    adoption_date: datetime


__all__ = ["SearchHit", "SearchPage", "RepositoryRecord"]
