"""Turn one code-search hit into a complete repository record."""

from __future__ import annotations

import datetime as dt
import logging
from typing import Iterable, Optional

from .config import EXCLUDED_PATH_MARKERS
from .http_client import GitHubClient
from .invoker import RateLimitInvoker
from .models import RepositoryRecord, SearchHit

logger = logging.getLogger(__name__)


def parse_github_timestamp(raw: Optional[str]) -> Optional[dt.datetime]:
    """Parse GitHub's ISO-8601 timestamps (``...Z``) into aware datetimes."""
    if not raw:
        return None
    try:
        return dt.datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None


class RepositoryResolver:
    """Resolve hits through three provider calls: repo, commits, commit detail.

    ``resolve`` returns ``None`` for hits that are skipped on purpose
    (excluded location, no commit history) and lets :class:`GitHubAPIError`
    escape for calls that failed; the caller decides what a failure means.
    """

    def __init__(
        self,
        client: GitHubClient,
        invoker: RateLimitInvoker,
        excluded_markers: Iterable[str] = EXCLUDED_PATH_MARKERS,
    ) -> None:
        self.client = client
        self.invoker = invoker
        self.excluded_markers = tuple(excluded_markers)

    def is_excluded(self, path: str) -> bool:
        return any(marker in path for marker in self.excluded_markers)

    def resolve(self, hit: SearchHit) -> Optional[RepositoryRecord]:
        repo = self.invoker.invoke(lambda: self.client.get_repository(hit.owner, hit.name))
        identity = repo.get("full_name") or hit.identity
        owner = (repo.get("owner") or {}).get("login") or hit.owner
        name = repo.get("name") or hit.name

        if self.is_excluded(hit.path):
            logger.debug("%s: skipping excluded location %s", identity, hit.path)
            return None

        commits = self.invoker.invoke(lambda: self.client.list_commits(owner, name, hit.path))
        if not commits:
            logger.debug("%s: no commits found for %s", identity, hit.path)
            return None
        # newest first; the tail is the oldest commit GitHub returned
        sha = commits[-1].get("sha")
        if not sha:
            return None

        detail = self.invoker.invoke(lambda: self.client.get_commit(owner, name, sha))
        committer = detail.get("committer")
        adopted = parse_github_timestamp(committer.get("date") if isinstance(committer, dict) else None)
        if adopted is None:
            logger.debug("%s: commit %s has no committer date", identity, sha)
            return None

        return RepositoryRecord(
            identity=identity,
            star_count=int(repo.get("stargazers_count") or 0),
            adoption_date=adopted,
        )


__all__ = ["RepositoryResolver", "parse_github_timestamp"]
