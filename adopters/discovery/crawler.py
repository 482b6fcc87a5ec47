"""Drive code-search pagination and fan out per-hit resolution."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Iterable, List, Optional

from .config import SEARCH_PER_PAGE, SEARCH_QUERY_TEMPLATE, SEARCH_TERMS
from .errors import CrawlError, GitHubAPIError
from .http_client import GitHubClient
from .invoker import RateLimitInvoker
from .models import SearchHit
from .resolver import RepositoryResolver
from .result_set import DeduplicatingResultSet

logger = logging.getLogger(__name__)


class SearchCrawler:
    """Walk every search term page by page, resolving each page's hits concurrently.

    Terms and pages are strictly sequential because GitHub's page cursors are
    per query; only the hits of one page run in parallel, and all of them
    finish before the next page is requested.
    """

    def __init__(
        self,
        client: GitHubClient,
        resolver: RepositoryResolver,
        invoker: RateLimitInvoker,
        result_set: Optional[DeduplicatingResultSet] = None,
        search_terms: Iterable[str] = SEARCH_TERMS,
        per_page: int = SEARCH_PER_PAGE,
        query_template: str = SEARCH_QUERY_TEMPLATE,
    ) -> None:
        self.client = client
        self.resolver = resolver
        self.invoker = invoker
        self.result_set = result_set if result_set is not None else DeduplicatingResultSet()
        self.search_terms = list(search_terms)
        self.per_page = per_page
        self.query_template = query_template

    def query_for(self, term: str) -> str:
        return self.query_template.format(term=term)

    def crawl(self) -> DeduplicatingResultSet:
        for term in self.search_terms:
            self.crawl_term(term)
        return self.result_set

    def crawl_term(self, term: str) -> int:
        """Exhaust one term's pages; return how many new repositories it added."""
        query = self.query_for(term)
        logger.info("looking for repos with a %s file...", term)
        added = 0
        page: Optional[int] = 1
        while page is not None:
            current = page
            try:
                result = self.invoker.invoke(
                    lambda: self.client.search_code(query, page=current, per_page=self.per_page)
                )
            except GitHubAPIError as exc:
                raise CrawlError(f"search for {query!r} failed on page {current}: {exc}") from exc

            logger.info("found %d results on page %d", len(result.hits), current)
            added += self._resolve_page(result.hits)
            page = result.next_page
        return added

    def _resolve_page(self, hits: List[SearchHit]) -> int:
        if not hits:
            return 0
        with ThreadPoolExecutor(max_workers=len(hits)) as pool:
            futures = [pool.submit(self._resolve_hit, hit) for hit in hits]
            wait(futures)
        return sum(1 for future in futures if future.result())

    def _resolve_hit(self, hit: SearchHit) -> bool:
        identity = hit.identity
        if identity in self.result_set:
            logger.warning("%s: already exists", identity)
            return False
        try:
            record = self.resolver.resolve(hit)
        except GitHubAPIError as exc:
            logger.warning("%s: failed to get repo details, discard: %s", identity, exc)
            return False
        if record is None:
            return False
        if not self.result_set.try_insert(record):
            logger.debug("%s: resolved concurrently by another hit, discard", record.identity)
            return False
        return True


__all__ = ["SearchCrawler"]
