"""Code-search discovery: rate-limit aware calls, resolution, and dedup."""

from .crawler import SearchCrawler
from .errors import CrawlError, ExportError, GitHubAPIError, RateLimited, Throttled
from .http_client import GitHubClient
from .invoker import RateLimitInvoker, RetryPolicy
from .models import RepositoryRecord, SearchHit, SearchPage
from .resolver import RepositoryResolver
from .result_set import DeduplicatingResultSet

__all__ = [
    "SearchCrawler",
    "CrawlError",
    "ExportError",
    "GitHubAPIError",
    "RateLimited",
    "Throttled",
    "GitHubClient",
    "RateLimitInvoker",
    "RetryPolicy",
    "RepositoryRecord",
    "SearchHit",
    "SearchPage",
    "RepositoryResolver",
    "DeduplicatingResultSet",
]
