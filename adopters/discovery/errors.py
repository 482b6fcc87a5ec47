"""Exception taxonomy shared by the provider client, invoker, and crawler."""

from __future__ import annotations

from typing import Optional


class GitHubAPIError(RuntimeError):
    """A provider call failed for a reason that retrying will not fix."""

    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class RateLimited(GitHubAPIError):
    """Primary quota exhausted; calls may resume at ``reset_at`` (epoch seconds)."""

    def __init__(self, reset_at: float, url: Optional[str] = None, status_code: int = 403) -> None:
        super().__init__(f"rate limit exhausted until {int(reset_at)}", status_code=status_code, url=url)
        self.reset_at = float(reset_at)


class Throttled(GitHubAPIError):
    """Secondary (abuse detection) limit; retry after ``retry_after`` seconds."""

    def __init__(self, retry_after: float, url: Optional[str] = None, status_code: int = 403) -> None:
        super().__init__(f"secondary rate limit, retry after {retry_after}s", status_code=status_code, url=url)
        self.retry_after = float(retry_after)


class CrawlError(RuntimeError):
    """A search page could not be fetched; the run cannot continue."""


class ExportError(RuntimeError):
    """The CSV or a chart could not be written."""


__all__ = ["GitHubAPIError", "RateLimited", "Throttled", "CrawlError", "ExportError"]
