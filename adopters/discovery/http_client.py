"""REST client for the GitHub code-search and repository endpoints.

Transient failures (connection errors, timeouts, 5xx) are retried here with
exponential backoff and jitter. Rate limiting is *not* retried here: it is
surfaced as :class:`RateLimited` or :class:`Throttled` so the invoker can wait
for exactly as long as GitHub asks.
"""

from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qs, urlparse

import requests

from .config import (
    BACKOFF_BASE_SEC,
    BASE_URL,
    COMMITS_PER_PAGE,
    MAX_RETRIES,
    REQUEST_TIMEOUT,
    SECONDARY_RATE_LIMIT_WAIT_SEC,
    USER_AGENT,
)
from .errors import GitHubAPIError, RateLimited, Throttled
from .models import SearchHit, SearchPage

logger = logging.getLogger(__name__)

_SECONDARY_LIMIT_MARKERS = ("secondary rate limit", "abuse")


def sleep_with_jitter(base: float) -> None:
    """Pause execution with +/- 25% jitter to avoid synchronized retries."""
    jitter = base * 0.25 * (0.5 - (os.urandom(1)[0] / 255.0))
    time.sleep(max(0.0, base + jitter))


def error_message(resp: requests.Response) -> str:
    """Return GitHub's error message, falling back to a slice of the body."""
    try:
        body = resp.json()
    except ValueError:
        body = {"text": (resp.text or "")[:300]}
    if not isinstance(body, dict):
        return str(body)[:300]
    return str(body.get("message") or body.get("error") or body.get("text") or "")


def classify_error(resp: requests.Response, url: str) -> GitHubAPIError:
    """Map a non-2xx response onto the rate-limit aware exception taxonomy."""
    message = error_message(resp)
    if resp.status_code in (403, 429):
        headers = resp.headers or {}
        remaining = headers.get("X-RateLimit-Remaining")
        reset = headers.get("X-RateLimit-Reset")
        retry_after = headers.get("Retry-After")
        if remaining == "0" and reset and str(reset).isdigit():
            return RateLimited(reset_at=int(reset), url=url, status_code=resp.status_code)
        if retry_after and str(retry_after).isdigit():
            return Throttled(retry_after=int(retry_after), url=url, status_code=resp.status_code)
        if resp.status_code == 429 or any(marker in message.lower() for marker in _SECONDARY_LIMIT_MARKERS):
            return Throttled(retry_after=SECONDARY_RATE_LIMIT_WAIT_SEC, url=url, status_code=resp.status_code)
    return GitHubAPIError(f"HTTP {resp.status_code} for {url}: {message}", status_code=resp.status_code, url=url)


def next_page_from_links(resp: requests.Response) -> Optional[int]:
    """Read the page number of the ``rel="next"`` link, if GitHub sent one."""
    links = getattr(resp, "links", None) or {}
    next_url = (links.get("next") or {}).get("url")
    if not next_url:
        return None
    values = parse_qs(urlparse(next_url).query).get("page")
    if not values or not values[0].isdigit():
        return None
    return int(values[0])


def decode_json(resp: requests.Response, url: str, expected: type = dict) -> Any:
    """Decode a 2xx body, raising GitHubAPIError when it is not JSON of the expected shape."""
    try:
        data = resp.json()
    except ValueError as exc:
        raise GitHubAPIError(f"invalid JSON from {url}: {exc}", status_code=resp.status_code, url=url) from exc
    if not isinstance(data, expected):
        raise GitHubAPIError(
            f"unexpected {type(data).__name__} body from {url}, wanted {expected.__name__}",
            status_code=resp.status_code,
            url=url,
        )
    return data


class GitHubClient:
    """Thin wrapper around the GitHub REST API used by the discovery pipeline.

    A single instance is shared by every resolver thread; each call is
    independent and holds no per-call state on the client.
    """

    def __init__(
        self,
        token: Optional[str],
        base_url: str = BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: int = REQUEST_TIMEOUT,
        max_retries: int = MAX_RETRIES,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "User-Agent": USER_AGENT,
                "X-GitHub-Api-Version": "2022-11-28",
            }
        )
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def _url(self, path: str) -> str:
        path = path if path.startswith("/") else f"/{path}"
        return f"{self.base_url}{path}"

    def request(self, method: str, path: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        """Perform one logical REST call, retrying only transient failures."""
        url = self._url(path)
        last_error: Optional[GitHubAPIError] = None

        for attempt in range(1, self.max_retries + 1):
            delay = BACKOFF_BASE_SEC * (2 ** (attempt - 1))
            try:
                resp = self.session.request(method, url, params=params, timeout=self.timeout)
            except requests.RequestException as exc:
                last_error = GitHubAPIError(f"{method} {url} failed: {exc}", url=url)
                if attempt < self.max_retries:
                    logger.warning("[retry %d/%d] %s -> sleep %.1fs", attempt, self.max_retries, exc, delay)
                    sleep_with_jitter(delay)
                continue

            if 200 <= resp.status_code < 300:
                return resp

            if resp.status_code >= 500:
                last_error = classify_error(resp, url)
                if attempt < self.max_retries:
                    logger.warning(
                        "[retry %d/%d] HTTP %d for %s -> sleep %.1fs",
                        attempt, self.max_retries, resp.status_code, url, delay,
                    )
                    sleep_with_jitter(delay)
                continue

            raise classify_error(resp, url)

        raise last_error or GitHubAPIError(f"{method} {url} failed after retries", url=url)

    def get_json(self, path: str, params: Optional[Dict[str, Any]] = None, expected: type = dict) -> Any:
        """GET ``path`` and return its decoded body, which must be of type ``expected``."""
        return decode_json(self.request("GET", path, params=params), self._url(path), expected)

    def search_code(self, query: str, page: int = 1, per_page: int = 30) -> SearchPage:
        path = "/search/code"
        resp = self.request("GET", path, params={"q": query, "page": page, "per_page": per_page})
        data = decode_json(resp, self._url(path), dict)
        items = data.get("items") or []
        hits = [SearchHit.from_item(item) for item in items if isinstance(item, dict)]
        return SearchPage(
            hits=[hit for hit in hits if hit.owner and hit.name],
            next_page=next_page_from_links(resp),
            total_count=int(data.get("total_count") or 0),
        )

    def get_repository(self, owner: str, name: str) -> Dict[str, Any]:
        return self.get_json(f"/repos/{owner}/{name}")

    def list_commits(self, owner: str, name: str, path: str) -> List[Dict[str, Any]]:
        """Return commits touching ``path``, newest first, as GitHub lists them."""
        batch = self.get_json(
            f"/repos/{owner}/{name}/commits",
            params={"path": path, "per_page": COMMITS_PER_PAGE},
            expected=list,
        )
        return [commit for commit in batch if isinstance(commit, dict)]

    def get_commit(self, owner: str, name: str, sha: str) -> Dict[str, Any]:
        return self.get_json(f"/repos/{owner}/{name}/git/commits/{sha}")


__all__ = [
    "GitHubClient",
    "sleep_with_jitter",
    "error_message",
    "classify_error",
    "next_page_from_links",
    "decode_json",
]
