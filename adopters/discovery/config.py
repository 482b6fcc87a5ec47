"""Central configuration constants for the discovery workflow."""

from __future__ import annotations

import os
from typing import List, Optional

from adopters.secrets import github_token_from_secrets, load_local_secrets


def _csv_env(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


_SECRETS = load_local_secrets()
GITHUB_TOKEN: Optional[str] = os.getenv("GITHUB_TOKEN") or github_token_from_secrets(_SECRETS)
USER_AGENT = "build-tool-adopters/0.1"
BASE_URL = "https://api.github.com"
SEARCH_PER_PAGE = int(os.getenv("SEARCH_PER_PAGE", "10"))
COMMITS_PER_PAGE = int(os.getenv("COMMITS_PER_PAGE", "100"))
REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", "90"))
MAX_RETRIES = int(os.getenv("MAX_RETRIES", "6"))
BACKOFF_BASE_SEC = 2
SECONDARY_RATE_LIMIT_WAIT_SEC = int(os.getenv("SECONDARY_RATE_LIMIT_WAIT_SEC", "60"))

TOOL_NAME = os.getenv("TOOL_NAME", "GoReleaser")
SEARCH_TERMS = _csv_env("SEARCH_TERMS", "goreleaser.yml,goreleaser.yaml")
SEARCH_QUERY_TEMPLATE = os.getenv("SEARCH_QUERY_TEMPLATE", "filename:{term} language:yaml")
EXCLUDED_PATH_MARKERS = _csv_env("EXCLUDED_PATH_MARKERS", "vendor")

DATA_DIR = os.getenv("DATA_DIR", "data")
CHART_DIR = os.getenv("CHART_DIR", ".")
STARS_CHART_FILENAME = "stars.png"
ADOPTION_CHART_FILENAME = "repos.png"

__all__ = [
    "GITHUB_TOKEN",
    "USER_AGENT",
    "BASE_URL",
    "SEARCH_PER_PAGE",
    "COMMITS_PER_PAGE",
    "REQUEST_TIMEOUT",
    "MAX_RETRIES",
    "BACKOFF_BASE_SEC",
    "SECONDARY_RATE_LIMIT_WAIT_SEC",
    "TOOL_NAME",
    "SEARCH_TERMS",
    "SEARCH_QUERY_TEMPLATE",
    "EXCLUDED_PATH_MARKERS",
    "DATA_DIR",
    "CHART_DIR",
    "STARS_CHART_FILENAME",
    "ADOPTION_CHART_FILENAME",
]
