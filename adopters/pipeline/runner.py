"""Entry point wiring the GitHub client, crawler, and exporters."""

from __future__ import annotations

import logging
import sys
from typing import List, Optional

from adopters.discovery import config as discovery_config
from adopters.discovery.crawler import SearchCrawler
from adopters.discovery.errors import CrawlError, ExportError
from adopters.discovery.http_client import GitHubClient
from adopters.discovery.invoker import RateLimitInvoker
from adopters.discovery.models import RepositoryRecord
from adopters.discovery.resolver import RepositoryResolver
from adopters.export.charts import render_adoption_chart, render_top_stars_chart
from adopters.export.csv_writer import csv_path_for, write_csv
from adopters.export.ranking import rank_by_stars

from .config import PipelineSettings, parse_args, resolve_settings

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_crawler(settings: PipelineSettings, token: Optional[str]) -> SearchCrawler:
    if not token:
        logger.warning("GITHUB_TOKEN not found. Using unauthenticated requests (code search will refuse them).")
    client = GitHubClient(token=token)
    invoker = RateLimitInvoker()
    resolver = RepositoryResolver(client, invoker)
    return SearchCrawler(
        client,
        resolver,
        invoker,
        search_terms=settings.search_terms,
        per_page=settings.per_page,
    )


def export(records: List[RepositoryRecord], settings: PipelineSettings) -> None:
    """Write the CSV and both charts; any failure propagates."""
    csv_path = csv_path_for(settings.data_dir)
    write_csv(rank_by_stars(records), csv_path, include_adoption_date=settings.include_dates)
    render_adoption_chart(records, settings.chart_dir / discovery_config.ADOPTION_CHART_FILENAME, settings.tool_name)
    render_top_stars_chart(records, settings.chart_dir / discovery_config.STARS_CHART_FILENAME, settings.tool_name)


def run(settings: PipelineSettings, token: Optional[str] = None) -> List[RepositoryRecord]:
    """Crawl every search term and export the results; returns the snapshot."""
    logger.info("starting up...")
    crawler = build_crawler(settings, token)
    records = crawler.crawl().snapshot()
    logger.info("THERE ARE %d REPOSITORIES USING %s", len(records), settings.tool_name.upper())
    try:
        export(records, settings)
    except (OSError, ValueError) as exc:
        raise ExportError(f"failed to write outputs: {exc}") from exc
    return records


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point; exits with status 1 on any unrecoverable error."""
    settings = resolve_settings(parse_args(argv))
    configure_logging(settings.verbose)
    try:
        run(settings, token=discovery_config.GITHUB_TOKEN)
    except CrawlError:
        logger.exception("failed to gather results")
        sys.exit(1)
    except ExportError:
        logger.exception("failed to write outputs")
        sys.exit(1)


__all__ = ["main", "run", "export", "build_crawler", "configure_logging"]
