"""Runtime settings for one discovery run, resolved from CLI flags."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from adopters.discovery import config as discovery_config


@dataclass(frozen=True)
class PipelineSettings:
    """Resolved runtime settings for the discovery pipeline."""

    search_terms: Tuple[str, ...]
    per_page: int
    data_dir: Path
    chart_dir: Path
    tool_name: str
    include_dates: bool
    verbose: bool


def build_arg_parser() -> argparse.ArgumentParser:
    """Return the CLI parser used by the pipeline entry point."""

    parser = argparse.ArgumentParser(
        description="Find repositories using a build tool's config file and chart adoption.",
    )
    parser.add_argument(
        "--term",
        dest="terms",
        action="append",
        help="filename to search for; repeat for several (default: %s)"
        % ", ".join(discovery_config.SEARCH_TERMS),
    )
    parser.add_argument("--per-page", type=int, default=discovery_config.SEARCH_PER_PAGE)
    parser.add_argument("--data-dir", default=discovery_config.DATA_DIR)
    parser.add_argument("--chart-dir", default=discovery_config.CHART_DIR)
    parser.add_argument("--tool-name", default=discovery_config.TOOL_NAME)
    parser.add_argument("--include-dates", action="store_true", help="add an adopted_at CSV column")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments; accepts argv overrides for testing."""

    return build_arg_parser().parse_args(argv)


def resolve_settings(args: Optional[argparse.Namespace] = None) -> PipelineSettings:
    """Return immutable settings, falling back to module defaults."""

    args = args or parse_args([])
    terms = tuple(args.terms) if args.terms else tuple(discovery_config.SEARCH_TERMS)
    return PipelineSettings(
        search_terms=terms,
        per_page=max(1, min(int(args.per_page), 100)),
        data_dir=Path(args.data_dir),
        chart_dir=Path(args.chart_dir),
        tool_name=args.tool_name,
        include_dates=bool(args.include_dates),
        verbose=bool(args.verbose),
    )


__all__ = ["PipelineSettings", "build_arg_parser", "parse_args", "resolve_settings"]
