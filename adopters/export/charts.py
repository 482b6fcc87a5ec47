"""PNG charts summarizing who adopted the tool and how adoption grew."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from matplotlib.figure import Figure

from adopters.discovery.models import RepositoryRecord

from .ranking import order_by_adoption, rank_by_stars

logger = logging.getLogger(__name__)


def _save(fig: Figure, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, format="png")
    logger.info("rendered %s", path)
    return path


def render_top_stars_chart(
    records: Iterable[RepositoryRecord],
    path: str | Path,
    tool_name: str,
    limit: int = 5,
) -> Path:
    """Bar chart of the ``limit`` most starred repositories."""
    top = rank_by_stars(records)[:limit]
    fig = Figure(figsize=(10, 6), tight_layout=True)
    ax = fig.add_subplot()
    ax.bar([record.identity for record in top], [record.star_count for record in top])
    ax.set_title(f"Top {limit} repositories using {tool_name} by number of stargazers")
    ax.set_ylabel("Stars")
    ax.tick_params(axis="x", labelrotation=20)
    return _save(fig, path)


def render_adoption_chart(records: Iterable[RepositoryRecord], path: str | Path, tool_name: str) -> Path:
    """Cumulative number of adopting repositories over adoption date."""
    ordered = order_by_adoption(records)
    fig = Figure(figsize=(10, 6), tight_layout=True)
    ax = fig.add_subplot()
    ax.plot(
        [record.adoption_date for record in ordered],
        list(range(1, len(ordered) + 1)),
    )
    ax.set_title(f"Number of repositories using {tool_name} over time")
    ax.set_xlabel("Time")
    ax.set_ylabel("Repositories")
    return _save(fig, path)


__all__ = ["render_top_stars_chart", "render_adoption_chart"]
