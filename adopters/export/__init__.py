"""Ranked CSV export and summary charts over the final repository list."""

from .charts import render_adoption_chart, render_top_stars_chart
from .csv_writer import csv_path_for, write_csv
from .ranking import order_by_adoption, rank_by_stars

__all__ = [
    "render_adoption_chart",
    "render_top_stars_chart",
    "csv_path_for",
    "write_csv",
    "order_by_adoption",
    "rank_by_stars",
]
