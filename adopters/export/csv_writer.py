"""Date-stamped CSV export of the ranked repository list."""

from __future__ import annotations

import csv
import datetime as dt
import logging
import os
from pathlib import Path
from typing import Iterable, Optional

from adopters.discovery.models import RepositoryRecord

logger = logging.getLogger(__name__)


def csv_path_for(data_dir: str | Path, today: Optional[dt.date] = None) -> Path:
    """Return ``<data_dir>/<YYYYMMDD>.csv`` for the given (or current) day."""
    today = today or dt.date.today()
    return Path(data_dir) / f"{today.strftime('%Y%m%d')}.csv"


def write_csv(
    records: Iterable[RepositoryRecord],
    path: str | Path,
    include_adoption_date: bool = False,
) -> int:
    """Write rows in the order given, truncating any existing file.

    Returns the number of data rows written. Errors propagate to the caller.
    """
    path = Path(path)
    os.makedirs(path.parent, exist_ok=True)
    header = ["repo", "stars"]
    if include_adoption_date:
        header.append("adopted_at")

    count = 0
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle, lineterminator="\n")
        writer.writerow(header)
        for record in records:
            row = [record.identity, record.star_count]
            if include_adoption_date:
                row.append(record.adoption_date.isoformat())
            writer.writerow(row)
            count += 1
    logger.info("wrote %d rows to %s", count, path)
    return count


__all__ = ["csv_path_for", "write_csv"]
