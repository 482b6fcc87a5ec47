"""Tests for adopters.pipeline.runner ensuring wiring, outputs, and exit codes.

Run with:
    pytest tests/test_runner.py --maxfail=1 -v --cov=adopters.pipeline.runner --cov-report=term-missing
"""

import datetime as dt
import logging
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from adopters.discovery.errors import CrawlError, ExportError
from adopters.discovery.models import RepositoryRecord
from adopters.discovery.result_set import DeduplicatingResultSet
from adopters.pipeline import runner
from adopters.pipeline.config import PipelineSettings


def _settings(tmp_path):
    return PipelineSettings(
        search_terms=("a.yml",),
        per_page=10,
        data_dir=tmp_path / "data",
        chart_dir=tmp_path,
        tool_name="GoReleaser",
        include_dates=False,
        verbose=False,
    )


def _crawler_returning(*records):
    results = DeduplicatingResultSet()
    for record in records:
        results.try_insert(record)
    crawler = MagicMock()
    crawler.crawl.return_value = results
    return crawler


def test_build_crawler_wires_settings(tmp_path):
    crawler = runner.build_crawler(_settings(tmp_path), token="t")
    assert crawler.search_terms == ["a.yml"]
    assert crawler.per_page == 10
    assert crawler.client.session.headers["Authorization"] == "Bearer t"


def test_run_exports_ranked_csv_and_charts(tmp_path, caplog):
    when = dt.datetime(2020, 1, 1, tzinfo=dt.timezone.utc)
    crawler = _crawler_returning(RepositoryRecord("B", 50, when), RepositoryRecord("A", 100, when))
    with patch.object(runner, "build_crawler", return_value=crawler):
        with caplog.at_level(logging.INFO):
            records = runner.run(_settings(tmp_path), token="t")
    assert len(records) == 2
    assert "THERE ARE 2 REPOSITORIES USING GORELEASER" in caplog.text
    csv_files = list((tmp_path / "data").glob("*.csv"))
    assert len(csv_files) == 1
    assert csv_files[0].read_text(encoding="utf-8").splitlines() == ["repo,stars", "A,100", "B,50"]
    assert (tmp_path / "stars.png").exists()
    assert (tmp_path / "repos.png").exists()


def test_main_exits_on_crawl_error(monkeypatch):
    def boom(settings, token=None):
        raise CrawlError("search broken")

    monkeypatch.setattr(runner, "run", boom)
    monkeypatch.setattr(runner, "configure_logging", lambda verbose=False: None)
    with pytest.raises(SystemExit) as excinfo:
        runner.main([])
    assert excinfo.value.code == 1


def test_main_exits_on_export_failure(monkeypatch):
    def boom(settings, token=None):
        raise ExportError("read-only")

    monkeypatch.setattr(runner, "run", boom)
    monkeypatch.setattr(runner, "configure_logging", lambda verbose=False: None)
    with pytest.raises(SystemExit) as excinfo:
        runner.main(["--term", "x.yml"])
    assert excinfo.value.code == 1


def test_main_passes_resolved_settings(monkeypatch):
    seen = {}
    monkeypatch.setattr(runner, "run", lambda settings, token=None: seen.setdefault("settings", settings))
    monkeypatch.setattr(runner, "configure_logging", lambda verbose=False: None)
    runner.main(["--term", "x.yml", "--data-dir", "out"])
    assert seen["settings"].search_terms == ("x.yml",)
    assert seen["settings"].data_dir == Path("out")


def test_run_wraps_output_failures_only(tmp_path):
    when = dt.datetime(2020, 1, 1, tzinfo=dt.timezone.utc)
    crawler = _crawler_returning(RepositoryRecord("A", 1, when))
    with patch.object(runner, "build_crawler", return_value=crawler):
        with patch.object(runner, "export", side_effect=PermissionError("read-only")):
            with pytest.raises(ExportError) as excinfo:
                runner.run(_settings(tmp_path), token="t")
    assert isinstance(excinfo.value.__cause__, PermissionError)

    failing = MagicMock()
    failing.crawl.side_effect = ValueError("bad page")
    with patch.object(runner, "build_crawler", return_value=failing):
        with pytest.raises(ValueError):
            runner.run(_settings(tmp_path), token="t")
