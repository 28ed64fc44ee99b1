import io
import json
from datetime import datetime, timezone
from pathlib import Path

import pandas as pd

from go_timestamp.models import BuildTimestampReport, ResolvedDate, SkippedDependency
from go_timestamp.reporting import (
    NO_DATES_MESSAGE,
    export_dates_csv,
    print_report,
    report_to_frame,
    save_results_json,
)


def _report():
    return BuildTimestampReport(
        resolved=(
            ResolvedDate("github.com/pkg/errors", datetime(2020, 1, 15, 10, tzinfo=timezone.utc), "forge-tag"),
            ResolvedDate("golang.org/x/sys", datetime(2019, 2, 27, tzinfo=timezone.utc)),
        ),
        skipped=(SkippedDependency("gopkg.in/yaml.v3", "gopkg.in/yaml.v3@v3.0.1", "no date available"),),
    )


def test_print_report_lists_dates_and_minimum():
    stream = io.StringIO()

    print_report(_report(), stream)

    lines = stream.getvalue().splitlines()
    assert lines[0] == "github.com/pkg/errors 2020-01-15T10:00:00+00:00"
    assert lines[1] == "golang.org/x/sys 2019-02-27T00:00:00+00:00"
    assert lines[-1] == "Approximate (minimum) timestamp equals = 2020-01-15T10:00:00+00:00"


def test_print_report_without_dates():
    stream = io.StringIO()

    print_report(BuildTimestampReport(), stream)

    assert stream.getvalue().splitlines()[-1] == NO_DATES_MESSAGE


def test_report_to_frame_keeps_input_order():
    df = report_to_frame(_report())

    assert list(df.columns) == ["package", "date", "source"]
    assert list(df["package"]) == ["github.com/pkg/errors", "golang.org/x/sys"]
    assert df["date"].max() == pd.Timestamp("2020-01-15T10:00:00Z")


def test_reporting_exports(tmp_path: Path):
    output_dir = tmp_path / "out"

    results_file = save_results_json(_report(), output_dir, "/bin/app")
    dates_file = export_dates_csv(_report(), output_dir, "/bin/app")

    assert results_file.name == "app_results.json"
    data = json.loads(results_file.read_text())
    assert data["minimum_build_time"] == "2020-01-15T10:00:00+00:00"
    assert data["skipped"][0]["package"] == "gopkg.in/yaml.v3"

    assert dates_file is not None and dates_file.exists()
    assert len(pd.read_csv(dates_file)) == 2


def test_empty_report_exports(tmp_path: Path):
    results_file = save_results_json(BuildTimestampReport(), tmp_path, "app")

    assert json.loads(results_file.read_text())["minimum_build_time"] is None
    assert export_dates_csv(BuildTimestampReport(), tmp_path, "app") is None
