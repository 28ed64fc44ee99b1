"""
Reporting and export utilities.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, TextIO
import sys

import pandas as pd

from .models import BuildTimestampReport
from .time_utils import format_date


logger = logging.getLogger(__name__)


NO_DATES_MESSAGE = "No dates could be resolved"


def report_lines(report: BuildTimestampReport) -> List[str]:
    lines = [f"{item.package_identity} {format_date(item.date)}" for item in report.resolved]
    minimum = report.minimum_build_time
    lines.append("")
    if minimum is None:
        lines.append(NO_DATES_MESSAGE)
    else:
        lines.append(f"Approximate (minimum) timestamp equals = {format_date(minimum)}")
    return lines


def print_report(report: BuildTimestampReport, stream: Optional[TextIO] = None) -> None:
    stream = stream or sys.stdout
    for line in report_lines(report):
        print(line, file=stream)
    if report.skipped:
        logger.info("Skipped %d dependencies", len(report.skipped))


def report_to_dict(report: BuildTimestampReport, binary: str) -> Dict:
    minimum = report.minimum_build_time
    return {
        "binary": binary,
        "minimum_build_time": format_date(minimum) if minimum else None,
        "resolved": [
            {
                "package": item.package_identity,
                "date": format_date(item.date),
                "source": item.source,
            }
            for item in report.resolved
        ],
        "skipped": [
            {
                "package": item.package_identity,
                "path": item.versioned_path,
                "reason": item.reason,
            }
            for item in report.skipped
        ],
    }


def report_to_frame(report: BuildTimestampReport) -> pd.DataFrame:
    columns = ["package", "date", "source"]
    rows = [
        {"package": item.package_identity, "date": item.date, "source": item.source}
        for item in report.resolved
    ]
    df = pd.DataFrame(rows, columns=columns)
    if not df.empty:
        df["date"] = pd.to_datetime(df["date"], utc=True)
    return df


def save_results_json(report: BuildTimestampReport, output_dir: Path, binary: str) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    results_file = output_dir / f"{Path(binary).name}_results.json"
    with open(results_file, 'w') as f:
        json.dump(report_to_dict(report, binary), f, indent=2, default=str)
    return results_file


def export_dates_csv(report: BuildTimestampReport, output_dir: Path, binary: str) -> Path | None:
    if not report.resolved:
        return None
    output_dir.mkdir(parents=True, exist_ok=True)
    dates_file = output_dir / f"{Path(binary).name}_dates.csv"
    df = report_to_frame(report)
    df["date"] = df["date"].dt.tz_convert("UTC").dt.tz_localize(None)
    df.to_csv(dates_file, index=False)
    return dates_file
