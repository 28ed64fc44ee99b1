"""
Read the dependency list of a Go binary with the Go toolchain.

``go version -m`` prints the module build info embedded in the binary::

    /tmp/app: go1.21.0
            path    example.com/app
            mod     example.com/app (devel)
            dep     github.com/pkg/errors   v0.9.1  h1:FEBLx1zS...
            dep     golang.org/x/sys        v0.0.0-20220722155257-8c9f86f7a55f
            =>      ../sys  (devel)
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional

from .errors import OpenFailedError, ParseFailedError
from .models import DependencyRecord


logger = logging.getLogger(__name__)


class GoToolchainExtractor:
    """Extract dependencies by running ``go version -m``."""

    def __init__(self, go_binary: str = "go", timeout: float = 30.0) -> None:
        self.go_binary = go_binary
        self.timeout = timeout

    def extract_dependencies(self, binary_path: str) -> List[DependencyRecord]:
        path = Path(binary_path).expanduser().resolve()
        if not path.is_file():
            raise OpenFailedError(str(path), "no such file")
        try:
            with open(path, "rb"):
                pass
        except OSError as e:
            raise OpenFailedError(str(path), e.strerror or str(e)) from e

        output = self._run(path)
        records = parse_build_info(output)
        logger.info("Found %d dependencies in %s", len(records), path)
        return records

    def _run(self, path: Path) -> str:
        if shutil.which(self.go_binary) is None:
            raise ParseFailedError(str(path), f"{self.go_binary!r} not found on PATH")

        cmd = [self.go_binary, "version", "-m", str(path)]
        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout
            )
        except (subprocess.TimeoutExpired, FileNotFoundError) as e:
            raise ParseFailedError(str(path), str(e)) from e

        if result.returncode != 0:
            reason = result.stderr.strip() or result.stdout.strip() or f"exit status {result.returncode}"
            raise ParseFailedError(str(path), reason)
        return result.stdout


def parse_build_info(output: str) -> List[DependencyRecord]:
    """Turn ``go version -m`` output into dependency records.

    A ``=>`` line replaces the dependency listed just before it.
    """
    records: List[DependencyRecord] = []
    current: Optional[DependencyRecord] = None

    for line in output.splitlines():
        fields = line.strip().split("\t")
        kind = fields[0]
        if kind not in ("dep", "=>"):
            continue

        module_path = fields[1] if len(fields) > 1 else ""
        version = fields[2] if len(fields) > 2 else ""
        record = DependencyRecord(module_path, f"{module_path}@{version}")

        if kind == "=>":
            if current is None:
                logger.debug("Ignoring replacement without a dependency: %r", line)
                continue
            records[-1] = record
        else:
            records.append(record)
        current = record

    return records
