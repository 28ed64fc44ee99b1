"""
Compute the minimum build timestamp from dependency release dates.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from tqdm import tqdm

from .errors import (
    NoVersionError,
    ResolutionError,
    VersionExtractionFailedError,
)
from .models import (
    BuildTimestampReport,
    DependencyRecord,
    ResolvedDate,
    SkippedDependency,
    VersionDescriptor,
    VersionKind,
)
from .resolvers import ReleaseDateResolver
from .versions import classify, decode_pseudo_version, has_embedded_date


logger = logging.getLogger(__name__)


class VendorDateAggregator:
    """Date every dependency of a binary and report the latest date.

    Records are processed one at a time in input order. A record whose
    version cannot be extracted at all aborts the batch before any lookup is
    made; every other failure only skips that record.
    """

    def __init__(self, resolver: ReleaseDateResolver, progress: bool = False) -> None:
        self.resolver = resolver
        self.progress = progress

    def aggregate(self, records: Iterable[DependencyRecord]) -> BuildTimestampReport:
        """Resolve a date for each record.

        Raises:
            VersionExtractionFailedError: a record has no version.
        """
        classified = self._classify_all(records)

        resolved: List[ResolvedDate] = []
        skipped: List[SkippedDependency] = []
        for record, descriptor in tqdm(
            classified, desc="Resolving dependency dates", disable=not self.progress
        ):
            try:
                result = self._resolve_record(record, descriptor)
            except ResolutionError as e:
                logger.warning("Skipping %s: %s", record.package_identity, e)
                skipped.append(SkippedDependency(record.package_identity, record.versioned_path, str(e)))
                continue
            if result is None:
                reason = f"no date available for {descriptor.version}"
                logger.warning("Skipping %s: %s", record.package_identity, reason)
                skipped.append(SkippedDependency(record.package_identity, record.versioned_path, reason))
                continue
            logger.debug("%s resolved to %s", record.package_identity, result.date)
            resolved.append(result)

        report = BuildTimestampReport(resolved=tuple(resolved), skipped=tuple(skipped))
        logger.info(
            "Resolved %d of %d dependencies", len(report.resolved), len(classified)
        )
        return report

    def _classify_all(
        self, records: Iterable[DependencyRecord]
    ) -> List[Tuple[DependencyRecord, VersionDescriptor]]:
        classified = []
        for record in records:
            try:
                descriptor = classify(record.versioned_path)
            except NoVersionError as e:
                raise VersionExtractionFailedError(
                    record.package_identity, record.versioned_path
                ) from e
            classified.append((record, descriptor))
        return classified

    def _resolve_record(
        self, record: DependencyRecord, descriptor: VersionDescriptor
    ) -> Optional[ResolvedDate]:
        identity = record.package_identity
        forge_hosted = self.resolver.is_forge_hosted(identity)

        if descriptor.kind is VersionKind.PSEUDO:
            return ResolvedDate(identity, decode_pseudo_version(descriptor.version), "pseudo-version")

        if forge_hosted:
            date = self.resolver.resolve(identity, descriptor.version)
            return ResolvedDate(identity, date, "forge-tag")

        # Off-forge versions can only be dated when they carry a date segment,
        # as untagged major versions like v2.0.0-20200101120000-abcdef123456 do.
        if has_embedded_date(descriptor.version):
            return ResolvedDate(identity, decode_pseudo_version(descriptor.version), "embedded-date")
        return None

