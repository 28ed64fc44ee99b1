"""
Core data models for build timestamp estimation.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from .time_utils import ensure_utc, latest


@dataclass(frozen=True)
class DependencyRecord:
    """A dependency embedded in a binary."""

    package_identity: str
    versioned_path: str


class VersionKind(Enum):
    """Shape of a Go module version string."""

    SEMANTIC = "semantic"
    PSEUDO = "pseudo"
    INCOMPATIBLE = "incompatible"


@dataclass(frozen=True)
class VersionDescriptor:
    """Classified version: a tag for semantic kinds, the raw string for pseudo-versions."""

    kind: VersionKind
    version: str

    @property
    def is_tagged(self) -> bool:
        return self.kind in (VersionKind.SEMANTIC, VersionKind.INCOMPATIBLE)


@dataclass(frozen=True)
class ResolvedDate:
    """A dependency with the date its version was released."""

    package_identity: str
    date: datetime
    source: str = "pseudo-version"

    def __post_init__(self) -> None:
        object.__setattr__(self, "date", ensure_utc(self.date))


@dataclass(frozen=True)
class SkippedDependency:
    """A dependency that produced no date."""

    package_identity: str
    versioned_path: str
    reason: str


@dataclass(frozen=True)
class Tag:
    """A repository tag and the commit it points to."""

    name: str
    commit_sha: str


@dataclass(frozen=True)
class CommitInfo:
    """Dates recorded on a commit."""

    sha: str
    committer_date: datetime
    author_date: Optional[datetime] = None


@dataclass(frozen=True)
class BuildTimestampReport:
    """Outcome of dating every dependency of one binary."""

    resolved: Tuple[ResolvedDate, ...] = ()
    skipped: Tuple[SkippedDependency, ...] = ()

    @property
    def minimum_build_time(self) -> Optional[datetime]:
        """Latest resolved date, or None when nothing could be resolved."""
        return latest(item.date for item in self.resolved)

    @property
    def is_resolved(self) -> bool:
        return bool(self.resolved)
