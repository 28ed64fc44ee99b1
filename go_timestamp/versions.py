"""
Go module version parsing.

Versioned paths look like ``github.com/pkg/errors@v0.9.1/errors.go``. The
version is classified as a release tag, a tag with the ``+incompatible``
suffix, or a pseudo-version such as ``v0.0.0-20190227000051-27936f6d90f9``
whose middle segment embeds the commit time.
"""

from __future__ import annotations

from datetime import datetime, timezone

from .errors import MalformedPseudoVersionError, NoVersionError
from .models import VersionDescriptor, VersionKind


INCOMPATIBLE_SUFFIX = "+incompatible"
NO_VERSION_BASE = "v0.0.0"
PSEUDO_DATE_LAYOUT = "%Y%m%d"
_PSEUDO_DATE_LENGTH = 8


def extract_version(versioned_path: str) -> str:
    """Return the text after the last ``@`` up to the next path separator."""
    index = versioned_path.rfind("@")
    if index == -1:
        return ""
    return versioned_path[index + 1:].split("/")[0]


def classify(versioned_path: str) -> VersionDescriptor:
    """Classify the version embedded in a versioned path.

    Raises:
        NoVersionError: the path has no ``@`` or the version is empty.
    """
    version = extract_version(versioned_path)
    if not version:
        raise NoVersionError(versioned_path)

    if INCOMPATIBLE_SUFFIX in version:
        return VersionDescriptor(
            VersionKind.INCOMPATIBLE, version.replace(INCOMPATIBLE_SUFFIX, "")
        )
    if NO_VERSION_BASE in version:
        return VersionDescriptor(VersionKind.PSEUDO, version)
    return VersionDescriptor(VersionKind.SEMANTIC, version)


def decode_pseudo_version(raw: str) -> datetime:
    """Return the commit date embedded in a pseudo-version, at midnight UTC.

    Only the ``YYYYMMDD`` part of the 14-digit timestamp is used.

    Raises:
        MalformedPseudoVersionError: no second segment, or it does not start
            with a valid date.
    """
    segments = raw.split("-")
    if len(segments) < 2:
        raise MalformedPseudoVersionError(raw, "missing timestamp segment")

    date_part = segments[1][:_PSEUDO_DATE_LENGTH]
    if len(date_part) < _PSEUDO_DATE_LENGTH:
        raise MalformedPseudoVersionError(raw, "timestamp segment too short")
    if not date_part.isdigit():
        raise MalformedPseudoVersionError(raw, f"{date_part!r} is not a date")

    try:
        parsed = datetime.strptime(date_part, PSEUDO_DATE_LAYOUT)
    except ValueError as e:
        raise MalformedPseudoVersionError(raw, str(e)) from e
    return parsed.replace(tzinfo=timezone.utc)


def has_embedded_date(raw: str) -> bool:
    """Whether ``decode_pseudo_version`` would succeed on ``raw``."""
    try:
        decode_pseudo_version(raw)
    except MalformedPseudoVersionError:
        return False
    return True
