"""
Exception hierarchy for timestamp estimation.

Fatal errors abort a run and reach the command line. Resolution errors
belong to a single dependency and are turned into skips by the aggregator.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class GoTimestampError(Exception):
    """Base exception for all go-timestamp errors."""

    error_code: str = "GO_TIMESTAMP_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Return a structured representation of the error."""
        response = {
            "error_code": self.error_code,
            "message": self.message,
        }
        if self.details:
            response["details"] = self.details
        return response


# ============ Fatal errors ============


class FatalError(GoTimestampError):
    """An error that aborts the whole run."""

    error_code = "FATAL"


class OpenFailedError(FatalError):
    """The binary could not be opened."""

    error_code = "OPEN_FAILED"

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Error when opening the file {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class ParseFailedError(FatalError):
    """The dependency list could not be read from the binary."""

    error_code = "PARSE_FAILED"

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Error when parsing packages of {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class VersionExtractionFailedError(FatalError):
    """A dependency carried no version at all."""

    error_code = "VERSION_EXTRACTION_FAILED"

    def __init__(self, package_identity: str, versioned_path: str):
        super().__init__(
            f"Failed to get version of {package_identity} from {versioned_path!r}",
            details={"package": package_identity, "path": versioned_path},
        )


# ============ Per-dependency errors ============


class ResolutionError(GoTimestampError):
    """A single dependency could not be dated."""

    error_code = "RESOLUTION_ERROR"


class NoVersionError(ResolutionError):
    """The versioned path has no version segment."""

    error_code = "NO_VERSION"

    def __init__(self, versioned_path: str):
        super().__init__(
            f"No version found in {versioned_path!r}",
            details={"path": versioned_path},
        )


class MalformedPseudoVersionError(ResolutionError):
    """The version string has no decodable embedded date."""

    error_code = "MALFORMED_PSEUDO_VERSION"

    def __init__(self, version: str, reason: str):
        super().__init__(
            f"Could not get date from {version!r}: {reason}",
            details={"version": version, "reason": reason},
        )


class NotFoundError(ResolutionError):
    """The tag does not exist on the forge."""

    error_code = "NOT_FOUND"

    def __init__(self, package_identity: str, tag: str, reason: str = "tag not found"):
        super().__init__(
            f"{reason}: {package_identity}@{tag}",
            details={"package": package_identity, "tag": tag},
        )


class TransportError(ResolutionError):
    """A forge request failed or returned a non-success status."""

    error_code = "TRANSPORT_ERROR"

    def __init__(self, url: str, reason: str, status_code: Optional[int] = None):
        message = f"Failed to fetch {url}: {reason}"
        if status_code is not None:
            message = f"Failed to fetch {url} | status code = {status_code}"
        details: Dict[str, Any] = {"url": url, "reason": reason}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, details=details)
        self.status_code = status_code
