"""
Interfaces for dependency extraction and forge access.
"""

from __future__ import annotations

from typing import List, Protocol

from .models import CommitInfo, DependencyRecord, Tag


class DependencyExtractor(Protocol):
    """Read the embedded dependency list of a compiled binary."""

    def extract_dependencies(self, binary_path: str) -> List[DependencyRecord]:
        ...


class ForgeClient(Protocol):
    """Tag and commit lookups against a code-hosting API."""

    def list_tags(self, owner: str, repo: str) -> List[Tag]:
        ...

    def get_commit(self, owner: str, repo: str, sha: str) -> CommitInfo:
        ...
