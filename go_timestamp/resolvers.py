"""
Resolve release tags of forge-hosted modules to dates.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Tuple

from .errors import NotFoundError
from .interfaces import ForgeClient
from .time_utils import ensure_utc


logger = logging.getLogger(__name__)

GITHUB_PREFIX = "github.com"


class ReleaseDateResolver:
    """Date a tagged module version by the committer date of the tagged commit."""

    def __init__(self, client: ForgeClient, host_prefix: str = GITHUB_PREFIX) -> None:
        self.client = client
        self.host_prefix = host_prefix

    def is_forge_hosted(self, package_identity: str) -> bool:
        return package_identity.startswith(self.host_prefix)

    def split_repository(self, package_identity: str) -> Tuple[str, str]:
        """Return ``(owner, repo)`` from a ``host/owner/repo[/subpath]`` module path.

        Major version suffixes such as ``/v2`` fall into the subpath and are
        ignored.
        """
        parts = package_identity.split("/")
        if len(parts) < 3 or not parts[1] or not parts[2]:
            raise NotFoundError(package_identity, "", reason="not an owner/repo module path")
        return parts[1], parts[2]

    def resolve(self, package_identity: str, tag: str) -> datetime:
        """Return the committer date of the commit tagged ``tag``.

        Raises:
            NotFoundError: the repository has no tag named ``tag``.
            TransportError: a forge request failed.
        """
        owner, repo = self.split_repository(package_identity)
        logger.debug("Resolving %s/%s tag %s", owner, repo, tag)

        tags = self.client.list_tags(owner, repo)
        for candidate in tags:
            if candidate.name == tag:
                commit = self.client.get_commit(owner, repo, candidate.commit_sha)
                return ensure_utc(commit.committer_date)

        raise NotFoundError(package_identity, tag)
