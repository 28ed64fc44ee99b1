"""
GitHub REST client for tag and commit lookups.
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from typing import Dict, List, Optional

import requests

from .errors import TransportError
from .models import CommitInfo, Tag
from .time_utils import parse_timestamp


logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"


@dataclass(frozen=True)
class ForgeConfig:
    """Connection settings for the forge API."""

    base_url: str = DEFAULT_API_URL
    token: Optional[str] = None
    timeout: float = 30.0
    min_interval: float = 0.0
    per_page: int = 100
    user_agent: str = "go-timestamp"

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "ForgeConfig":
        """Build a config from ``GITHUB_TOKEN`` and ``GO_TIMESTAMP_*`` variables."""
        env = os.environ if environ is None else environ
        return cls(
            base_url=env.get("GO_TIMESTAMP_API_URL", DEFAULT_API_URL),
            token=env.get("GITHUB_TOKEN") or None,
            timeout=float(env.get("GO_TIMESTAMP_TIMEOUT", cls.timeout)),
            min_interval=float(env.get("GO_TIMESTAMP_MIN_INTERVAL", cls.min_interval)),
        )


class GitHubClient:
    """Forge client backed by the GitHub REST API."""

    def __init__(
        self,
        config: Optional[ForgeConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config or ForgeConfig()
        self.session = session or requests.Session()
        self.session.headers.update(self._headers())
        self._last_request: Optional[float] = None

    def list_tags(self, owner: str, repo: str) -> List[Tag]:
        """Return every tag of ``owner/repo``, following pagination."""
        url: Optional[str] = f"{self._repo_url(owner, repo)}/tags"
        params: Optional[Dict] = {"per_page": self.config.per_page}
        tags: List[Tag] = []

        while url:
            logger.info("Fetching tags for %s/%s", owner, repo)
            response = self._get(url, params=params)
            for item in self._json(response, url):
                try:
                    tags.append(Tag(name=item["name"], commit_sha=item["commit"]["sha"]))
                except (KeyError, TypeError):
                    logger.debug("Ignoring malformed tag entry in %s: %r", url, item)
            url = response.links.get("next", {}).get("url")
            # The next link already carries the query string.
            params = None

        logger.debug("Found %d tags for %s/%s", len(tags), owner, repo)
        return tags

    def get_commit(self, owner: str, repo: str, sha: str) -> CommitInfo:
        """Return the dates recorded on commit ``sha``."""
        url = f"{self._repo_url(owner, repo)}/commits/{sha}"
        logger.info("Fetching commit %s of %s/%s", sha, owner, repo)
        data = self._json(self._get(url), url)

        try:
            commit = data["commit"]
            committer_date = parse_timestamp(commit["committer"]["date"])
            author_date = parse_timestamp((commit.get("author") or {}).get("date", ""))
        except (KeyError, TypeError, AttributeError) as e:
            raise TransportError(url, f"unexpected commit payload: {e}") from e

        if committer_date is None:
            raise TransportError(url, "commit has no committer date")
        return CommitInfo(sha=sha, committer_date=committer_date, author_date=author_date)

    def close(self) -> None:
        self.session.close()

    def _repo_url(self, owner: str, repo: str) -> str:
        return f"{self.config.base_url.rstrip('/')}/repos/{owner}/{repo}"

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": self.config.user_agent,
        }
        if self.config.token:
            headers["Authorization"] = f"Bearer {self.config.token}"
        return headers

    def _throttle(self) -> None:
        if self._last_request is not None and self.config.min_interval > 0:
            wait = self.config.min_interval - (time.monotonic() - self._last_request)
            if wait > 0:
                logger.debug("Rate limit: sleeping %.2fs", wait)
                time.sleep(wait)
        self._last_request = time.monotonic()

    def _get(self, url: str, params: Optional[Dict] = None) -> requests.Response:
        self._throttle()
        try:
            response = self.session.get(url, params=params, timeout=self.config.timeout)
        except requests.RequestException as e:
            raise TransportError(url, str(e)) from e

        if response.status_code != 200:
            remaining = response.headers.get("X-RateLimit-Remaining")
            if remaining == "0":
                logger.warning("GitHub API rate limit exhausted; set GITHUB_TOKEN for a higher limit")
            raise TransportError(url, response.reason or "request failed", response.status_code)
        return response

    def _json(self, response: requests.Response, url: str):
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(url, f"invalid JSON: {e}") from e
