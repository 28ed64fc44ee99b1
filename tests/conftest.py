"""Pytest configuration and fixtures."""

from datetime import datetime, timezone

import pytest

from go_timestamp.errors import TransportError
from go_timestamp.models import CommitInfo, Tag


class FakeForgeClient:
    """In-memory forge: ``repos`` maps ``owner/repo`` to ``{tag: committer_date}``."""

    def __init__(self, repos=None, failing=()):
        self.repos = repos or {}
        self.failing = set(failing)
        self.calls = []

    def list_tags(self, owner, repo):
        key = f"{owner}/{repo}"
        self.calls.append(("list_tags", key))
        if key in self.failing:
            raise TransportError(f"https://api.github.com/repos/{key}/tags", "Forbidden", 403)
        return [Tag(name=name, commit_sha=f"sha-{name}") for name in self.repos.get(key, {})]

    def get_commit(self, owner, repo, sha):
        key = f"{owner}/{repo}"
        self.calls.append(("get_commit", key, sha))
        tag = sha[len("sha-"):]
        committer_date = self.repos[key][tag]
        return CommitInfo(
            sha=sha,
            committer_date=committer_date,
            author_date=datetime(2000, 1, 1, tzinfo=timezone.utc),
        )


@pytest.fixture
def forge_client():
    return FakeForgeClient(
        repos={
            "pkg/errors": {
                "v0.8.1": datetime(2019, 1, 3, 19, 7, 39, tzinfo=timezone.utc),
                "v0.9.1": datetime(2020, 1, 15, 10, 0, 0, tzinfo=timezone.utc),
            },
            "spf13/cobra": {
                "v1.5.0": datetime(2022, 6, 21, 12, 0, 0, tzinfo=timezone.utc),
            },
        },
        failing={"broken/repo"},
    )
