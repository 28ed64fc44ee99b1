#!/usr/bin/env python3
"""
Example script showing how to use the go-timestamp library.
"""

import sys
from datetime import datetime, timezone

from go_timestamp.aggregator import VendorDateAggregator
from go_timestamp.extraction import GoToolchainExtractor
from go_timestamp.forge import ForgeConfig, GitHubClient
from go_timestamp.models import CommitInfo, DependencyRecord, Tag
from go_timestamp.reporting import print_report
from go_timestamp.resolvers import ReleaseDateResolver


class OfflineForge:
    """Forge stand-in that knows a single tag."""

    def list_tags(self, owner, repo):
        return [Tag(name="v0.9.1", commit_sha="614d223")]

    def get_commit(self, owner, repo, sha):
        return CommitInfo(sha=sha, committer_date=datetime(2020, 1, 14, 19, 18, 11, tzinfo=timezone.utc))


def example_offline_records():
    """Example: Date a hand-written dependency list without network access."""
    print("="*60)
    print("Example 1: Offline records")
    print("="*60)

    records = [
        DependencyRecord("github.com/pkg/errors", "github.com/pkg/errors@v0.9.1"),
        DependencyRecord("golang.org/x/sys", "golang.org/x/sys@v0.0.0-20220722155257-8c9f86f7a55f"),
    ]
    aggregator = VendorDateAggregator(ReleaseDateResolver(OfflineForge()))
    print_report(aggregator.aggregate(records))


def example_binary(path):
    """Example: Date a real Go binary through GitHub."""
    print("\n" + "="*60)
    print("Example 2: Go binary")
    print("="*60)

    client = GitHubClient(ForgeConfig.from_env())
    try:
        records = GoToolchainExtractor().extract_dependencies(path)
        report = VendorDateAggregator(ReleaseDateResolver(client), progress=True).aggregate(records)
    finally:
        client.close()
    print_report(report)


if __name__ == "__main__":
    example_offline_records()
    if len(sys.argv) > 1:
        example_binary(sys.argv[1])
