"""Contributor aggregation — fold enriched commits into per-author totals."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from commit_audit.domain.entities import AggregationResult, Commit, ContributorStat, Totals


def author_identity(email: str) -> str:
    """Deduplication key for an author: the part of the email before ``@``.

    An address without ``@`` is its own identity.
    """
    local, sep, _ = email.partition("@")
    return local if sep else email


def aggregate(
    commits: Iterable[Commit], since: datetime | None = None
) -> AggregationResult:
    """Group commits by author identity in first-seen order.

    The first commit seen for an identity fixes its display name and email.
    """
    by_identity: dict[str, ContributorStat] = {}
    log: list[Commit] = []
    additions = deletions = 0

    for commit in commits:
        if not commit.is_complete:
            raise ValueError(f"Commit {commit.id} has no stats attached.")
        identity = author_identity(commit.author_email)
        stat = by_identity.get(identity)
        if stat is None:
            stat = ContributorStat(
                identity=identity,
                name=commit.author_name,
                email=commit.author_email,
            )
            by_identity[identity] = stat
        stat.commit_count += 1
        stat.additions += commit.additions
        stat.deletions += commit.deletions
        additions += commit.additions
        deletions += commit.deletions
        log.append(commit)

    return AggregationResult(
        contributors=list(by_identity.values()),
        commits=log,
        totals=Totals(commit_count=len(log), additions=additions, deletions=deletions),
        since=since,
    )
