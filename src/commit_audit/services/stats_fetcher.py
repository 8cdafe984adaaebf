"""Stats fetching — attach addition/deletion counts to every commit."""

from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from commit_audit.domain.entities import Commit, ProjectHandle
from commit_audit.domain.ports.gitlab_api import GitLabApi

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 8


async def attach_stats(
    api: GitLabApi,
    project: ProjectHandle,
    commits: Sequence[Commit],
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> list[Commit]:
    """Fetch stats for *commits* concurrently, keeping their order.

    At most *concurrency* detail requests are in flight.  The first failure
    cancels the outstanding requests and is re-raised; no partial list is
    returned.
    """
    sem = asyncio.Semaphore(concurrency)

    async def _fetch_one(commit: Commit) -> Commit:
        async with sem:
            stats = await api.fetch_commit_stats(project, commit.id)
            return commit.with_stats(stats.additions, stats.deletions)

    tasks = [asyncio.ensure_future(_fetch_one(c)) for c in commits]
    try:
        enriched = await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    logger.info("Fetched stats for %d commits of %s", len(enriched), project.path)
    return list(enriched)
