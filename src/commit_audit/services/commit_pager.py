"""Commit paging — walk the commit history with a bounded scan."""

from __future__ import annotations

import logging

from commit_audit.domain.entities import Commit, ProjectHandle
from commit_audit.domain.ports.gitlab_api import GitLabApi
from commit_audit.domain.value_objects import FetchWindow

logger = logging.getLogger(__name__)

MAX_PAGES = 10
PER_PAGE = 50
# A page shorter than this is taken as the last one.  Pages of 40-49 items
# can therefore end the scan early even when more history exists.
SHORT_PAGE = 40


async def collect_commits(
    api: GitLabApi,
    project: ProjectHandle,
    window: FetchWindow,
    *,
    max_pages: int = MAX_PAGES,
    per_page: int = PER_PAGE,
    short_page: int = SHORT_PAGE,
) -> list[Commit]:
    """Return the commits inside *window*, newest first.

    Requests pages ``1..max_pages`` and stops after the first page holding
    fewer than *short_page* items.  Any failing page aborts the scan.
    """
    kept: list[Commit] = []
    for page in range(1, max_pages + 1):
        batch = await api.fetch_commit_page(project, page, per_page)
        kept.extend(c for c in batch if window.includes(c.created_at))
        logger.debug(
            "Page %d of %s: %d commits (%d kept so far)",
            page, project.path, len(batch), len(kept),
        )
        if len(batch) < short_page:
            break
    else:
        logger.info("Commit scan of %s stopped at the %d-page cap", project.path, max_pages)
    return kept
