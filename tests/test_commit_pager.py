from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from commit_audit.domain.entities import Commit, CommitStats, ProjectHandle
from commit_audit.domain.exceptions import RemoteApiError
from commit_audit.domain.value_objects import FetchWindow
from commit_audit.services.commit_pager import collect_commits

T0 = datetime(2024, 9, 1, tzinfo=timezone.utc)
PROJECT = ProjectHandle(path="cse335/team7", id=42)


class PagedApi:
    """Serves pre-built pages and records which were asked for."""

    def __init__(self, page_sizes: list[int], fail_on: int | None = None) -> None:
        self.pages: list[list[Commit]] = []
        self.requested: list[tuple[int, int]] = []
        self.fail_on = fail_on
        n = 0
        for size in page_sizes:
            page = []
            for _ in range(size):
                page.append(
                    Commit(
                        id=f"c{n:04d}",
                        title="t",
                        author_name="A",
                        author_email="a@x",
                        created_at=T0 - timedelta(hours=n),
                    )
                )
                n += 1
            self.pages.append(page)

    async def fetch_project(self, project_path: str) -> ProjectHandle:
        raise NotImplementedError

    async def fetch_commit_page(self, project: ProjectHandle, page: int, per_page: int) -> list[Commit]:
        self.requested.append((page, per_page))
        if page == self.fail_on:
            raise RemoteApiError("boom", api_message="500 Internal Server Error")
        if page > len(self.pages):
            return []
        return self.pages[page - 1]

    async def fetch_commit_stats(self, project: ProjectHandle, sha: str) -> CommitStats:
        raise NotImplementedError


@pytest.mark.asyncio
async def test_single_short_page_stops_immediately() -> None:
    api = PagedApi([7])

    commits = await collect_commits(api, PROJECT, FetchWindow())

    assert len(commits) == 7
    assert api.requested == [(1, 50)]


@pytest.mark.asyncio
async def test_stops_after_first_page_under_forty() -> None:
    api = PagedApi([50, 50, 39, 50])

    commits = await collect_commits(api, PROJECT, FetchWindow())

    assert [p for p, _ in api.requested] == [1, 2, 3]
    assert len(commits) == 139


@pytest.mark.asyncio
async def test_pages_of_forty_or_more_keep_going() -> None:
    api = PagedApi([45, 40, 0])

    commits = await collect_commits(api, PROJECT, FetchWindow())

    assert [p for p, _ in api.requested] == [1, 2, 3]
    assert len(commits) == 85


@pytest.mark.asyncio
async def test_never_more_than_ten_pages() -> None:
    api = PagedApi([50] * 15)

    commits = await collect_commits(api, PROJECT, FetchWindow())

    assert [p for p, _ in api.requested] == list(range(1, 11))
    assert len(commits) == 500


@pytest.mark.asyncio
async def test_keeps_fetch_order() -> None:
    api = PagedApi([50, 10])

    commits = await collect_commits(api, PROJECT, FetchWindow())

    assert [c.id for c in commits] == [f"c{i:04d}" for i in range(60)]


@pytest.mark.asyncio
async def test_window_drops_commits_at_or_before_since() -> None:
    api = PagedApi([50, 50, 5])
    since = T0 - timedelta(hours=60)

    commits = await collect_commits(api, PROJECT, FetchWindow(since=since))

    assert len(commits) == 60
    assert all(c.created_at > since for c in commits)
    assert len(api.requested) == 3


@pytest.mark.asyncio
async def test_page_failure_aborts_without_partial_result() -> None:
    api = PagedApi([50, 50, 50], fail_on=2)

    with pytest.raises(RemoteApiError):
        await collect_commits(api, PROJECT, FetchWindow())

    assert [p for p, _ in api.requested] == [1, 2]


@pytest.mark.asyncio
async def test_limits_are_adjustable() -> None:
    api = PagedApi([20, 20, 20, 5])

    commits = await collect_commits(
        api, PROJECT, FetchWindow(), max_pages=2, per_page=20, short_page=20
    )

    assert api.requested == [(1, 20), (2, 20)]
    assert len(commits) == 40
