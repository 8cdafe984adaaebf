from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any
from urllib.parse import unquote

import httpx
import pytest
import pytest_asyncio

SERVER = "https://git.example.edu"
TOKEN = "secret-token"
PROJECT_PATH = "cse335/team7"
PROJECT_ID = 42

T0 = datetime(2024, 9, 1, 12, 0, tzinfo=timezone.utc)


def commit_summary(
    sha: str,
    *,
    email: str = "bob@cse.edu",
    name: str = "Bob",
    created_at: datetime = T0,
    title: str | None = None,
) -> dict[str, Any]:
    return {
        "id": sha,
        "short_id": sha[:11],
        "title": title or f"commit {sha}",
        "author_name": name,
        "author_email": email,
        "created_at": created_at.isoformat(),
    }


def history(count: int, *, newest: datetime = T0, prefix: str = "c") -> list[dict[str, Any]]:
    """*count* commit summaries, newest first, one hour apart."""
    return [
        commit_summary(f"{prefix}{i:04d}", created_at=newest - timedelta(hours=i))
        for i in range(count)
    ]


class FakeGitLab:
    """In-memory GitLab v4 server for ``httpx.MockTransport``."""

    def __init__(self, project_path: str = PROJECT_PATH, project_id: int = PROJECT_ID) -> None:
        self.projects: dict[str, dict[str, Any]] = {
            project_path: {"id": project_id, "path_with_namespace": project_path}
        }
        self.commits: list[dict[str, Any]] = []
        self.stats: dict[str, dict[str, int]] = {}
        self.requests: list[httpx.Request] = []

    def add_commit(self, summary: dict[str, Any], additions: int = 1, deletions: int = 0) -> None:
        self.commits.append(summary)
        self.stats[summary["id"]] = {
            "additions": additions,
            "deletions": deletions,
            "total": additions + deletions,
        }

    def page_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith("/repository/commits")]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.params.get("private_token") != TOKEN:
            return httpx.Response(401, json={"message": "401 Unauthorized"})

        path = request.url.raw_path.decode().split("?", 1)[0]
        rest = path.removeprefix("/api/v4/projects/")
        project_part, marker, tail = rest.partition("/repository/commits")

        if not marker:
            project = self.projects.get(unquote(rest))
            if project is None:
                return httpx.Response(404, json={"message": "404 Project Not Found"})
            return httpx.Response(200, json=project)

        if tail == "":
            page = int(request.url.params.get("page", "1"))
            per_page = int(request.url.params.get("per_page", "20"))
            start = (page - 1) * per_page
            return httpx.Response(200, json=self.commits[start : start + per_page])

        sha = tail.lstrip("/")
        stats = self.stats.get(sha)
        if stats is None:
            return httpx.Response(404, json={"message": "404 Commit Not Found"})
        summary = next(c for c in self.commits if c["id"] == sha)
        detail = {
            **summary,
            "message": f"{summary['title']}\n\nLonger description of the change.",
            "committer_name": summary["author_name"],
            "parent_ids": [],
            "status": None,
            "stats": stats,
        }
        return httpx.Response(200, json=detail)


class MemorySubmissionStore:
    def __init__(self, submissions: dict[tuple[str, str, str], str] | None = None) -> None:
        self.submissions = submissions or {}

    def latest_submission(self, team_id: str, assign_tag: str, submission_tag: str) -> str | None:
        return self.submissions.get((team_id, assign_tag, submission_tag))


@pytest.fixture
def fake_gitlab() -> FakeGitLab:
    return FakeGitLab()


@pytest_asyncio.fixture
async def http_client(fake_gitlab: FakeGitLab):
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_gitlab.handler)) as client:
        yield client
