"""Port: GitLab API — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from commit_audit.domain.entities import Commit, CommitStats, ProjectHandle


class GitLabApi(Protocol):
    """Abstract contract for the three read-only GitLab v4 calls the audit needs."""

    async def fetch_project(self, project_path: str) -> ProjectHandle:
        """Resolve a namespaced path to its numeric project id."""
        ...

    async def fetch_commit_page(
        self, project: ProjectHandle, page: int, per_page: int
    ) -> list[Commit]:
        """Return one page of the commit history, newest first."""
        ...

    async def fetch_commit_stats(self, project: ProjectHandle, sha: str) -> CommitStats:
        """Return the addition/deletion counts of a single commit."""
        ...
