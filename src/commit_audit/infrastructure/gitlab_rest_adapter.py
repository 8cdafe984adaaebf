"""GitLab REST API adapter — implements the GitLabApi port."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from commit_audit.common.time_utils import parse_timestamp
from commit_audit.domain.entities import Commit, CommitStats, ProjectHandle
from commit_audit.domain.exceptions import DataError, RemoteApiError, TransportError

logger = logging.getLogger(__name__)


class GitLabRestAdapter:
    """Concrete GitLabApi backed by the GitLab v4 REST API.

    The access token travels as the ``private_token`` query parameter.
    """

    def __init__(self, client: httpx.AsyncClient, server: str, token: str) -> None:
        self._client = client
        self._api_base = f"{server.rstrip('/')}/api/v4"
        self._token = token

    async def fetch_project(self, project_path: str) -> ProjectHandle:
        """GET /projects/{urlencoded path} → ProjectHandle."""
        data = await self._api_get(f"/projects/{quote(project_path, safe='')}")
        if not isinstance(data, dict) or not isinstance(data.get("id"), int):
            raise DataError(f"Project info for '{project_path}' has no numeric id.")
        return ProjectHandle(path=project_path, id=data["id"])

    async def fetch_commit_page(
        self, project: ProjectHandle, page: int, per_page: int
    ) -> list[Commit]:
        """GET /projects/{id}/repository/commits?page=&per_page= → [Commit]."""
        data = await self._api_get(
            f"/projects/{project.id}/repository/commits",
            params={"page": str(page), "per_page": str(per_page)},
        )
        if not isinstance(data, list):
            raise DataError(
                f"Commit listing for {project.path} (page {page}) is not a list."
            )
        return [self._to_commit(item) for item in data]

    async def fetch_commit_stats(self, project: ProjectHandle, sha: str) -> CommitStats:
        """GET /projects/{id}/repository/commits/{sha} → CommitStats."""
        # The detail payload carries the commit text in "message"; only the
        # HTTP status marks a failure here.
        data = await self._api_get(
            f"/projects/{project.id}/repository/commits/{sha}",
            message_means_error=False,
        )
        stats = data.get("stats") if isinstance(data, dict) else None
        if not isinstance(stats, dict):
            raise DataError(f"Commit {sha} has no stats object.")
        try:
            return CommitStats(
                additions=int(stats["additions"]),
                deletions=int(stats["deletions"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise DataError(f"Commit {sha} has malformed stats: {stats!r}") from exc

    @staticmethod
    def _to_commit(item: Any) -> Commit:
        if not isinstance(item, dict):
            raise DataError(f"Unexpected commit summary: {item!r}")
        try:
            return Commit(
                id=item["id"],
                title=item.get("title") or "",
                author_name=item.get("author_name") or "",
                author_email=item.get("author_email") or "",
                created_at=parse_timestamp(item["created_at"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise DataError(
                f"Commit summary {item.get('id', '?')} is missing {exc}"
            ) from exc

    async def _api_get(
        self,
        endpoint: str,
        params: dict[str, str] | None = None,
        *,
        message_means_error: bool = True,
    ) -> Any:
        """Perform a GitLab API GET request with error translation.

        Project and listing endpoints answer failures with a ``{"message"}``
        object, sometimes under HTTP 200; *message_means_error* turns that
        into :class:`RemoteApiError`.  Any HTTP 4xx/5xx is always one.
        """
        url = f"{self._api_base}{endpoint}"
        query = {**(params or {}), "private_token": self._token}
        try:
            resp = await self._client.get(url, params=query)
        except httpx.TimeoutException as exc:
            raise TransportError(f"Timed out fetching {url}") from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"Network error fetching {url}: {exc}") from exc

        if not resp.content:
            raise TransportError(
                f"GitLab returned an empty response (HTTP {resp.status_code}) for {url}"
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise TransportError(
                f"GitLab returned a non-JSON response (HTTP {resp.status_code}) for {url}"
            ) from exc

        message = None
        if isinstance(data, dict):
            message = data.get("message") or data.get("error")

        if resp.status_code >= 400:
            api_message = str(message) if message else f"HTTP {resp.status_code}"
            logger.debug("GitLab error for %s: %s", endpoint, api_message)
            raise RemoteApiError(
                f"GitLab rejected the request: {api_message}", api_message=api_message
            )

        if message and message_means_error:
            logger.debug("GitLab error payload for %s: %s", endpoint, message)
            raise RemoteApiError(
                f"GitLab rejected the request: {message}", api_message=str(message)
            )

        return data
