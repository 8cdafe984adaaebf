"""Audit-team use case — the main orchestration pipeline.

This is the single entry point for the business logic.  It depends only on
the two ports (:class:`GitLabApi` and :class:`SubmissionStore`) and the pure
service modules.  The interface layer injects concrete adapters at runtime.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime

from commit_audit.domain.entities import AggregationResult, ProjectHandle
from commit_audit.domain.exceptions import (
    CommitAuditError,
    DataError,
    InvalidReferenceError,
    MissingReferenceError,
    RemoteApiError,
    SubmissionStoreError,
    TransportError,
)
from commit_audit.domain.ports.gitlab_api import GitLabApi
from commit_audit.domain.ports.submission_store import SubmissionStore
from commit_audit.domain.value_objects import AuditOptions, RepositoryReference
from commit_audit.services.commit_pager import collect_commits
from commit_audit.services.contributor_aggregator import aggregate
from commit_audit.services.reference_resolver import resolve_reference
from commit_audit.services.stats_fetcher import DEFAULT_CONCURRENCY, attach_stats

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AuditReport:
    """Everything the report layer needs about one team's repository."""

    reference: RepositoryReference
    project: ProjectHandle
    result: AggregationResult


@dataclass(frozen=True, slots=True)
class AuditOutcome:
    """Either a report or a single human-readable error message, never both."""

    report: AuditReport | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.report is not None


def describe_error(exc: CommitAuditError) -> str:
    """Pick the user-facing wording for a failed audit."""
    if isinstance(exc, MissingReferenceError):
        return "Team has not set a repository URL."
    if isinstance(exc, InvalidReferenceError):
        return f"Team provided repository URL is invalid: {exc.text}"
    if isinstance(exc, RemoteApiError):
        return f"Unable to access GitLab: {exc.api_message or exc}"
    if isinstance(exc, TransportError):
        return "Unable to reach GitLab. Try again later."
    if isinstance(exc, DataError):
        return f"GitLab returned incomplete data: {exc}"
    if isinstance(exc, SubmissionStoreError):
        return "Submission records are unavailable. Try again later."
    return str(exc)


class AuditTeamUseCase:
    """Orchestrates the submission → project → commits → stats → totals pipeline.

    Parameters
    ----------
    gitlab:
        Adapter for the GitLab v4 REST API.
    submissions:
        Where the team's repository URL was submitted.
    options:
        Server, credentials, submission tags and default fetch window.
    stats_concurrency:
        Maximum number of commit-detail requests in flight.
    """

    def __init__(
        self,
        gitlab: GitLabApi,
        submissions: SubmissionStore,
        options: AuditOptions,
        stats_concurrency: int = DEFAULT_CONCURRENCY,
    ) -> None:
        self._gitlab = gitlab
        self._submissions = submissions
        self._options = options
        self._concurrency = stats_concurrency

    # ── Public entry points ─────────────────────────────────────────────

    async def execute(
        self,
        team_id: str,
        *,
        repository_url: str | None = None,
        since: datetime | None = None,
    ) -> AuditReport:
        """Run the full pipeline; raises the most specific CommitAuditError."""
        options = self._options if since is None else replace(self._options, since=since)

        # 1. Repository reference (explicit URL wins over the submission store)
        if repository_url is not None:
            reference = RepositoryReference.parse(repository_url, options.server)
        else:
            reference = resolve_reference(self._submissions, team_id, options)
        logger.info("Auditing team %s: %s", team_id, reference.project_path)

        # 2. Project id
        project = await self._gitlab.fetch_project(reference.project_path)

        # 3. Commit history inside the window
        commits = await collect_commits(self._gitlab, project, options.window)
        logger.info("Found %d commits in %s", len(commits), project.path)

        # 4. Per-commit stats
        enriched = await attach_stats(
            self._gitlab, project, commits, concurrency=self._concurrency
        )

        # 5. Per-contributor totals
        result = aggregate(enriched, since=options.since)
        return AuditReport(reference=reference, project=project, result=result)

    async def run(
        self,
        team_id: str,
        *,
        repository_url: str | None = None,
        since: datetime | None = None,
    ) -> AuditOutcome:
        """Like :meth:`execute`, but folds any audit failure into a message."""
        try:
            report = await self.execute(team_id, repository_url=repository_url, since=since)
        except CommitAuditError as exc:
            logger.warning("Audit of team %s failed: %s: %s", team_id, type(exc).__name__, exc)
            return AuditOutcome(error=describe_error(exc))
        return AuditOutcome(report=report)
