"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, field_validator

from commit_audit.domain.value_objects import FetchWindow
from commit_audit.services.audit_team import AuditReport


class AuditRequest(BaseModel):
    """Request body for ``POST /audit``."""

    team_id: str
    repository_url: str | None = None
    since: str | None = None

    @field_validator("team_id")
    @classmethod
    def _team_required(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            msg = "team_id must not be empty."
            raise ValueError(msg)
        return stripped

    @field_validator("since")
    @classmethod
    def _since_must_parse(cls, v: str | None) -> str | None:
        FetchWindow.from_human(v)
        return v

    @property
    def window(self) -> FetchWindow:
        return FetchWindow.from_human(self.since)


class TotalsOut(BaseModel):
    commit_count: int
    additions: int
    deletions: int


class ContributorOut(BaseModel):
    identity: str
    name: str
    email: str
    commit_count: int
    commit_percent: float
    additions: int
    additions_percent: float
    deletions: int
    deletions_percent: float


class CommitOut(BaseModel):
    id: str
    title: str
    author_name: str
    author_email: str
    created_at: datetime
    additions: int
    deletions: int


class AuditResponse(BaseModel):
    """Successful response from ``POST /audit``."""

    repository_url: str
    project_path: str
    project_id: int
    since: datetime | None
    totals: TotalsOut
    contributors: list[ContributorOut]
    commits: list[CommitOut]

    @classmethod
    def from_report(cls, report: AuditReport) -> AuditResponse:
        result = report.result
        return cls(
            repository_url=report.reference.raw_url,
            project_path=report.project.path,
            project_id=report.project.id,
            since=result.since,
            totals=TotalsOut(
                commit_count=result.totals.commit_count,
                additions=result.totals.additions,
                deletions=result.totals.deletions,
            ),
            contributors=[
                ContributorOut(
                    identity=share.stat.identity,
                    name=share.stat.name,
                    email=share.stat.email,
                    commit_count=share.stat.commit_count,
                    commit_percent=share.commit_percent,
                    additions=share.stat.additions,
                    additions_percent=share.additions_percent,
                    deletions=share.stat.deletions,
                    deletions_percent=share.deletions_percent,
                )
                for share in result.shares()
            ],
            commits=[
                CommitOut(
                    id=c.id,
                    title=c.title,
                    author_name=c.author_name,
                    author_email=c.author_email,
                    created_at=c.created_at,
                    additions=c.additions or 0,
                    deletions=c.deletions or 0,
                )
                for c in result.commits
            ],
        )


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
