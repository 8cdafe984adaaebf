"""API routes — thin controllers that delegate to the use case."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from commit_audit.interface.dependencies import get_use_case
from commit_audit.interface.schemas import AuditRequest, AuditResponse, ErrorResponse
from commit_audit.services.audit_team import AuditTeamUseCase

router = APIRouter()


@router.post(
    "/audit",
    response_model=AuditResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Team has not submitted a repository URL"},
        422: {"model": ErrorResponse, "description": "Submitted repository URL is invalid"},
        502: {"model": ErrorResponse, "description": "GitLab rejected the request or returned incomplete data"},
        503: {"model": ErrorResponse, "description": "Submission records unavailable"},
        504: {"model": ErrorResponse, "description": "GitLab unreachable or timed out"},
    },
)
async def audit(
    body: AuditRequest,
    use_case: AuditTeamUseCase = Depends(get_use_case),
) -> AuditResponse:
    """Audit the contribution activity of one team's repository."""
    report = await use_case.execute(
        body.team_id,
        repository_url=body.repository_url,
        since=body.window.since,
    )
    return AuditResponse.from_report(report)
