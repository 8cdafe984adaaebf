"""FastAPI dependency injection wiring."""

from __future__ import annotations

from functools import lru_cache

import httpx

from commit_audit.infrastructure.config import Settings, get_settings
from commit_audit.infrastructure.gitlab_rest_adapter import GitLabRestAdapter
from commit_audit.infrastructure.json_submission_store import JsonSubmissionStore
from commit_audit.services.audit_team import AuditTeamUseCase

_http_client: httpx.AsyncClient | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client  # noqa: PLW0603

    settings = get_settings()
    _http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.request_timeout),
        verify=settings.tls_verify,
    )


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client  # noqa: PLW0603

    if _http_client:
        await _http_client.aclose()
        _http_client = None


@lru_cache(maxsize=1)
def _settings() -> Settings:
    return get_settings()


def get_use_case() -> AuditTeamUseCase:
    """Build the use-case with injected adapters."""
    settings = _settings()

    assert _http_client is not None, "startup() was not called"

    options = settings.audit_options()
    gitlab_adapter = GitLabRestAdapter(
        client=_http_client, server=options.server, token=options.token
    )

    return AuditTeamUseCase(
        gitlab=gitlab_adapter,
        submissions=JsonSubmissionStore(settings.submissions_file),
        options=options,
        stats_concurrency=settings.stats_concurrency,
    )
