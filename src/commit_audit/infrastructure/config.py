"""Application configuration — loaded from environment variables."""

from __future__ import annotations

import ssl
from functools import lru_cache

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from commit_audit.domain.value_objects import AuditOptions, FetchWindow


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    gitlab_server: str
    gitlab_user: str = ""
    gitlab_token: SecretStr
    assign_tag: str = "project1"
    submission_tag: str = "git"
    since: str | None = None
    submissions_file: str = "submissions.json"
    verify_tls: bool = True
    ca_bundle: str | None = None
    request_timeout: float = 30.0
    stats_concurrency: int = 8
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    @field_validator("gitlab_server")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.strip().rstrip("/")

    @field_validator("since")
    @classmethod
    def _since_must_parse(cls, v: str | None) -> str | None:
        FetchWindow.from_human(v)
        return v

    @field_validator("stats_concurrency")
    @classmethod
    def _at_least_one_worker(cls, v: int) -> int:
        if v < 1:
            msg = "stats_concurrency must be at least 1."
            raise ValueError(msg)
        return v

    @property
    def tls_verify(self) -> ssl.SSLContext | bool:
        """Value for httpx's ``verify=``: a private CA bundle wins over the flag."""
        if self.ca_bundle:
            return ssl.create_default_context(cafile=self.ca_bundle)
        return self.verify_tls

    def audit_options(self) -> AuditOptions:
        """Freeze the audit-relevant settings into one immutable value."""
        return AuditOptions(
            server=self.gitlab_server,
            user=self.gitlab_user,
            token=self.gitlab_token.get_secret_value(),
            assign_tag=self.assign_tag,
            submission_tag=self.submission_tag,
            since=FetchWindow.from_human(self.since).since,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()  # type: ignore[call-arg]
