"""Value objects — self-validating domain primitives."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime

from commit_audit.common.time_utils import ensure_aware, parse_human_time
from commit_audit.domain.exceptions import InvalidReferenceError


@dataclass(frozen=True, slots=True)
class RepositoryReference:
    """Validated repository URL submitted by a team.

    Extracts the namespaced *project_path* from text like
    ``https://git.example.edu/cse335/team7-project.git``.  The URL must live
    on the configured *server* and end in ``.git``.
    """

    server: str
    raw_url: str
    project_path: str

    @classmethod
    def parse(cls, text: str, server: str) -> RepositoryReference:
        """Parse and validate submitted text against a server root."""
        url = text.strip()
        root = server.rstrip("/")
        pattern = re.compile(rf"^{re.escape(root)}/(?P<path>.+/.+)\.git$")
        match = pattern.match(url)
        if not match:
            raise InvalidReferenceError(
                f"Invalid repository URL: '{url}'. "
                f"Expected format: {root}/<namespace>/<project>.git",
                text=url,
            )
        return cls(server=root, raw_url=url, project_path=match["path"])


@dataclass(frozen=True, slots=True)
class FetchWindow:
    """Optional lower bound on commit creation time (exclusive)."""

    since: datetime | None = None

    def __post_init__(self) -> None:
        if self.since is not None:
            object.__setattr__(self, "since", ensure_aware(self.since))

    @classmethod
    def from_human(cls, text: str | None, now: datetime | None = None) -> FetchWindow:
        """Build a window from ``"2024-09-01"``, ``"-1 week"``, ``"last monday"``...

        The string is converted once to an absolute timestamp (relative
        phrases against *now*); naive values are taken as UTC.  Empty or
        ``None`` input yields an open window.
        """
        if text is None or not text.strip():
            return cls()
        return cls(since=parse_human_time(text.strip(), now=now))

    def includes(self, created_at: datetime) -> bool:
        """True when a commit created at *created_at* falls inside the window."""
        if self.since is None:
            return True
        return ensure_aware(created_at) > self.since


@dataclass(frozen=True, slots=True)
class AuditOptions:
    """Everything the audit pipeline needs to know, fixed for one run."""

    server: str
    user: str
    token: str = field(repr=False)
    assign_tag: str
    submission_tag: str
    since: datetime | None = None

    @property
    def window(self) -> FetchWindow:
        return FetchWindow(since=self.since)
