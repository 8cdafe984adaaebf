"""Port: submission store — where teams record their repository URL."""

from __future__ import annotations

from typing import Protocol


class SubmissionStore(Protocol):
    """Abstract contract for looking up a team's submitted text."""

    def latest_submission(
        self, team_id: str, assign_tag: str, submission_tag: str
    ) -> str | None:
        """Return the most recent submitted text, or ``None`` if never submitted."""
        ...
