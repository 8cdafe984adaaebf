"""JSON-file submission store — implements the SubmissionStore port.

The file holds a list of records::

    [
      {"team_id": "7", "assign_tag": "project1", "submission_tag": "git",
       "text": "https://git.example.edu/cse335/team7.git",
       "submitted_at": "2024-09-03T14:02:00Z"}
    ]

The newest matching record wins.  The file is re-read on every lookup so
edits are picked up without a restart.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from commit_audit.common.time_utils import parse_timestamp
from commit_audit.domain.exceptions import SubmissionStoreError

logger = logging.getLogger(__name__)


class JsonSubmissionStore:
    """Concrete ``SubmissionStore`` backed by a JSON file on disk."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def latest_submission(
        self, team_id: str, assign_tag: str, submission_tag: str
    ) -> str | None:
        """Return the text of the newest matching record, or ``None``."""
        matching = [
            record
            for record in self._load()
            if str(record.get("team_id")) == str(team_id)
            and record.get("assign_tag") == assign_tag
            and record.get("submission_tag") == submission_tag
        ]
        if not matching:
            return None
        newest = max(matching, key=self._submitted_at)
        return newest.get("text")

    def _submitted_at(self, record: dict[str, Any]) -> datetime:
        try:
            return parse_timestamp(record["submitted_at"])
        except (KeyError, TypeError, ValueError) as exc:
            raise SubmissionStoreError(
                f"Submission record in {self._path} has no valid submitted_at: {record!r}"
            ) from exc

    def _load(self) -> list[dict[str, Any]]:
        if not self._path.exists():
            logger.warning("Submission file %s does not exist", self._path)
            return []
        try:
            records = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise SubmissionStoreError(f"Cannot read submissions from {self._path}: {exc}") from exc
        if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
            raise SubmissionStoreError(f"{self._path} must contain a JSON list of submissions.")
        return records
