"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Inner layers raise these; the outermost error-handler translates them.
"""

from __future__ import annotations


class CommitAuditError(Exception):
    """Base exception for the entire application."""


# ── Repository reference ────────────────────────────────────────────────────


class MissingReferenceError(CommitAuditError):
    """The team never submitted a repository URL."""


class InvalidReferenceError(CommitAuditError):
    """The submitted text is not a ``{server}/{namespace}/{project}.git`` URL."""

    def __init__(self, message: str, text: str = "") -> None:
        super().__init__(message)
        self.text = text


# ── GitLab API errors ───────────────────────────────────────────────────────


class TransportError(CommitAuditError):
    """The GitLab host was unreachable, timed out, or returned no payload."""


class RemoteApiError(CommitAuditError):
    """GitLab answered, but with an error payload (``{"message": ...}``)."""

    def __init__(self, message: str, api_message: str = "") -> None:
        super().__init__(message)
        self.api_message = api_message


class DataError(CommitAuditError):
    """An otherwise successful payload lacks an expected field."""


# ── Submission store ────────────────────────────────────────────────────────


class SubmissionStoreError(CommitAuditError):
    """The submission records could not be read or are malformed."""
