"""Reference resolution — turn a team's submission into a RepositoryReference."""

from __future__ import annotations

import logging

from commit_audit.domain.exceptions import MissingReferenceError
from commit_audit.domain.ports.submission_store import SubmissionStore
from commit_audit.domain.value_objects import AuditOptions, RepositoryReference

logger = logging.getLogger(__name__)


def resolve_reference(
    store: SubmissionStore, team_id: str, options: AuditOptions
) -> RepositoryReference:
    """Look up the team's latest URL submission and parse it.

    Raises :class:`MissingReferenceError` when nothing was ever submitted, and
    :class:`InvalidReferenceError` when the text is not a repository URL on
    ``options.server``.
    """
    text = store.latest_submission(team_id, options.assign_tag, options.submission_tag)
    if text is None or not text.strip():
        raise MissingReferenceError(
            f"Team {team_id} has not submitted a repository URL "
            f"({options.assign_tag}/{options.submission_tag})."
        )
    reference = RepositoryReference.parse(text, options.server)
    logger.debug("Team %s submitted %s", team_id, reference.project_path)
    return reference
